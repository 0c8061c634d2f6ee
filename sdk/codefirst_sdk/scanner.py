"""
Discovery of content type classes.

load_types() imports a scope (a module or package path) and returns every
class defined in it that carries the @content_type marker. Packages are
walked recursively. Classes are returned in discovery order; sorting by
``order`` is left to the compiler.

Example:
    >>> types = load_types("myapp.content")
    >>> definitions = list(initialize_content_types(types))
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType

from .annotations import is_content_type
from .errors import ScopeNotFoundError
from .registry import get_registry

logger = logging.getLogger(__name__)

# Empty names raise ValueError, relative names without a package TypeError.
_IMPORT_ERRORS = (ImportError, ValueError, TypeError)


def load_types(scope: str | ModuleType | None = None) -> list[type]:
    """Load all content type classes in a scope.

    Args:
        scope: Dotted module path, an imported module, or None for every
            class recorded in the global registry

    Returns:
        Content type classes in discovery order

    Raises:
        ScopeNotFoundError: If the scope cannot be imported
    """
    if scope is None:
        return list(get_registry().types())

    module = _import_scope(scope)
    modules = [module]
    if hasattr(module, "__path__"):
        modules.extend(_walk_package(module))

    found: list[type] = []
    for mod in modules:
        for cls in _module_types(mod):
            if cls not in found:
                found.append(cls)

    logger.debug(f"Found {len(found)} content type(s) in {module.__name__}")
    return found


def _import_scope(scope: str | ModuleType) -> ModuleType:
    if isinstance(scope, ModuleType):
        return scope
    try:
        return importlib.import_module(scope)
    except _IMPORT_ERRORS as e:
        raise ScopeNotFoundError(f"Cannot load scope '{scope}': {e}", scope=scope) from e


def _walk_package(package: ModuleType) -> list[ModuleType]:
    modules = []
    for info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
        try:
            modules.append(importlib.import_module(info.name))
        except _IMPORT_ERRORS as e:
            raise ScopeNotFoundError(
                f"Cannot load module '{info.name}': {e}", scope=info.name
            ) from e
    return modules


def _module_types(module: ModuleType) -> list[type]:
    """Content type classes defined in ``module``, in definition order.

    Classes merely imported into the module are skipped; they belong to the
    module that defines them.
    """
    exported = getattr(module, "__all__", None)
    result = []
    for name, obj in vars(module).items():
        if not inspect.isclass(obj) or not is_content_type(obj):
            continue
        if obj.__module__ != module.__name__:
            continue
        if exported is not None and name not in exported:
            continue
        if name.startswith("_"):
            continue
        result.append(obj)
    return result
