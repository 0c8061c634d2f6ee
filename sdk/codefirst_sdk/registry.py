"""
Content type registry for the CodeFirst SDK.

This module keeps track of classes decorated with @content_type:
- Recording decorated classes in decoration order
- Lookup by class name
- Schema fingerprinting of compiled definitions

The registry can be frozen once all schema modules are imported.

Example:
    >>> from codefirst_sdk import get_registry, content_type
    >>>
    >>> @content_type
    ... class Person:
    ...     name: str
    >>> Person in get_registry()
    True
"""

from __future__ import annotations

import hashlib
import json
import threading
from collections.abc import Iterable, Iterator

from .schema import ContentTypeDefinition

# Global registry
_global_registry: ContentTypeRegistry | None = None
_registry_lock = threading.Lock()


class RegistryFrozenError(Exception):
    """Registry is frozen and cannot be modified."""

    pass


class ContentTypeRegistry:
    """Registry of content type source classes.

    Content type ids are not checked for collisions here; the remote
    service rejects duplicates.

    Example:
        >>> registry = ContentTypeRegistry()
        >>> registry.register(Person)
        >>> registry.freeze()
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._types: dict[str, type] = {}
        self._frozen = False
        self._lock = threading.Lock()

    @property
    def frozen(self) -> bool:
        """Whether registry is frozen."""
        return self._frozen

    def register(self, cls: type) -> None:
        """Register a content type class.

        Registering the same class twice is a no-op.

        Raises:
            RegistryFrozenError: If registry is frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(
                    f"Cannot register {cls.__qualname__}: registry is frozen"
                )
            self._types.setdefault(_key(cls), cls)

    def get(self, name: str) -> type | None:
        """Get a registered class by name or qualified name."""
        for key, cls in self._types.items():
            if key == name or cls.__name__ == name:
                return cls
        return None

    def types(self) -> Iterator[type]:
        """Iterate over registered classes in registration order."""
        yield from list(self._types.values())

    def freeze(self) -> None:
        """Freeze the registry.

        Raises:
            RegistryFrozenError: If already frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Registry is already frozen")
            self._frozen = True

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, cls: object) -> bool:
        return isinstance(cls, type) and self._types.get(_key(cls)) is cls


def _key(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def fingerprint(definitions: Iterable[ContentTypeDefinition]) -> str:
    """Compute a SHA-256 fingerprint of compiled definitions.

    Versions are ignored so the fingerprint only changes with the schema.
    """
    schema = []
    for definition in definitions:
        data = definition.to_dict()
        data["sys"].pop("version", None)
        schema.append(data)
    schema.sort(key=lambda d: d["sys"]["id"])
    canonical = json.dumps(schema, sort_keys=True, separators=(",", ":"))
    hash_bytes = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
    return f"sha256:{hash_bytes}"


def get_registry() -> ContentTypeRegistry:
    """Get the global content type registry."""
    global _global_registry
    with _registry_lock:
        if _global_registry is None:
            _global_registry = ContentTypeRegistry()
        return _global_registry


def reset_registry() -> None:
    """Reset the global registry (for testing only)."""
    global _global_registry
    with _registry_lock:
        _global_registry = None
