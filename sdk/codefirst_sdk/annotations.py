"""
Declarative markers for content types.

This module provides the markers the compiler reads:
- content_type: class decorator marking a class as a content type source
- ContentField: per-member overrides (id, name, kind, flags, item kind)
- IgnoreContentField: excludes a member from the content type

Member markers are placed inside ``typing.Annotated``:

Example:
    >>> @content_type(id="product", display_field="title", order=10)
    ... class Product:
    ...     title: Annotated[str, ContentField(required=True, localized=True)]
    ...     sku: Annotated[str, ContentField(kind=FieldKind.SYMBOL)]
    ...     cache_key: Annotated[str, IgnoreContentField()]

Invariants:
    - Every option is optional; defaults are resolved by the compiler
    - Decorating a class does not change its behavior, only adds metadata
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar, overload

from .schema import FieldKind

C = TypeVar("C", bound=type)

CONTENT_TYPE_ATTR = "__content_type__"


@dataclass(frozen=True)
class ContentTypeInfo:
    """Content type options attached to a decorated class.

    Attributes:
        id: Content type id (defaults to the class name)
        name: Display name (defaults to the class name)
        display_field: Id of the field used as entry title
        description: Description shown in the remote editor
        order: Sort key for processing; lower first
    """

    id: Optional[str] = None
    name: Optional[str] = None
    display_field: Optional[str] = None
    description: Optional[str] = None
    order: int = 0


@overload
def content_type(cls: C) -> C: ...


@overload
def content_type(
    cls: None = None,
    *,
    id: Optional[str] = None,
    name: Optional[str] = None,
    display_field: Optional[str] = None,
    description: Optional[str] = None,
    order: int = 0,
) -> Callable[[C], C]: ...


def content_type(
    cls: Any = None,
    *,
    id: Optional[str] = None,
    name: Optional[str] = None,
    display_field: Optional[str] = None,
    description: Optional[str] = None,
    order: int = 0,
) -> Any:
    """Mark a class as the source of a content type.

    Can be applied bare (``@content_type``) or with options.
    The class is also recorded in the global registry.

    Args:
        id: Content type id
        name: Display name
        display_field: Field used as entry title
        description: Description
        order: Processing order (lower first, ties keep scan order)

    Returns:
        The class, unchanged apart from its ``__content_type__`` attribute
    """
    info = ContentTypeInfo(
        id=id,
        name=name,
        display_field=display_field,
        description=description,
        order=order,
    )

    def decorate(target: C) -> C:
        from .registry import get_registry

        # Set on the class itself so subclasses do not inherit the marker.
        setattr(target, CONTENT_TYPE_ATTR, info)
        get_registry().register(target)
        return target

    if cls is not None:
        return decorate(cls)
    return decorate


def get_content_type_info(cls: Any) -> Optional[ContentTypeInfo]:
    """Return the options of a decorated class, or None.

    Only a class decorated itself counts; subclasses of a decorated class
    are not content types unless decorated too.
    """
    if not isinstance(cls, type):
        return None
    info = cls.__dict__.get(CONTENT_TYPE_ATTR)
    if isinstance(info, ContentTypeInfo):
        return info
    return None


def is_content_type(cls: Any) -> bool:
    """Whether ``cls`` carries the content type marker."""
    return get_content_type_info(cls) is not None


@dataclass(frozen=True)
class ContentField:
    """Per-member field options.

    Attributes:
        id: Field id (defaults to the member name)
        name: Display name (defaults to the member name)
        kind: Field kind (inferred from the member type when None)
        link_type: Link type, "Entry" or "Asset" (inferred when None)
        disabled: Hidden from the editor
        omitted: Left out of delivery API responses
        localized: Has one value per locale
        required: Must have a value before publishing
        items_kind: Item kind for collections (inferred when None)
        items_link_type: Item link type for collections (inferred when None)
    """

    id: Optional[str] = None
    name: Optional[str] = None
    kind: Optional[FieldKind] = None
    link_type: Optional[str] = None
    disabled: bool = False
    omitted: bool = False
    localized: bool = False
    required: bool = False
    items_kind: Optional[FieldKind] = None
    items_link_type: Optional[str] = None


@dataclass(frozen=True)
class IgnoreContentField:
    """Excludes a member from the generated content type."""
