"""
Conversion of member types to field kinds.

field_kind() maps a declared Python type to a FieldKind, first match wins:
    1. int (and Optional[int])                 -> Integer
    2. float, Decimal (and Optional)           -> Number
    3. str                                     -> Text
    4. datetime, date (and Optional)           -> Date
    5. bool (and Optional[bool])               -> Boolean
    6. Asset, Entry[T], any @content_type class -> Link
    7. list, tuple, set, any other iterable    -> Array
    8. Location                                -> Location
    9. anything else (dict included)           -> Object

Invariants:
    - The kind depends only on the type, never on the member name or position
    - Items of a collection are Link or Symbol, never another kind
    - Non-collections have no item kind
"""

from __future__ import annotations

import collections.abc
import datetime
import decimal
import types
from typing import Any, Annotated, Optional, Union, get_args, get_origin

from .annotations import is_content_type
from .models import Asset, Entry, Location
from .schema import FieldKind, LinkType

_NUMBER_TYPES = (float, decimal.Decimal)
_DATE_TYPES = (datetime.datetime, datetime.date)

_NOT_COLLECTIONS = (str, bytes, bytearray, collections.abc.Mapping, Asset, Entry)

_UNION_TYPES: tuple[Any, ...] = (Union,)
if hasattr(types, "UnionType"):
    _UNION_TYPES += (types.UnionType,)


def unwrap(tp: Any) -> Any:
    """Strip ``Annotated`` metadata and ``Optional`` from a type."""
    if get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    if get_origin(tp) in _UNION_TYPES:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return unwrap(args[0])
    return tp


def _class_of(tp: Any) -> Any:
    """The runtime class behind a (possibly parameterised) type."""
    origin = get_origin(tp)
    return origin if origin is not None else tp


def _is_subclass(tp: Any, classes: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, classes)


def is_asset(tp: Any) -> bool:
    """Whether ``tp`` is the binary asset shape."""
    return _is_subclass(_class_of(unwrap(tp)), Asset)


def is_entry(tp: Any) -> bool:
    """Whether ``tp`` is a linked entry: Entry, Entry[T] or a content type class."""
    cls = _class_of(unwrap(tp))
    return _is_subclass(cls, Entry) or is_content_type(cls)


def is_collection(tp: Any) -> bool:
    """Whether ``tp`` holds a collection of elements.

    Anything iterable counts, except strings, bytes, mappings and the link
    shapes.
    """
    cls = _class_of(unwrap(tp))
    if not isinstance(cls, type):
        return False
    if issubclass(cls, _NOT_COLLECTIONS) or is_content_type(cls):
        return False
    return issubclass(cls, collections.abc.Iterable)


def field_kind(tp: Any) -> FieldKind:
    """Convert a member type to a field kind.

    Args:
        tp: The declared type, possibly Optional or Annotated

    Returns:
        The field kind
    """
    tp = unwrap(tp)
    cls = _class_of(tp)

    if cls is int:
        return FieldKind.INTEGER
    if cls in _NUMBER_TYPES:
        return FieldKind.NUMBER
    if cls is str:
        return FieldKind.TEXT
    if cls in _DATE_TYPES:
        return FieldKind.DATE
    if cls is bool:
        return FieldKind.BOOLEAN
    if is_asset(tp) or is_entry(tp):
        return FieldKind.LINK
    if is_collection(tp):
        return FieldKind.ARRAY
    if _is_subclass(cls, Location):
        return FieldKind.LOCATION
    return FieldKind.OBJECT


def link_type(tp: Any) -> Optional[str]:
    """Link type of a member type: "Asset", "Entry" or None."""
    if is_asset(tp):
        return LinkType.ASSET
    if is_entry(tp):
        return LinkType.ENTRY
    return None


def element_type(tp: Any) -> Any:
    """Element type of a collection type, or None for non-collections.

    A bare collection (``list``) has element type ``Any``.
    """
    tp = unwrap(tp)
    if not is_collection(tp):
        return None
    args = [a for a in get_args(tp) if a is not Ellipsis]
    if not args:
        return Any
    return args[0]


def item_kind(tp: Any) -> Optional[FieldKind]:
    """Item kind of a collection type.

    Links keep their kind; every other element kind becomes Symbol.
    """
    element = element_type(tp)
    if element is None:
        return None
    if field_kind(element) == FieldKind.LINK:
        return FieldKind.LINK
    return FieldKind.SYMBOL


def item_link_type(tp: Any) -> Optional[str]:
    """Link type of the elements of a collection type."""
    element = element_type(tp)
    if element is None:
        return None
    return link_type(element)
