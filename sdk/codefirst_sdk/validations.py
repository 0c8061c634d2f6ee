"""
Field validations for the CodeFirst SDK.

This module provides both halves of field validation:
- Validation markers, placed on members inside ``typing.Annotated``
- Validators, the normalized values sent to the remote service
- to_validator(), the one-to-one translation between the two

Example:
    >>> from typing import Annotated
    >>> @content_type
    ... class Product:
    ...     sku: Annotated[str, Unique(), Regex(r"^[A-Z]{3}-[0-9]+$")]
    ...     tags: Annotated[list[str], Size(max=10), InValues("new", "sale")]

Invariants:
    - Validators are immutable once constructed
    - Translation is pure and preserves declaration order
    - Unset bounds are None, never zero (zero is a legal minimum)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

FILE_SIZE_UNITS = {
    "Bytes": 1,
    "KB": 1024,
    "MB": 1024 * 1024,
}


class MimeTypeRestriction(Enum):
    """Mime type groups an asset link can be restricted to."""

    ATTACHMENT = "attachment"
    PLAINTEXT = "plaintext"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    RICHTEXT = "richtext"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    PDF_DOCUMENT = "pdfdocument"
    ARCHIVE = "archive"
    CODE = "code"
    MARKUP = "markup"


_MIME_GROUPS = frozenset(r.value for r in MimeTypeRestriction)


def _with_message(body: dict[str, Any], help_text: str | None) -> dict[str, Any]:
    if help_text:
        body["message"] = help_text
    return body


def _bounds(min_value: Any, max_value: Any) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if min_value is not None:
        result["min"] = min_value
    if max_value is not None:
        result["max"] = max_value
    return result


def _unique(values: Any) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


# =============================================================================
# Validators
# =============================================================================


@dataclass(frozen=True)
class SizeValidator:
    """Bounds the length of a text or the number of items in a collection."""

    min: int | None = None
    max: int | None = None
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message({"size": _bounds(self.min, self.max)}, self.help_text)


@dataclass(frozen=True)
class RangeValidator:
    """Bounds a numeric value."""

    min: int | float | None = None
    max: int | float | None = None
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message({"range": _bounds(self.min, self.max)}, self.help_text)


@dataclass(frozen=True)
class LinkContentTypeValidator:
    """Restricts an entry link to the given content type ids."""

    content_type_ids: tuple[str, ...] = ()
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message(
            {"linkContentType": list(self.content_type_ids)}, self.help_text
        )


@dataclass(frozen=True)
class InValuesValidator:
    """Restricts a value to a fixed list."""

    values: tuple[str, ...] = ()
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message({"in": list(self.values)}, self.help_text)


@dataclass(frozen=True)
class MimeTypeValidator:
    """Restricts an asset link to mime type groups."""

    restrictions: tuple[MimeTypeRestriction, ...] = ()
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message(
            {"linkMimetypeGroup": [r.value for r in self.restrictions]}, self.help_text
        )


@dataclass(frozen=True)
class RegexValidator:
    """Requires a text value to match a pattern."""

    expression: str
    flags: str | None = None
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message(
            {"regexp": {"pattern": self.expression, "flags": self.flags}}, self.help_text
        )


@dataclass(frozen=True)
class UniqueValidator:
    """Requires the value to be unique across entries of the content type."""

    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message({"unique": True}, self.help_text)


@dataclass(frozen=True)
class DateRangeValidator:
    """Bounds a date value. Bounds are ``yyyy-MM-dd`` strings."""

    min: str | None = None
    max: str | None = None
    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _with_message({"dateRange": _bounds(self.min, self.max)}, self.help_text)


@dataclass(frozen=True)
class FileSizeValidator:
    """Bounds the file size of a linked asset.

    Bounds are expressed in ``min_unit``/``max_unit`` (Bytes, KB or MB) and
    rendered in bytes on the wire.
    """

    min: int | None = None
    max: int | None = None
    min_unit: str | None = None
    max_unit: str | None = None
    help_text: str | None = None

    @property
    def min_bytes(self) -> int | None:
        return _in_bytes(self.min, self.min_unit)

    @property
    def max_bytes(self) -> int | None:
        return _in_bytes(self.max, self.max_unit)

    def to_dict(self) -> dict[str, Any]:
        return _with_message(
            {"assetFileSize": _bounds(self.min_bytes, self.max_bytes)}, self.help_text
        )


def _in_bytes(value: int | None, unit: str | None) -> int | None:
    if value is None:
        return None
    unit = unit or "Bytes"
    if unit not in FILE_SIZE_UNITS:
        raise ValueError(f"Invalid file size unit: {unit}")
    return value * FILE_SIZE_UNITS[unit]


Validator = Union[
    SizeValidator,
    RangeValidator,
    LinkContentTypeValidator,
    InValuesValidator,
    MimeTypeValidator,
    RegexValidator,
    UniqueValidator,
    DateRangeValidator,
    FileSizeValidator,
]


def is_size_validator(validator: Validator) -> bool:
    """Whether a validator constrains cardinality rather than each element."""
    return isinstance(validator, SizeValidator)


def validator_from_dict(data: dict[str, Any]) -> Validator | None:
    """Parse a validator from its wire form.

    Returns None for validation kinds this SDK does not model. Unknown mime
    type groups are dropped from the restrictions.
    """
    help_text = data.get("message")

    if "size" in data:
        return SizeValidator(data["size"].get("min"), data["size"].get("max"), help_text)
    if "range" in data:
        return RangeValidator(data["range"].get("min"), data["range"].get("max"), help_text)
    if "linkContentType" in data:
        return LinkContentTypeValidator(tuple(data["linkContentType"]), help_text)
    if "in" in data:
        return InValuesValidator(tuple(data["in"]), help_text)
    if "linkMimetypeGroup" in data:
        return MimeTypeValidator(
            tuple(
                MimeTypeRestriction(v) for v in data["linkMimetypeGroup"] if v in _MIME_GROUPS
            ),
            help_text,
        )
    if "regexp" in data:
        return RegexValidator(
            data["regexp"]["pattern"], data["regexp"].get("flags"), help_text
        )
    if "unique" in data:
        return UniqueValidator(help_text)
    if "dateRange" in data:
        return DateRangeValidator(
            data["dateRange"].get("min"), data["dateRange"].get("max"), help_text
        )
    if "assetFileSize" in data:
        # The wire form is always in bytes.
        return FileSizeValidator(
            min=data["assetFileSize"].get("min"),
            max=data["assetFileSize"].get("max"),
            help_text=help_text,
        )
    return None


# =============================================================================
# Validation markers
# =============================================================================


@dataclass(frozen=True)
class Size:
    """Marks a member with a size validation."""

    min: int | None = None
    max: int | None = None
    help_text: str | None = None


@dataclass(frozen=True)
class Range:
    """Marks a member with a range validation."""

    min: int | float | None = None
    max: int | float | None = None
    help_text: str | None = None


@dataclass(frozen=True, init=False)
class LinkContentType:
    """Marks an entry link (or a list of them) with allowed content type ids.

    Example:
        >>> author: Annotated[Entry, LinkContentType("person", "team")]
    """

    content_type_ids: tuple[str, ...]
    help_text: str | None

    def __init__(self, *content_type_ids: str, help_text: str | None = None) -> None:
        object.__setattr__(self, "content_type_ids", _unique(content_type_ids))
        object.__setattr__(self, "help_text", help_text)


@dataclass(frozen=True, init=False)
class InValues:
    """Marks a member with the list of values it may take."""

    values: tuple[str, ...]
    help_text: str | None

    def __init__(self, *values: str, help_text: str | None = None) -> None:
        object.__setattr__(self, "values", tuple(values))
        object.__setattr__(self, "help_text", help_text)


@dataclass(frozen=True, init=False)
class MimeType:
    """Marks an asset link with the mime type groups it accepts."""

    restrictions: tuple[MimeTypeRestriction, ...]
    help_text: str | None

    def __init__(
        self, *restrictions: MimeTypeRestriction | str, help_text: str | None = None
    ) -> None:
        converted = tuple(MimeTypeRestriction(r) for r in restrictions)
        object.__setattr__(self, "restrictions", tuple(dict.fromkeys(converted)))
        object.__setattr__(self, "help_text", help_text)


@dataclass(frozen=True)
class Regex:
    """Marks a text member with a pattern it must match."""

    expression: str
    flags: str | None = None
    help_text: str | None = None


@dataclass(frozen=True)
class Unique:
    """Marks a member as unique across entries."""

    help_text: str | None = None


@dataclass(frozen=True)
class DateRange:
    """Marks a date member with ``yyyy-MM-dd`` bounds."""

    min: str | None = None
    max: str | None = None
    help_text: str | None = None


@dataclass(frozen=True)
class FileSize:
    """Marks an asset link with file size bounds.

    Leave a bound as None to leave it unset; 0 is a real minimum.
    """

    min: int | None = None
    max: int | None = None
    min_unit: str | None = None
    max_unit: str | None = None
    help_text: str | None = None


ValidationMarker = Union[
    Size, Range, LinkContentType, InValues, MimeType, Regex, Unique, DateRange, FileSize
]


def to_validator(marker: Any) -> Validator | None:
    """Translate a validation marker into its validator.

    Args:
        marker: Any member metadata object

    Returns:
        The matching validator, or None if marker is not a validation marker
    """
    if isinstance(marker, Size):
        return SizeValidator(marker.min, marker.max, marker.help_text)
    if isinstance(marker, Range):
        return RangeValidator(marker.min, marker.max, marker.help_text)
    if isinstance(marker, LinkContentType):
        return LinkContentTypeValidator(marker.content_type_ids, marker.help_text)
    if isinstance(marker, InValues):
        return InValuesValidator(marker.values, marker.help_text)
    if isinstance(marker, MimeType):
        return MimeTypeValidator(marker.restrictions, marker.help_text)
    if isinstance(marker, Regex):
        return RegexValidator(marker.expression, marker.flags, marker.help_text)
    if isinstance(marker, Unique):
        return UniqueValidator(marker.help_text)
    if isinstance(marker, DateRange):
        return DateRangeValidator(marker.min, marker.max, marker.help_text)
    if isinstance(marker, FileSize):
        return FileSizeValidator(
            marker.min, marker.max, marker.min_unit, marker.max_unit, marker.help_text
        )
    return None
