"""
Value shapes with a dedicated field kind.

Members declared with these types compile to specific field kinds:
- Asset (and subclasses): a link to a binary asset
- Entry / Entry[T]: a link to an entry of another content type
- Location: a geographic coordinate

Example:
    >>> @content_type
    ... class Store:
    ...     logo: Asset
    ...     manager: Entry[Person]
    ...     position: Location
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class Asset:
    """A binary asset (image, document, video...) stored by the remote service.

    Attributes:
        id: Asset id
        title: Asset title
        description: Asset description
        file: File metadata (url, contentType, details)
    """

    id: str = ""
    title: Optional[str] = None
    description: Optional[str] = None
    file: dict[str, Any] = field(default_factory=dict)


@dataclass
class Entry(Generic[T]):
    """An entry of another content type, referenced by id.

    Attributes:
        id: Entry id
        fields: Typed field values of the linked entry
    """

    id: str = ""
    fields: Optional[T] = None


@dataclass(frozen=True)
class Location:
    """A geographic coordinate.

    Attributes:
        lat: Latitude in degrees
        lon: Longitude in degrees
    """

    lat: float = 0.0
    lon: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"lat": self.lat, "lon": self.lon}
