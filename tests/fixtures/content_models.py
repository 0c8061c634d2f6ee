"""
Content type classes covering every member kind and marker.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, ClassVar, Optional

from sdk.codefirst_sdk.annotations import ContentField, IgnoreContentField, content_type
from sdk.codefirst_sdk.appearance import (
    BooleanAppearance,
    DateFormat,
    DatePickerAppearance,
    RatingAppearance,
)
from sdk.codefirst_sdk.models import Asset, Entry, Location
from sdk.codefirst_sdk.schema import FieldKind
from sdk.codefirst_sdk.validations import (
    FileSize,
    InValues,
    LinkContentType,
    MimeType,
    MimeTypeRestriction,
    Range,
    Regex,
    Size,
    Unique,
)


@content_type(id="person", name="Person", display_field="name", order=10)
class Person:
    name: Annotated[str, ContentField(required=True)]
    age: int
    email: Annotated[Optional[str], Unique()]


@content_type(
    id="something",
    name="SomethingElse",
    display_field="heading",
    description="Every marker at once",
    order=25,
)
class ClassWithAttributes:
    title: Annotated[
        str,
        ContentField(id="heading", name="Heading", localized=True),
        Size(min=1, max=120),
        Regex(r"^[A-Z]", flags="i"),
        Unique(help_text="Must be unique"),
    ]
    rating: Annotated[int, Range(min=1, max=5), RatingAppearance(5)]
    published: Annotated[bool, BooleanAppearance("Yes", "No", help_text="Visible?")]
    people: Annotated[list[Person], Size(max=3), LinkContentType("person")]
    tags: Annotated[list[str], InValues("news", "tech")]
    cache_key: Annotated[str, IgnoreContentField()]
    schema_version: ClassVar[int] = 1
    _secret: str
    summary: str

    @property
    def summary(self) -> str:
        return self.title


@content_type(id="store", display_field="name", order=10)
class Store:
    name: str
    logo: Annotated[
        Asset,
        MimeType(MimeTypeRestriction.IMAGE),
        FileSize(max=2, max_unit="MB"),
    ]
    manager: Entry[Person]
    position: Location
    opened: Annotated[datetime, DatePickerAppearance(DateFormat.DATE_ONLY)]
    revenue: Decimal
    score: Optional[float]
    metadata: dict
    gallery: list[Asset]
    sku: Annotated[str, ContentField(kind=FieldKind.SYMBOL)]


@content_type
class Note:
    body: str


class Employee(Person):
    """Inherits from a content type but is not one."""

    employee_number: int
