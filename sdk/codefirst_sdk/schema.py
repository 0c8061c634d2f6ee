"""
Schema types for the CodeFirst SDK.

This module provides the compiled schema document:
- FieldKind: Closed set of field kinds
- ItemsSchema: Item schema of a collection field
- FieldDefinition: One field of a content type
- ContentTypeDefinition: A content type with its ordered fields
- CompiledContentType: A definition plus its widget controls

Definitions are produced by the compiler and sent to the remote service by
the synchronizer. They are never persisted locally.

Invariants:
    - Field ids are unique within a content type
    - Field order is the declaration order of the source members
    - version is set only when the id already exists remotely

Example:
    >>> ct = ContentTypeDefinition(
    ...     id="person",
    ...     name="Person",
    ...     fields=[FieldDefinition(id="name", name="Name", kind=FieldKind.TEXT)],
    ... )
    >>> ct.to_dict()["sys"]
    {'id': 'person'}
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from typing import Any

from .appearance import WidgetControl
from .validations import Validator, validator_from_dict


class FieldKind(Enum):
    """Supported field kinds."""

    INTEGER = "Integer"
    NUMBER = "Number"
    TEXT = "Text"
    SYMBOL = "Symbol"
    DATE = "Date"
    BOOLEAN = "Boolean"
    LINK = "Link"
    ARRAY = "Array"
    OBJECT = "Object"
    LOCATION = "Location"

    @classmethod
    def from_str(cls, value: str) -> FieldKind:
        """Convert string to FieldKind."""
        for kind in cls:
            if kind.value == value:
                return kind
        raise ValueError(f"Invalid field kind: {value}")


class LinkType:
    """Link targets understood by the remote service."""

    ENTRY = "Entry"
    ASSET = "Asset"


def _kind_from_wire(value: str | None) -> FieldKind | None:
    """Parse a remote field kind; kinds this SDK does not model become None."""
    for kind in FieldKind:
        if kind.value == value:
            return kind
    return None


def _validations_from_dict(data: list[dict[str, Any]] | None) -> list[Validator]:
    validations = []
    for item in data or []:
        validator = validator_from_dict(item)
        if validator is not None:
            validations.append(validator)
    return validations


@dataclass
class ItemsSchema:
    """Schema of the items of a collection field.

    Attributes:
        kind: Item kind (Link or Symbol)
        link_type: "Entry" or "Asset" for link items
        validations: Validators applied to each item
    """

    kind: FieldKind | None = None
    link_type: str | None = None
    validations: list[Validator] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": self.kind.value if self.kind else None,
            "validations": [v.to_dict() for v in self.validations],
        }
        if self.link_type:
            result["linkType"] = self.link_type
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ItemsSchema:
        kind = data.get("type")
        return cls(
            kind=_kind_from_wire(kind),
            link_type=data.get("linkType"),
            validations=_validations_from_dict(data.get("validations")),
        )


@dataclass
class FieldDefinition:
    """Field definition within a content type.

    Attributes:
        id: Field id, unique within the content type
        name: Display name
        kind: Field kind
        disabled: Hidden from the editor
        omitted: Left out of delivery responses
        localized: One value per locale
        required: Must be set before publishing
        link_type: "Entry" or "Asset" for link fields
        validations: Validators applied to the field value
        items: Item schema, present only for collection fields
    """

    id: str
    name: str
    kind: FieldKind | None
    disabled: bool = False
    omitted: bool = False
    localized: bool = False
    required: bool = False
    link_type: str | None = None
    validations: list[Validator] = dataclass_field(default_factory=list)
    items: ItemsSchema | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the remote wire shape."""
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value if self.kind else None,
            "disabled": self.disabled,
            "omitted": self.omitted,
            "localized": self.localized,
            "required": self.required,
            "validations": [v.to_dict() for v in self.validations],
        }
        if self.link_type:
            result["linkType"] = self.link_type
        if self.items is not None:
            result["items"] = self.items.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldDefinition:
        """Create from the remote wire shape."""
        kind = data.get("type")
        items = data.get("items")
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            kind=_kind_from_wire(kind),
            disabled=bool(data.get("disabled", False)),
            omitted=bool(data.get("omitted", False)),
            localized=bool(data.get("localized", False)),
            required=bool(data.get("required", False)),
            link_type=data.get("linkType"),
            validations=_validations_from_dict(data.get("validations")),
            items=ItemsSchema.from_dict(items) if items else None,
        )


@dataclass
class ContentTypeDefinition:
    """Definition of a content type.

    Attributes:
        id: Content type id (identity)
        name: Display name
        display_field: Id of the field used as entry title
        description: Description
        fields: Fields in declaration order
        version: Remote version token; None for content types not yet created
    """

    id: str
    name: str
    display_field: str | None = None
    description: str | None = None
    fields: list[FieldDefinition] = dataclass_field(default_factory=list)
    version: int | None = None

    def get_field(self, field_id: str) -> FieldDefinition | None:
        """Get field by id."""
        for f in self.fields:
            if f.id == field_id:
                return f
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the remote wire shape."""
        sys: dict[str, Any] = {"id": self.id}
        if self.version is not None:
            sys["version"] = self.version
        return {
            "sys": sys,
            "name": self.name,
            "displayField": self.display_field,
            "description": self.description,
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentTypeDefinition:
        """Create from the remote wire shape."""
        sys = data.get("sys", {})
        return cls(
            id=sys["id"],
            name=data.get("name", sys["id"]),
            display_field=data.get("displayField"),
            description=data.get("description"),
            fields=[FieldDefinition.from_dict(f) for f in data.get("fields", [])],
            version=sys.get("version"),
        )


@dataclass
class CompiledContentType:
    """A compiled content type and the widget controls of its fields.

    Attributes:
        content_type: The compiled definition
        controls: Widget controls, one per field that declared an appearance
    """

    content_type: ContentTypeDefinition
    controls: list[WidgetControl] = dataclass_field(default_factory=list)

    @property
    def id(self) -> str:
        return self.content_type.id
