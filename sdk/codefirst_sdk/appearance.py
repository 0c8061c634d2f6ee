"""
Editor appearance for the CodeFirst SDK.

This module maps per-member appearance markers to widget controls:
- FieldAppearance and its variants, placed on members inside ``typing.Annotated``
- WidgetControl, the binding of one field to one editor widget
- EditorInterface, the remote collection of controls for a content type

The translator does not know the owning field's resolved id, so controls
it produces carry an empty ``field_id`` until the compiler fills it in.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union


class SystemWidgetIds:
    """Widget ids built into the remote editor."""

    BOOLEAN = "boolean"
    RATING = "rating"
    DATE_PICKER = "datePicker"
    SINGLE_LINE = "singleLine"
    MULTIPLE_LINE = "multipleLine"
    MARKDOWN = "markdown"
    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    TAG_EDITOR = "tagEditor"
    NUMBER_EDITOR = "numberEditor"
    LOCATION_EDITOR = "locationEditor"
    ENTRY_LINK_EDITOR = "entryLinkEditor"
    ASSET_LINK_EDITOR = "assetLinkEditor"
    SLUG_EDITOR = "slugEditor"
    URL_EDITOR = "urlEditor"


class DateFormat(Enum):
    """Date formats offered by the date picker widget."""

    DATE_ONLY = "dateonly"
    TIME = "time"
    TIME_Z = "timeZ"


# =============================================================================
# Widget settings
# =============================================================================


@dataclass(frozen=True)
class WidgetSettings:
    """Settings shared by every widget."""

    help_text: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.help_text:
            result["helpText"] = self.help_text
        return result


@dataclass(frozen=True)
class BooleanWidgetSettings(WidgetSettings):
    """Labels for the two choices of the boolean widget."""

    true_label: str | None = None
    false_label: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.true_label is not None:
            result["trueLabel"] = self.true_label
        if self.false_label is not None:
            result["falseLabel"] = self.false_label
        return result


@dataclass(frozen=True)
class RatingWidgetSettings(WidgetSettings):
    """Number of stars shown by the rating widget."""

    star_count: int = 5

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["stars"] = self.star_count
        return result


@dataclass(frozen=True)
class DatePickerWidgetSettings(WidgetSettings):
    """Date and clock format of the date picker widget."""

    date_format: DateFormat = DateFormat.TIME_Z
    clock_format: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["format"] = self.date_format.value
        if self.clock_format is not None:
            result["ampm"] = self.clock_format
        return result


ControlSettings = Union[
    WidgetSettings, BooleanWidgetSettings, RatingWidgetSettings, DatePickerWidgetSettings
]


def settings_from_dict(widget_id: str, data: dict[str, Any] | None) -> ControlSettings:
    """Parse widget settings, picking the variant from the widget id."""
    data = data or {}
    help_text = data.get("helpText")

    if widget_id == SystemWidgetIds.BOOLEAN:
        return BooleanWidgetSettings(
            help_text=help_text,
            true_label=data.get("trueLabel"),
            false_label=data.get("falseLabel"),
        )
    if widget_id == SystemWidgetIds.RATING:
        return RatingWidgetSettings(help_text=help_text, star_count=int(data.get("stars", 5)))
    if widget_id == SystemWidgetIds.DATE_PICKER:
        return DatePickerWidgetSettings(
            help_text=help_text,
            date_format=DateFormat(data.get("format", DateFormat.TIME_Z.value)),
            clock_format=data.get("ampm"),
        )
    return WidgetSettings(help_text=help_text)


@dataclass(frozen=True)
class WidgetControl:
    """Binds one field of a content type to an editor widget.

    Attributes:
        field_id: Id of the field the control applies to
        widget_id: Id of the widget (built-in or UI extension)
        settings: Widget-specific settings
    """

    field_id: str
    widget_id: str
    settings: ControlSettings = field(default_factory=WidgetSettings)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"fieldId": self.field_id, "widgetId": self.widget_id}
        settings = self.settings.to_dict()
        if settings:
            result["settings"] = settings
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WidgetControl:
        widget_id = data.get("widgetId", "")
        return cls(
            field_id=data["fieldId"],
            widget_id=widget_id,
            settings=settings_from_dict(widget_id, data.get("settings")),
        )


@dataclass
class EditorInterface:
    """The remote editor configuration of one content type.

    Attributes:
        controls: Widget controls in remote order
        version: Version token for optimistic concurrency
    """

    controls: list[WidgetControl] = field(default_factory=list)
    version: int | None = None

    def merge(self, controls: list[WidgetControl]) -> int:
        """Replace controls whose field id matches one of ``controls``.

        Controls for fields not present remotely are skipped.

        Returns:
            Number of controls replaced
        """
        replaced = 0
        for control in controls:
            index = next(
                (i for i, c in enumerate(self.controls) if c.field_id == control.field_id),
                -1,
            )
            if index == -1:
                continue
            self.controls[index] = control
            replaced += 1
        return replaced

    def to_dict(self) -> dict[str, Any]:
        return {"controls": [c.to_dict() for c in self.controls]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EditorInterface:
        return cls(
            controls=[WidgetControl.from_dict(c) for c in data.get("controls", [])],
            version=data.get("sys", {}).get("version"),
        )


# =============================================================================
# Appearance markers
# =============================================================================


@dataclass(frozen=True)
class FieldAppearance:
    """Marks a member with the editor widget to render it with.

    Attributes:
        widget_id: Built-in widget id or the id of a UI extension
        help_text: Help text shown next to the field
    """

    widget_id: str
    help_text: str | None = None

    def settings(self) -> ControlSettings:
        return WidgetSettings(help_text=self.help_text)


@dataclass(frozen=True, init=False)
class BooleanAppearance(FieldAppearance):
    """Renders a boolean member as a labelled yes/no choice."""

    true_label: str = ""
    false_label: str = ""

    def __init__(self, true_label: str, false_label: str, help_text: str | None = None) -> None:
        object.__setattr__(self, "widget_id", SystemWidgetIds.BOOLEAN)
        object.__setattr__(self, "help_text", help_text)
        object.__setattr__(self, "true_label", true_label)
        object.__setattr__(self, "false_label", false_label)

    def settings(self) -> ControlSettings:
        return BooleanWidgetSettings(
            help_text=self.help_text, true_label=self.true_label, false_label=self.false_label
        )


@dataclass(frozen=True, init=False)
class RatingAppearance(FieldAppearance):
    """Renders a numeric member as a star rating."""

    star_count: int = 5

    def __init__(self, star_count: int, help_text: str | None = None) -> None:
        object.__setattr__(self, "widget_id", SystemWidgetIds.RATING)
        object.__setattr__(self, "help_text", help_text)
        object.__setattr__(self, "star_count", star_count)

    def settings(self) -> ControlSettings:
        return RatingWidgetSettings(help_text=self.help_text, star_count=self.star_count)


@dataclass(frozen=True, init=False)
class DatePickerAppearance(FieldAppearance):
    """Renders a date member with the date picker."""

    date_format: DateFormat = DateFormat.TIME_Z
    clock_format: str | None = None

    def __init__(
        self,
        date_format: DateFormat | str,
        clock_format: str | None = None,
        help_text: str | None = None,
    ) -> None:
        object.__setattr__(self, "widget_id", SystemWidgetIds.DATE_PICKER)
        object.__setattr__(self, "help_text", help_text)
        object.__setattr__(self, "date_format", DateFormat(date_format))
        object.__setattr__(self, "clock_format", clock_format)

    def settings(self) -> ControlSettings:
        return DatePickerWidgetSettings(
            help_text=self.help_text,
            date_format=self.date_format,
            clock_format=self.clock_format,
        )


def to_widget_control(appearance: FieldAppearance) -> WidgetControl:
    """Translate an appearance marker into a widget control.

    The returned control has an empty ``field_id``; use
    ``dataclasses.replace(control, field_id=...)`` or bind_control().
    """
    return WidgetControl(
        field_id="",
        widget_id=appearance.widget_id,
        settings=appearance.settings(),
    )


def bind_control(control: WidgetControl, field_id: str) -> WidgetControl:
    """Return ``control`` bound to ``field_id``."""
    return replace(control, field_id=field_id)
