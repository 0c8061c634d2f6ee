"""
Compilation of decorated classes into content type definitions.

For every class, the compiler walks the annotated members in declaration
order and builds one FieldDefinition per eligible member:

    @content_type(id="post", display_field="title")
    class Post:
        title: Annotated[str, ContentField(required=True), Size(max=120)]
        tags: Annotated[list[str], Size(max=5), InValues("news", "tech")]
        author: Annotated[Person, RatingAppearance(5)]

compiles to a ``post`` content type with fields ``title`` (Text), ``tags``
(Array of Symbol; Size on the field, InValues on the items) and ``author``
(Link to Entry), plus one widget control for ``author``.

Invariants:
    - Compilation is pure; compiling twice yields equal definitions
    - Missing options fall back to defaults, never raise
    - Types are processed by ``order``, ties keep input order
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import (
    Annotated,
    Any,
    ClassVar,
    Final,
    Optional,
    get_args,
    get_origin,
    get_type_hints,
)

from .annotations import (
    ContentField,
    ContentTypeInfo,
    IgnoreContentField,
    get_content_type_info,
)
from .appearance import FieldAppearance, WidgetControl, bind_control, to_widget_control
from .converter import (
    field_kind,
    is_collection,
    item_kind,
    item_link_type,
    link_type,
)
from .schema import (
    CompiledContentType,
    ContentTypeDefinition,
    FieldDefinition,
    FieldKind,
    ItemsSchema,
)
from .validations import is_size_validator, to_validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Member:
    """An annotated member of a class.

    Attributes:
        name: Member name
        type: Declared type, without ``Annotated`` metadata
        metadata: Objects attached with ``Annotated``, in declaration order
    """

    name: str
    type: Any
    metadata: tuple[Any, ...] = ()

    def first(self, marker_type: type) -> Any:
        """First metadata object of ``marker_type``, or None."""
        for item in self.metadata:
            if isinstance(item, marker_type):
                return item
        return None

    def has(self, marker_type: type) -> bool:
        return self.first(marker_type) is not None


def initialize_content_types(types: Iterable[type]) -> Iterator[CompiledContentType]:
    """Compile content type classes, lowest ``order`` first.

    Args:
        types: Decorated classes, e.g. the output of load_types()

    Yields:
        One CompiledContentType per class
    """
    ordered = sorted(types, key=_order)
    for cls in ordered:
        yield compile_content_type(cls)


def _order(cls: type) -> int:
    info = get_content_type_info(cls)
    return info.order if info is not None else 0


def compile_content_type(cls: type) -> CompiledContentType:
    """Compile a single class into a content type and its widget controls."""
    info = get_content_type_info(cls) or ContentTypeInfo()

    fields: list[FieldDefinition] = []
    controls: list[WidgetControl] = []

    for member in members(cls):
        if not is_eligible(cls, member):
            continue

        field_def = compile_field(member)
        fields.append(field_def)

        appearance = member.first(FieldAppearance)
        if appearance is not None:
            controls.append(bind_control(to_widget_control(appearance), field_def.id))

    definition = ContentTypeDefinition(
        id=info.id or cls.__name__,
        name=info.name or cls.__name__,
        display_field=info.display_field,
        description=info.description,
        fields=fields,
    )
    logger.debug(
        f"Compiled content type '{definition.id}' with {len(fields)} field(s) "
        f"and {len(controls)} control(s)"
    )
    return CompiledContentType(content_type=definition, controls=controls)


def compile_field(member: Member) -> FieldDefinition:
    """Build the field definition of one eligible member."""
    options: ContentField = member.first(ContentField) or ContentField()

    kind = _as_kind(options.kind) or field_kind(member.type)
    field_link_type = options.link_type
    if field_link_type is None and kind == FieldKind.LINK:
        field_link_type = link_type(member.type)

    items = None
    if is_collection(member.type):
        items = ItemsSchema(
            kind=_as_kind(options.items_kind) or item_kind(member.type),
            link_type=options.items_link_type or item_link_type(member.type),
        )

    field_def = FieldDefinition(
        id=options.id or member.name,
        name=options.name or member.name,
        kind=kind,
        disabled=options.disabled,
        omitted=options.omitted,
        localized=options.localized,
        required=options.required,
        link_type=field_link_type,
        items=items,
    )

    for marker in member.metadata:
        validator = to_validator(marker)
        if validator is None:
            continue
        # Size limits the number of items; everything else applies per item.
        if items is not None and not is_size_validator(validator):
            items.validations.append(validator)
        else:
            field_def.validations.append(validator)

    return field_def


def _as_kind(value: FieldKind | str | None) -> Optional[FieldKind]:
    if value is None or isinstance(value, FieldKind):
        return value
    return FieldKind.from_str(value)


# =============================================================================
# Member discovery
# =============================================================================


def members(cls: type) -> list[Member]:
    """Annotated members of ``cls`` in declaration order, bases first."""
    try:
        hints = get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        logger.warning(f"Could not resolve all annotations of {cls.__qualname__}: {e}")
        hints = _resolve_each(cls)

    result = []
    for name, hint in hints.items():
        tp, metadata = split_annotated(hint)
        result.append(Member(name=name, type=tp, metadata=metadata))
    return result


def _resolve_each(cls: type) -> dict[str, Any]:
    """Resolve annotations one by one; unresolvable ones become Any."""
    hints: dict[str, Any] = {}
    for base in reversed(cls.__mro__):
        for name, value in inspect.get_annotations(base).items():
            hints[name] = _resolve_one(base, name, value)
    return hints


def _resolve_one(base: type, name: str, value: Any) -> Any:
    if not isinstance(value, str):
        return value
    # A single-member class keeps ClassVar legal and resolves in the module of base.
    holder = type(
        base.__name__,
        (),
        {"__annotations__": {name: value}, "__module__": base.__module__},
    )
    try:
        return get_type_hints(holder, localns=dict(vars(base)), include_extras=True)[name]
    except (NameError, AttributeError, TypeError, SyntaxError):
        logger.warning(f"Unresolved annotation {base.__qualname__}.{name}: {value}")
        return Any


def split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Split ``Annotated[T, *metadata]`` into ``(T, metadata)``.

    ``Optional[Annotated[T, ...]]`` is split into ``(Optional[T], metadata)``.
    """
    if get_origin(hint) is Annotated:
        return get_args(hint)[0], tuple(hint.__metadata__)

    args = get_args(hint)
    if type(None) in args and len(args) == 2:
        inner = next(a for a in args if a is not type(None))
        if get_origin(inner) is Annotated:
            return Optional[get_args(inner)[0]], tuple(inner.__metadata__)

    return hint, ()


def is_eligible(cls: type, member: Member) -> bool:
    """Whether a member becomes a field.

    Excluded are ClassVar and Final members, private names, members exposed
    through a read-only property, and members marked IgnoreContentField.
    """
    if member.name.startswith("_"):
        return False
    if member.type in (ClassVar, Final) or get_origin(member.type) in (ClassVar, Final):
        return False
    attr = _static_attr(cls, member.name)
    if isinstance(attr, property) and attr.fset is None:
        return False
    if member.has(IgnoreContentField):
        return False
    return True


def _static_attr(cls: type, name: str) -> Any:
    for base in cls.__mro__:
        if name in base.__dict__:
            return base.__dict__[name]
    return None
