"""
CodeFirst SDK - Content types from annotated Python classes.

This SDK derives a remote content service's schema from ordinary classes:
- Declarative markers (content_type, ContentField, validations, appearances)
- A compiler producing content type definitions and widget controls
- A synchronizer pushing definitions through a ManagementClient

Example:
    >>> from typing import Annotated
    >>> from codefirst_sdk import (
    ...     CodeFirstSettings, ContentField, Size, content_type,
    ...     create_content_types_from_module,
    ... )
    >>>
    >>> @content_type(display_field="title")
    ... class Article:
    ...     title: Annotated[str, ContentField(required=True), Size(max=120)]
    ...     tags: list[str]
    >>>
    >>> settings = CodeFirstSettings(space_id="abc123", publish_automatically=True)
    >>> created = await create_content_types_from_module("myapp.content", settings)

Invariants:
    - Compilation is pure and deterministic
    - Synchronization only checks id existence, it does not diff fields
    - Remote errors are surfaced unchanged

Version: 1.0.0
"""

__version__ = "1.0.0"

from .annotations import (
    ContentField,
    ContentTypeInfo,
    IgnoreContentField,
    content_type,
    get_content_type_info,
)
from .appearance import (
    BooleanAppearance,
    DateFormat,
    DatePickerAppearance,
    EditorInterface,
    FieldAppearance,
    RatingAppearance,
    SystemWidgetIds,
    WidgetControl,
)
from .client import HttpManagementClient, ManagementClient
from .compiler import compile_content_type, initialize_content_types
from .config import CodeFirstSettings
from .converter import field_kind, item_kind, item_link_type, link_type
from .errors import (
    CodeFirstError,
    ConflictError,
    NotFoundError,
    ScopeNotFoundError,
    TransportError,
)
from .models import Asset, Entry, Location
from .registry import (
    ContentTypeRegistry,
    fingerprint,
    get_registry,
)
from .scanner import load_types
from .schema import (
    CompiledContentType,
    ContentTypeDefinition,
    FieldDefinition,
    FieldKind,
    ItemsSchema,
)
from .sync import create_content_types, create_content_types_from_module
from .validations import (
    DateRange,
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

__all__ = [
    # Version
    "__version__",
    # Markers
    "content_type",
    "ContentTypeInfo",
    "ContentField",
    "IgnoreContentField",
    "get_content_type_info",
    # Validations
    "Size",
    "Range",
    "LinkContentType",
    "InValues",
    "MimeType",
    "MimeTypeRestriction",
    "Regex",
    "Unique",
    "DateRange",
    "FileSize",
    # Appearances
    "FieldAppearance",
    "BooleanAppearance",
    "RatingAppearance",
    "DatePickerAppearance",
    "DateFormat",
    "SystemWidgetIds",
    "WidgetControl",
    "EditorInterface",
    # Shapes
    "Asset",
    "Entry",
    "Location",
    # Schema types
    "FieldKind",
    "FieldDefinition",
    "ItemsSchema",
    "ContentTypeDefinition",
    "CompiledContentType",
    # Conversion
    "field_kind",
    "link_type",
    "item_kind",
    "item_link_type",
    # Discovery and compilation
    "ContentTypeRegistry",
    "get_registry",
    "fingerprint",
    "load_types",
    "initialize_content_types",
    "compile_content_type",
    # Synchronization
    "ManagementClient",
    "HttpManagementClient",
    "CodeFirstSettings",
    "create_content_types",
    "create_content_types_from_module",
    # Errors
    "CodeFirstError",
    "ScopeNotFoundError",
    "ConflictError",
    "TransportError",
    "NotFoundError",
]
