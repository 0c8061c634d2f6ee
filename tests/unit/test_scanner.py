"""
Unit tests for content type discovery.

Tests cover:
- Scanning a module
- Walking a package
- Missing scopes
- Falling back to the registry
"""

import pytest

from sdk.codefirst_sdk.annotations import content_type
from sdk.codefirst_sdk.errors import ScopeNotFoundError
from sdk.codefirst_sdk.registry import reset_registry
from sdk.codefirst_sdk.scanner import load_types
from tests.fixtures import content_models
from tests.fixtures.catalog.orders import Order
from tests.fixtures.catalog.products import Product
from tests.fixtures.content_models import (
    ClassWithAttributes,
    Employee,
    Note,
    Person,
    Store,
)


class TestLoadTypes:
    """Tests for load_types()."""

    def test_module_by_name(self):
        """Decorated classes are returned in definition order."""
        types = load_types("tests.fixtures.content_models")

        assert types == [Person, ClassWithAttributes, Store, Note]

    def test_module_object(self):
        """An imported module can be passed directly."""
        assert load_types(content_models) == load_types("tests.fixtures.content_models")

    def test_undecorated_subclass_is_skipped(self):
        """Inheriting from a content type does not make a content type."""
        assert Employee not in load_types(content_models)

    def test_package_is_walked(self):
        """Submodules are scanned; imported, private and unexported classes are not."""
        types = load_types("tests.fixtures.catalog")

        assert types == [Order, Product]

    def test_missing_scope_raises(self):
        """An unknown module path raises ScopeNotFoundError."""
        with pytest.raises(ScopeNotFoundError) as exc_info:
            load_types("tests.fixtures.does_not_exist")

        assert exc_info.value.code == "SCOPE_NOT_FOUND"
        assert exc_info.value.scope == "tests.fixtures.does_not_exist"

    @pytest.mark.parametrize("scope", ["", ".relative", "..fixtures", "tests.fixtures.nowhere"])
    def test_malformed_scope_raises(self, scope):
        """Empty and relative module paths raise ScopeNotFoundError too."""
        with pytest.raises(ScopeNotFoundError) as exc_info:
            load_types(scope)

        assert exc_info.value.scope == scope


class TestLoadFromRegistry:
    """Tests for load_types() without a scope."""

    @pytest.fixture(autouse=True)
    def fresh_registry(self):
        reset_registry()
        yield
        reset_registry()

    def test_no_scope_uses_registry(self):
        """Without a scope, every decorated class is returned."""

        @content_type(id="first")
        class First:
            title: str

        @content_type(id="second")
        class Second:
            title: str

        assert load_types() == [First, Second]

    def test_empty_registry(self):
        assert load_types(None) == []
