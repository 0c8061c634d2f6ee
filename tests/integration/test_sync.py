"""
Integration tests for synchronization with a mock management client.

Tests cover:
- Skipping existing content types unless forced
- Version tokens sent on upsert
- Activation after upsert
- Widget control merging
- Error propagation
"""

from unittest.mock import AsyncMock

import pytest

from sdk.codefirst_sdk.appearance import (
    EditorInterface,
    RatingWidgetSettings,
    SystemWidgetIds,
    WidgetControl,
)
from sdk.codefirst_sdk.compiler import compile_content_type, initialize_content_types
from sdk.codefirst_sdk.config import CodeFirstSettings
from sdk.codefirst_sdk.errors import ConflictError, TransportError
from sdk.codefirst_sdk.schema import ContentTypeDefinition
from sdk.codefirst_sdk.sync import create_content_types, create_content_types_from_module
from tests.fixtures.content_models import ClassWithAttributes, Note, Person


async def stored(definition, version=None):
    """Echo a definition back with the next remote version."""
    return ContentTypeDefinition(
        id=definition.id,
        name=definition.name,
        display_field=definition.display_field,
        description=definition.description,
        fields=list(definition.fields),
        version=(version or 0) + 1,
    )


def make_client(existing=()):
    """Create a mock management client."""
    client = AsyncMock()
    client.list_content_types.return_value = list(existing)
    client.upsert_content_type.side_effect = stored
    client.get_widget_config.return_value = EditorInterface(
        controls=[
            WidgetControl(field_id="heading", widget_id=SystemWidgetIds.SINGLE_LINE),
            WidgetControl(field_id="rating", widget_id=SystemWidgetIds.NUMBER_EDITOR),
        ],
        version=9,
    )
    return client


def settings(**overrides):
    return CodeFirstSettings(space_id="space", **overrides)


class TestCreateContentTypes:
    """Tests for create_content_types()."""

    @pytest.mark.asyncio
    async def test_create_new_content_type(self):
        """A new id is upserted without a version."""
        client = make_client()
        compiled = compile_content_type(Person)

        created = await create_content_types([compiled], settings(), client)

        client.upsert_content_type.assert_awaited_once()
        definition = client.upsert_content_type.await_args.args[0]
        assert definition.id == "person"
        assert definition.version is None
        assert client.upsert_content_type.await_args.kwargs == {"version": None}
        assert [ct.id for ct in created] == ["person"]
        assert created[0].version == 1

    @pytest.mark.asyncio
    async def test_not_activated_by_default(self):
        client = make_client()

        await create_content_types([compile_content_type(Person)], settings(), client)

        client.activate_content_type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_existing_skipped_without_force(self):
        """Existing ids are left alone unless force_update is set."""
        client = make_client(existing=[ContentTypeDefinition(id="person", name="Person", version=4)])
        compiled = list(initialize_content_types([Person, Note]))

        created = await create_content_types(compiled, settings(), client)

        assert [ct.id for ct in created] == ["Note"]
        assert client.upsert_content_type.await_count == 1
        assert client.upsert_content_type.await_args.args[0].id == "Note"

    @pytest.mark.asyncio
    async def test_existing_updated_with_force(self):
        """Forced updates send the remote version."""
        client = make_client(existing=[ContentTypeDefinition(id="person", name="Person", version=4)])
        compiled = compile_content_type(Person)

        created = await create_content_types([compiled], settings(force_update=True), client)

        assert client.upsert_content_type.await_args.kwargs == {"version": 4}
        assert compiled.content_type.version == 4
        assert created[0].version == 5

    @pytest.mark.asyncio
    async def test_empty_input(self):
        client = make_client()

        assert await create_content_types([], settings(), client) == []
        client.list_content_types.assert_awaited_once()
        client.upsert_content_type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_listing_taken_once(self):
        client = make_client()
        compiled = list(initialize_content_types([Person, Note]))

        await create_content_types(compiled, settings(), client)

        client.list_content_types.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_publish_activates_upserted_version(self):
        """Activation uses the version returned by the upsert."""
        client = make_client()

        await create_content_types(
            [compile_content_type(Person)], settings(publish_automatically=True), client
        )

        client.activate_content_type.assert_awaited_once_with("person", 1)

    @pytest.mark.asyncio
    async def test_publish_defaults_version_to_one(self):
        """A missing version after upsert activates version 1."""
        client = make_client()
        client.upsert_content_type.side_effect = None
        client.upsert_content_type.return_value = ContentTypeDefinition(id="person", name="Person")

        await create_content_types(
            [compile_content_type(Person)], settings(publish_automatically=True), client
        )

        client.activate_content_type.assert_awaited_once_with("person", 1)

    @pytest.mark.asyncio
    async def test_result_is_upserted_definition(self):
        """The result holds what the upsert returned, not the activation."""
        client = make_client()
        client.activate_content_type.return_value = ContentTypeDefinition(
            id="person", name="Person", version=2
        )

        created = await create_content_types(
            [compile_content_type(Person)], settings(publish_automatically=True), client
        )

        assert created[0].version == 1

    @pytest.mark.asyncio
    async def test_controls_merged(self):
        """Controls replace remote controls of the same field."""
        client = make_client()

        await create_content_types([compile_content_type(ClassWithAttributes)], settings(), client)

        client.get_widget_config.assert_awaited_once_with("something")
        config, content_type_id, version = client.update_widget_config.await_args.args
        assert content_type_id == "something"
        assert version == 9
        assert [c.field_id for c in config.controls] == ["heading", "rating"]
        assert config.controls[0].widget_id == SystemWidgetIds.SINGLE_LINE
        assert config.controls[1].widget_id == SystemWidgetIds.RATING
        assert config.controls[1].settings == RatingWidgetSettings(help_text=None, star_count=5)

    @pytest.mark.asyncio
    async def test_no_controls_no_widget_calls(self):
        client = make_client()

        await create_content_types([compile_content_type(Person)], settings(), client)

        client.get_widget_config.assert_not_awaited()
        client.update_widget_config.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_conflict_aborts_remaining(self):
        """A failing upsert stops the run; earlier writes stay."""
        client = make_client()
        client.upsert_content_type.side_effect = [
            await stored(compile_content_type(Note).content_type),
            ConflictError("Version conflict on person", content_type_id="person"),
            await stored(compile_content_type(ClassWithAttributes).content_type),
        ]
        compiled = list(initialize_content_types([Note, Person, ClassWithAttributes]))

        with pytest.raises(ConflictError):
            await create_content_types(compiled, settings(), client)

        assert client.upsert_content_type.await_count == 2

    @pytest.mark.asyncio
    async def test_listing_failure_propagates(self):
        client = make_client()
        client.list_content_types.side_effect = TransportError("unreachable")

        with pytest.raises(TransportError):
            await create_content_types([compile_content_type(Person)], settings(), client)

        client.upsert_content_type.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_activation_failure_propagates(self):
        client = make_client()
        client.activate_content_type.side_effect = TransportError("boom", status_code=500)

        with pytest.raises(TransportError):
            await create_content_types(
                [compile_content_type(Person), compile_content_type(Note)],
                settings(publish_automatically=True),
                client,
            )

        assert client.upsert_content_type.await_count == 1


class TestCreateContentTypesFromModule:
    """Tests for create_content_types_from_module()."""

    @pytest.mark.asyncio
    async def test_scans_compiles_and_syncs(self):
        client = make_client()

        created = await create_content_types_from_module(
            "tests.fixtures.content_models", settings(), client
        )

        assert [ct.id for ct in created] == ["Note", "person", "store", "something"]

    @pytest.mark.asyncio
    async def test_builds_http_client_from_settings(self, monkeypatch):
        """Without a client, one is built from the settings."""
        client = make_client()
        built = {}

        class FakeHttpClient:
            def __init__(self, **kwargs):
                built.update(kwargs)

            async def __aenter__(self):
                return client

            async def __aexit__(self, *args):
                built["closed"] = True

        monkeypatch.setattr(
            "sdk.codefirst_sdk.sync.HttpManagementClient", FakeHttpClient
        )

        await create_content_types_from_module(
            "tests.fixtures.content_models",
            settings(api_key="token", environment="staging"),
        )

        assert built["api_key"] == "token"
        assert built["space_id"] == "space"
        assert built["environment"] == "staging"
        assert built["closed"] is True
        assert client.upsert_content_type.await_count == 4
