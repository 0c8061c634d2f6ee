"""
Synchronization of compiled content types with the remote service.

create_content_types() pushes compiled definitions through a
ManagementClient:

    1. List existing content types once
    2. Unless force_update, skip ids that already exist remotely
    3. Stamp each definition with the existing remote version (or None)
    4. Upsert, then activate if publish_automatically
    5. Merge widget controls into the remote editor interface

Invariants:
    - Processing is sequential, in input order
    - The remote listing is taken once and never refreshed
    - Client errors abort the run unchanged; nothing is retried or rolled back
    - New ids are never sent a version token

How to change safely:
    - Keep the existence check an id check; content is not diffed
    - Never retry on ConflictError, the caller must re-fetch
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import ModuleType

from .client import HttpManagementClient, ManagementClient
from .compiler import initialize_content_types
from .config import CodeFirstSettings
from .scanner import load_types
from .schema import CompiledContentType, ContentTypeDefinition

logger = logging.getLogger(__name__)


async def create_content_types(
    content_types: Iterable[CompiledContentType],
    settings: CodeFirstSettings,
    client: ManagementClient,
) -> list[ContentTypeDefinition]:
    """Create or update content types remotely.

    Args:
        content_types: Compiled content types, e.g. from initialize_content_types()
        settings: force_update and publish_automatically are read from here
        client: Management client to write through

    Returns:
        The upserted definitions, as returned by the remote service

    Raises:
        ConflictError: If the remote rejects a version token
        TransportError: On any network or service failure
    """
    existing = {ct.id: ct for ct in await client.list_content_types()}

    pending = list(content_types)
    if not settings.force_update:
        skipped = [c.id for c in pending if c.id in existing]
        if skipped:
            logger.info(f"Skipping existing content type(s): {', '.join(skipped)}")
        pending = [c for c in pending if c.id not in existing]

    created: list[ContentTypeDefinition] = []

    for compiled in pending:
        definition = compiled.content_type
        remote = existing.get(definition.id)
        definition.version = remote.version if remote is not None else None

        upserted = await client.upsert_content_type(definition, version=definition.version)
        logger.info(
            f"{'Updated' if remote is not None else 'Created'} content type "
            f"'{upserted.id}' (version {upserted.version})"
        )

        if settings.publish_automatically:
            await client.activate_content_type(upserted.id, upserted.version or 1)
            logger.info(f"Activated content type '{upserted.id}'")

        if compiled.controls:
            await _update_controls(client, compiled)

        created.append(upserted)

    return created


async def _update_controls(client: ManagementClient, compiled: CompiledContentType) -> None:
    """Merge a content type's widget controls into its remote editor interface."""
    editor_interface = await client.get_widget_config(compiled.id)
    replaced = editor_interface.merge(compiled.controls)
    if replaced < len(compiled.controls):
        logger.debug(
            f"{len(compiled.controls) - replaced} control(s) of '{compiled.id}' "
            f"have no remote field and were skipped"
        )
    await client.update_widget_config(editor_interface, compiled.id, editor_interface.version)
    logger.debug(f"Updated {replaced} widget control(s) of '{compiled.id}'")


async def create_content_types_from_module(
    scope: str | ModuleType,
    settings: CodeFirstSettings,
    client: ManagementClient | None = None,
) -> list[ContentTypeDefinition]:
    """Scan, compile and synchronize every content type in a module.

    When ``client`` is omitted, an HttpManagementClient is built from the
    settings and closed afterwards.

    Raises:
        ScopeNotFoundError: If the scope cannot be imported
        ConflictError: If the remote rejects a version token
        TransportError: On any network or service failure
    """
    compiled = initialize_content_types(load_types(scope))

    if client is not None:
        return await create_content_types(compiled, settings, client)

    async with HttpManagementClient(
        api_key=settings.api_key.get_secret_value(),
        space_id=settings.space_id,
        environment=settings.environment,
        base_url=settings.base_url,
        timeout=settings.timeout,
    ) as http_client:
        return await create_content_types(compiled, settings, http_client)
