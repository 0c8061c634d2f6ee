"""
Management client for the CodeFirst SDK.

This module provides the remote side of synchronization:
- ManagementClient: Protocol the synchronizer talks to
- HttpManagementClient: Implementation over the content management REST API

Example:
    >>> async with HttpManagementClient(api_key="...", space_id="abc123") as client:
    ...     existing = await client.list_content_types()
    ...     created = await client.upsert_content_type(definition, version=None)

Invariants:
    - Version tokens travel in the X-Contentful-Version header
    - 409 responses surface as ConflictError, never retried
    - Credentials are never logged
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from .appearance import EditorInterface
from .errors import ConflictError, NotFoundError, TransportError
from .schema import ContentTypeDefinition

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.contentful.com"
CONTENT_TYPE_HEADER = "application/vnd.contentful.management.v1+json"
VERSION_HEADER = "X-Contentful-Version"
PAGE_SIZE = 100


@runtime_checkable
class ManagementClient(Protocol):
    """Protocol for the remote content management service.

    Every method is a suspending call and may raise TransportError.
    Implementations must not retry on their own.
    """

    @abstractmethod
    async def list_content_types(self) -> list[ContentTypeDefinition]:
        """Fetch every existing content type with its current version."""
        ...

    @abstractmethod
    async def upsert_content_type(
        self,
        definition: ContentTypeDefinition,
        version: Optional[int] = None,
    ) -> ContentTypeDefinition:
        """Create or update a content type.

        Args:
            definition: The content type to write
            version: Current remote version; None for a new content type

        Returns:
            The stored definition with its remote-assigned version

        Raises:
            ConflictError: If version is stale, or missing for an existing id
        """
        ...

    @abstractmethod
    async def activate_content_type(
        self, content_type_id: str, version: int
    ) -> ContentTypeDefinition:
        """Publish a specific version of a content type."""
        ...

    @abstractmethod
    async def get_widget_config(self, content_type_id: str) -> EditorInterface:
        """Fetch the editor interface (widget controls) of a content type."""
        ...

    @abstractmethod
    async def update_widget_config(
        self,
        config: EditorInterface,
        content_type_id: str,
        version: Optional[int],
    ) -> EditorInterface:
        """Replace the editor interface of a content type."""
        ...


class HttpManagementClient:
    """ManagementClient over HTTP, using httpx.

    Pass ``http_client`` to reuse a configured ``httpx.AsyncClient``
    (for example one built on ``httpx.MockTransport``); it is then left
    open on close().

    Example:
        >>> async with HttpManagementClient(api_key="token", space_id="space") as client:
        ...     types = await client.list_content_types()
    """

    def __init__(
        self,
        api_key: str,
        space_id: str,
        *,
        environment: str = "master",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: Management API token
            space_id: Space holding the content types
            environment: Environment within the space
            base_url: API base URL
            timeout: Request timeout in seconds
            http_client: Optional preconfigured client
        """
        self._space_id = space_id
        self._environment = environment
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": CONTENT_TYPE_HEADER,
        }

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> HttpManagementClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    @property
    def _base_path(self) -> str:
        return f"/spaces/{self._space_id}/environments/{self._environment}/content_types"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        version: Optional[int] = None,
        resource_id: str | None = None,
    ) -> dict[str, Any]:
        headers = dict(self._headers)
        if version is not None:
            headers[VERSION_HEADER] = str(version)

        try:
            response = await self._http.request(
                method, path, json=json, params=params, headers=headers
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}", url=path) from e

        if response.status_code == 409 or _is_version_mismatch(response):
            raise ConflictError(
                f"Version conflict on {resource_id or path} (sent version {version})",
                content_type_id=resource_id,
                version=version,
            )
        if response.status_code == 404:
            raise NotFoundError(f"{resource_id or path} not found", resource_id=resource_id or path)
        if response.is_error:
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
                url=path,
            )

        logger.debug(f"{method} {path} -> {response.status_code}")
        return response.json() if response.content else {}

    async def list_content_types(self) -> list[ContentTypeDefinition]:
        """Fetch every content type, following pagination."""
        definitions: list[ContentTypeDefinition] = []
        skip = 0
        while True:
            page = await self._request(
                "GET", self._base_path, params={"skip": skip, "limit": PAGE_SIZE}
            )
            items = page.get("items", [])
            definitions.extend(ContentTypeDefinition.from_dict(item) for item in items)
            skip += len(items)
            if not items or skip >= page.get("total", 0):
                break
        return definitions

    async def upsert_content_type(
        self,
        definition: ContentTypeDefinition,
        version: Optional[int] = None,
    ) -> ContentTypeDefinition:
        body = definition.to_dict()
        body.pop("sys")
        data = await self._request(
            "PUT",
            f"{self._base_path}/{definition.id}",
            json=body,
            version=version,
            resource_id=definition.id,
        )
        return ContentTypeDefinition.from_dict(data)

    async def activate_content_type(
        self, content_type_id: str, version: int
    ) -> ContentTypeDefinition:
        data = await self._request(
            "PUT",
            f"{self._base_path}/{content_type_id}/published",
            version=version,
            resource_id=content_type_id,
        )
        return ContentTypeDefinition.from_dict(data)

    async def get_widget_config(self, content_type_id: str) -> EditorInterface:
        data = await self._request(
            "GET",
            f"{self._base_path}/{content_type_id}/editor_interface",
            resource_id=content_type_id,
        )
        return EditorInterface.from_dict(data)

    async def update_widget_config(
        self,
        config: EditorInterface,
        content_type_id: str,
        version: Optional[int],
    ) -> EditorInterface:
        data = await self._request(
            "PUT",
            f"{self._base_path}/{content_type_id}/editor_interface",
            json=config.to_dict(),
            version=version,
            resource_id=content_type_id,
        )
        return EditorInterface.from_dict(data)


def _is_version_mismatch(response: httpx.Response) -> bool:
    if response.status_code != 422:
        return False
    try:
        error_id = response.json().get("sys", {}).get("id")
    except ValueError:
        return False
    return error_id == "VersionMismatch"
