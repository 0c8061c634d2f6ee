"""
Error types for the CodeFirst SDK.

This module defines all exception types raised by the SDK:
- CodeFirstError: Base exception
- ScopeNotFoundError: A scanned module could not be imported
- ConflictError: The remote service rejected a stale or missing version
- TransportError: Network, authentication or service failure
- NotFoundError: Remote resource does not exist

Invariants:
    - All errors inherit from CodeFirstError
    - Errors include context for debugging
    - Credentials never appear in messages or details
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class CodeFirstError(Exception):
    """Base exception for all CodeFirst SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "CODEFIRST_ERROR"
        self.details = details or {}


class ScopeNotFoundError(CodeFirstError):
    """The scope to scan for content types could not be loaded.

    Raised when:
    - The module path does not exist
    - Importing the module fails
    """

    def __init__(self, message: str, scope: str) -> None:
        super().__init__(
            message,
            code="SCOPE_NOT_FOUND",
            details={"scope": scope},
        )
        self.scope = scope


class ConflictError(CodeFirstError):
    """The remote service rejected a write because of its version token.

    Raised when:
    - The version sent is older than the remote version
    - No version was sent for a content type that already exists

    Never retried by the SDK; re-fetch and re-sync instead.
    """

    def __init__(
        self,
        message: str,
        content_type_id: Optional[str] = None,
        version: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            code="CONFLICT",
            details={"content_type_id": content_type_id, "version": version},
        )
        self.content_type_id = content_type_id
        self.version = version


class TransportError(CodeFirstError):
    """Failed to talk to the remote management service.

    Raised when:
    - The service is unreachable or times out
    - Authentication fails
    - The service answers with an unexpected error status
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="TRANSPORT_ERROR",
            details={"status_code": status_code, "url": url},
        )
        self.status_code = status_code
        self.url = url


class NotFoundError(CodeFirstError):
    """Remote resource not found."""

    def __init__(self, message: str, resource_id: str) -> None:
        super().__init__(
            message,
            code="NOT_FOUND",
            details={"resource_id": resource_id},
        )
        self.resource_id = resource_id
