"""Custom exception hierarchy for pyattendance."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all pyattendance errors."""


class StoreConfigError(StoreError):
    """Invalid or missing configuration."""


class StoreCredentialError(StoreConfigError):
    """No access token is configured; raised before any request is sent."""


class StoreTransportError(StoreError):
    """Network-level failure (DNS, connection reset, timeout)."""

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
    ) -> None:
        self.path = path
        super().__init__(message)


class StoreApiError(StoreError):
    """The contents API answered with a non-success HTTP status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.path = path
        super().__init__(message)


class RevisionConflictError(StoreApiError):
    """Write rejected because the revision token is stale or missing.

    GitHub answers ``409`` when ``sha`` does not match the current blob and
    ``422`` when a file already exists but no ``sha`` was supplied.
    """


class MalformedResponseError(StoreError):
    """Response body is missing fields or holds undecodable content."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
