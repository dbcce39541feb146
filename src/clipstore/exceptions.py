"""Custom exception hierarchy for clipstore."""

from __future__ import annotations


class ClipStoreError(Exception):
    """Base exception for all clipstore errors."""


class ClipStoreConfigError(ClipStoreError):
    """Invalid or missing configuration."""


class ClipStoreValidationError(ClipStoreError, ValueError):
    """Request rejected locally, before any network call was made."""


class ClipStoreCommunicationError(ClipStoreError):
    """The remote exchange did not produce a usable result."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class ClipStoreTransportError(ClipStoreCommunicationError):
    """HTTP-level failure (non-2xx status, network error, timeout).

    ``status_code`` is ``None`` when no response was received at all.
    """


class ClipStoreDecodeError(ClipStoreCommunicationError):
    """A 2xx response whose body is not the JSON the endpoint promises.

    The raw body is never handed back as a result; callers always get
    either parsed JSON or this error.
    """
