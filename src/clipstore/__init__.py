"""clipstore - Async Python client for a shared HTTP clipboard store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("clipstore")
except PackageNotFoundError:
    __version__ = "0+local"
from clipstore.client import ClipStoreClient
from clipstore.config import ClipStoreConfig
from clipstore.exceptions import (
    ClipStoreCommunicationError,
    ClipStoreConfigError,
    ClipStoreDecodeError,
    ClipStoreError,
    ClipStoreTransportError,
    ClipStoreValidationError,
)
from clipstore.models import FieldRequest, StoreSnapshot, UpdateRequest

__all__ = [
    "__version__",
    "ClipStoreClient",
    "ClipStoreCommunicationError",
    "ClipStoreConfig",
    "ClipStoreConfigError",
    "ClipStoreDecodeError",
    "ClipStoreError",
    "ClipStoreTransportError",
    "ClipStoreValidationError",
    "FieldRequest",
    "StoreSnapshot",
    "UpdateRequest",
]
