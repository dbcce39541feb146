"""Data models for clipstore requests and responses."""

from clipstore.models.requests import FieldRequest, UpdateRequest
from clipstore.models.snapshot import StoreSnapshot

__all__ = [
    "FieldRequest",
    "StoreSnapshot",
    "UpdateRequest",
]
