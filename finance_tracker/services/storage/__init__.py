"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements an in-memory backend, but designed to be swappable.
"""

from finance_tracker.services.storage.interface import (
    AreaStorageInterface,
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
)
from finance_tracker.services.storage.memory import (
    InMemoryAreaStorage,
    InMemoryAuditStorage,
    InMemoryRecordStorage,
)

__all__ = [
    # Interfaces
    "AreaStorageInterface",
    "AuditStorageInterface",
    "RecordStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAreaStorage",
    "InMemoryAuditStorage",
    "InMemoryRecordStorage",
]
