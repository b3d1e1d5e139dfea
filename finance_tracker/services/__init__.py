"""Services package."""

from finance_tracker.services.storage import (
    AreaStorageInterface,
    AuditStorageInterface,
    DuplicateError,
    InMemoryAreaStorage,
    InMemoryAuditStorage,
    InMemoryRecordStorage,
    NotFoundError,
    RecordStorageInterface,
    StorageError,
)

__all__ = [
    "AreaStorageInterface",
    "AuditStorageInterface",
    "DuplicateError",
    "InMemoryAreaStorage",
    "InMemoryAuditStorage",
    "InMemoryRecordStorage",
    "NotFoundError",
    "RecordStorageInterface",
    "StorageError",
]
