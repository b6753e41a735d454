"""
Core plan store: schema, validation, normalization, fingerprints and storage.
"""

from .db import MemoryBackend, RedisBackend, SQLiteBackend, StorageBackend, create_backend
from .errors import (
    BackendUnavailable,
    FieldError,
    MalformedInput,
    MissingIdentifier,
    PlanNotFound,
    PlanStoreError,
    ValidationFailed
)
from .store import PlanStore, StoredPlan

__all__ = [
    'StorageBackend',
    'MemoryBackend',
    'RedisBackend',
    'SQLiteBackend',
    'create_backend',
    'PlanStoreError',
    'FieldError',
    'ValidationFailed',
    'MalformedInput',
    'MissingIdentifier',
    'PlanNotFound',
    'BackendUnavailable',
    'PlanStore',
    'StoredPlan'
]
