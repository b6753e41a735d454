"""
Plan document lifecycle: create, conditional read and delete against a storage backend.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .db import StorageBackend
from .errors import BackendUnavailable, PlanNotFound, ValidationFailed
from .fingerprint import compute_etag, deserialize, etag_matches, serialize
from .pipeline import run_pipeline
from ..util.logging import logger


@dataclass
class StoredPlan:
    """A plan as read back from the store.

    On a conditional read that matched, modified is False and document is None.
    """
    etag: str
    document: Optional[Dict[str, Any]] = None
    modified: bool = True


class PlanStore:
    """Plan operations over an injected key-value backend.

    Same-key operations are not serialized: the last write wins and a
    concurrent read may see either version.
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    def ensure_ready(self) -> None:
        if not self.backend.is_ready():
            logger.error("Storage backend is not connected")
            raise BackendUnavailable("Storage backend is not connected")

    def prepare(self, document: Any) -> Dict[str, Any]:
        """Run the write pipeline (date normalization, validation, identifier check)."""
        try:
            return run_pipeline(document)
        except ValidationFailed as e:
            object_id = document.get("objectId") if isinstance(document, dict) else None
            logger.log_validation_error("create", e.errors, object_id)
            raise

    def create(self, document: Any) -> StoredPlan:
        """Persist a plan under its objectId, overwriting any previous record.

        The stored bytes are fetched back and fingerprinted, so the returned
        tag is the one later reads will compute.
        """
        self.ensure_ready()
        document = self.prepare(document)

        key = document["objectId"]
        try:
            self.backend.set(key, serialize(document))
            data = self.backend.get(key)
        except BackendUnavailable as e:
            logger.log_backend_error("create", e.__cause__ or e)
            raise
        if data is None:
            # Record vanished between SET and GET (concurrent delete)
            logger.log_operation("create", "readback_missing", {"key": key}, level=logging.ERROR)
            raise BackendUnavailable()

        etag = compute_etag(data)
        logger.log_plan_operation("create", key, etag=etag)
        return StoredPlan(etag=etag, document=deserialize(data))

    def read(self, key: str, if_none_match: str = None) -> StoredPlan:
        self.ensure_ready()
        try:
            data = self.backend.get(key)
        except BackendUnavailable as e:
            logger.log_backend_error("read", e.__cause__ or e)
            raise
        if data is None:
            logger.log_plan_operation("read", key, status="not_found")
            raise PlanNotFound(key)

        etag = compute_etag(data)
        if etag_matches(if_none_match, etag):
            logger.log_plan_operation("read", key, status="not_modified", etag=etag)
            return StoredPlan(etag=etag, modified=False)

        logger.log_plan_operation("read", key, etag=etag)
        return StoredPlan(etag=etag, document=deserialize(data))

    def delete(self, key: str) -> int:
        """Remove a plan; returns the number of records removed."""
        self.ensure_ready()
        try:
            removed = self.backend.delete(key)
        except BackendUnavailable as e:
            logger.log_backend_error("delete", e.__cause__ or e)
            raise
        if removed == 0:
            logger.log_plan_operation("delete", key, status="not_found")
            raise PlanNotFound(key)

        logger.log_plan_operation("delete", key)
        return removed
