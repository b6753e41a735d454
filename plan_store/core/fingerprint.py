"""
Canonical serialization and entity tags for stored plans.
"""

import base64
import hashlib
import json
from typing import Any, Dict, Optional


def serialize(document: Dict[str, Any]) -> bytes:
    """Encode a document to the byte form that is persisted and fingerprinted.

    Compact separators, member order as given, UTF-8 without ASCII escaping.
    """
    return json.dumps(document, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def deserialize(data: bytes) -> Dict[str, Any]:
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    return json.loads(data)


def compute_etag(data: bytes) -> str:
    """Strong entity tag: hex length plus a truncated base64 SHA-1 digest, quoted."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    digest = base64.b64encode(hashlib.sha1(data).digest()).decode("ascii")[:27]
    return f'"{len(data):x}-{digest}"'


def etag_matches(header: Optional[str], etag: str) -> bool:
    # Strong comparison only: no weak prefix, no list parsing, no wildcard
    return header is not None and header == etag
