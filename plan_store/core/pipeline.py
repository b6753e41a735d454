"""
Write pipeline: the ordered checks a plan document passes before it is persisted.
"""

import math
from functools import reduce
from typing import Any, Callable, Dict, Sequence

from .dates import normalize_creation_date
from .errors import FieldError, MalformedInput, MissingIdentifier
from .validation import get_validator

Stage = Callable[[Dict[str, Any]], Dict[str, Any]]


def _non_finite_paths(value: Any, path: str = "$"):
    if isinstance(value, float) and not math.isfinite(value):
        yield path
    elif isinstance(value, dict):
        for key, child in value.items():
            yield from _non_finite_paths(child, f"{path}.{key}")
    elif isinstance(value, list):
        for index, child in enumerate(value):
            yield from _non_finite_paths(child, f"{path}[{index}]")


def reject_non_finite_numbers(document: Dict[str, Any]) -> Dict[str, Any]:
    """Reject NaN and Infinity anywhere in the document; they have no JSON encoding."""
    errors = [
        FieldError(path, "finite", "must be a finite number")
        for path in _non_finite_paths(document)
    ]
    if errors:
        raise MalformedInput(errors, message="Malformed JSON body")
    return document


def validate_document(document: Dict[str, Any]) -> Dict[str, Any]:
    return get_validator().ensure_valid(document)


def require_object_id(document: Dict[str, Any]) -> Dict[str, Any]:
    object_id = document.get("objectId")
    if not isinstance(object_id, str) or not object_id.strip():
        raise MissingIdentifier()
    return document


WRITE_STAGES: Sequence[Stage] = (
    reject_non_finite_numbers,
    normalize_creation_date,
    validate_document,
    require_object_id,
)


def run_pipeline(document: Any, stages: Sequence[Stage] = WRITE_STAGES) -> Dict[str, Any]:
    """Run a document through each stage in order.

    Each stage returns the (possibly rewritten) document or raises a
    PlanStoreError; the first failure stops the pipeline.
    """
    if not isinstance(document, dict):
        raise MalformedInput(
            [FieldError("$", "type", "request body must be a JSON object")],
            message="Malformed JSON body",
        )
    return reduce(lambda doc, stage: stage(doc), stages, document)
