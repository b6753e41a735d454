"""
Error taxonomy for plan store operations.
Each error knows the HTTP status and JSON body it maps to at the API boundary.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class FieldError:
    """One violated constraint, located by JSON path."""
    field: str
    constraint: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class PlanStoreError(Exception):
    """Base class for failures surfaced by plan store operations."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class ValidationFailed(PlanStoreError):
    """Document violates the plan schema."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, errors: List[Any], message: Optional[str] = None):
        super().__init__(message)
        self.errors = list(errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "errors": [e.to_dict() if hasattr(e, "to_dict") else e for e in self.errors],
        }


class MalformedInput(ValidationFailed):
    """Request body or one of its fields cannot be parsed."""

    default_message = "Malformed input"


class MissingIdentifier(PlanStoreError):
    status_code = 400
    default_message = "Missing objectId in the request body."


class PlanNotFound(PlanStoreError):
    status_code = 404
    default_message = "Plan not found"

    def __init__(self, key: str, message: Optional[str] = None):
        super().__init__(message)
        self.key = key


class BackendUnavailable(PlanStoreError):
    """Storage engine unreachable or erroring.

    Responses only carry the generic message. The underlying cause is chained
    on the exception and written to the server log.
    """

    status_code = 500
    default_message = "Storage backend unavailable"
