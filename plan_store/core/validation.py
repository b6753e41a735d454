"""
Schema validation for plan documents.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import ValidationError as JSONSchemaError

from .errors import FieldError, ValidationFailed
from .schema import PLAN_SCHEMA, FieldSpec, check_schema


@dataclass
class ValidationResult:
    valid: bool
    errors: List[FieldError] = field(default_factory=list)


def _describe(error: JSONSchemaError) -> str:
    # Messages never echo the offending value back
    if error.validator == "type":
        expected = error.validator_value
        if isinstance(expected, list):
            expected = " or ".join(expected)
        return f"must be of type {expected}"
    if error.validator == "format":
        return f"must match format {error.validator_value!r}"
    if error.validator == "minLength":
        return f"must be at least {error.validator_value} characters long"
    return error.message


def _to_field_errors(error: JSONSchemaError) -> List[FieldError]:
    if error.validator == "required":
        present = error.instance if isinstance(error.instance, dict) else {}
        return [
            FieldError(f"{error.json_path}.{name}", "required", f"{name!r} is a required property")
            for name in error.validator_value
            if name not in present
        ]
    return [FieldError(error.json_path, str(error.validator), _describe(error))]


class PlanValidator:
    """Validates documents against a FieldSpec; stateless once built."""

    def __init__(self, spec: FieldSpec = PLAN_SCHEMA, format_checker: FormatChecker = None):
        self.format_checker = format_checker or FormatChecker()
        self.spec = check_schema(spec, self.format_checker)
        self.schema = spec.to_json_schema()
        self._validator = Draft7Validator(self.schema, format_checker=self.format_checker)

    def validate(self, document: Dict[str, Any]) -> ValidationResult:
        """Validate a document; errors are ordered by field path then constraint."""
        found = []
        seen = set()
        for error in self._validator.iter_errors(document):
            for field_error in _to_field_errors(error):
                if field_error not in seen:
                    seen.add(field_error)
                    found.append(field_error)

        found.sort(key=lambda e: (e.field, e.constraint))
        return ValidationResult(valid=not found, errors=found)

    def ensure_valid(self, document: Dict[str, Any]) -> Dict[str, Any]:
        result = self.validate(document)
        if not result.valid:
            raise ValidationFailed(result.errors)
        return document


_default_validator = None


def get_validator() -> PlanValidator:
    """Get the shared validator for PLAN_SCHEMA, building it on first use."""
    global _default_validator
    if _default_validator is None:
        _default_validator = PlanValidator()
    return _default_validator
