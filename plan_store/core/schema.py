"""
Static description of the plan document contract.
The description is checked once at startup and rendered to JSON Schema for the validator.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import SchemaError

FIELD_TYPES = ("string", "number", "integer", "boolean", "object", "array")


class SchemaDefinitionError(Exception):
    """The static schema description is internally inconsistent."""


@dataclass(frozen=True)
class FieldSpec:
    name: str
    type: str
    required: bool = False
    format: Optional[str] = None
    min_length: Optional[int] = None
    fields: Tuple["FieldSpec", ...] = field(default_factory=tuple)
    items: Optional["FieldSpec"] = None
    allow_additional: bool = True

    def to_json_schema(self) -> Dict[str, Any]:
        """Render this field (and its children) as a Draft 7 JSON Schema."""
        schema: Dict[str, Any] = {"type": self.type}
        if self.format is not None:
            schema["format"] = self.format
        if self.min_length is not None:
            schema["minLength"] = self.min_length
        if self.type == "object":
            schema["properties"] = {f.name: f.to_json_schema() for f in self.fields}
            required = [f.name for f in self.fields if f.required]
            if required:
                schema["required"] = required
            schema["additionalProperties"] = self.allow_additional
        if self.items is not None:
            schema["items"] = self.items.to_json_schema()
        return schema


def check_schema(spec: FieldSpec, format_checker: FormatChecker = None, path: str = "$") -> FieldSpec:
    """Check a schema description for internal consistency.

    Raises SchemaDefinitionError on the first problem; returns the spec so it
    can be used inline.
    """
    format_checker = format_checker or FormatChecker()

    if spec.type not in FIELD_TYPES:
        raise SchemaDefinitionError(f"{path}: unknown type {spec.type!r}")
    if spec.fields and spec.type != "object":
        raise SchemaDefinitionError(f"{path}: only objects may declare fields")
    if spec.items is not None and spec.type != "array":
        raise SchemaDefinitionError(f"{path}: only arrays may declare items")
    if (spec.format is not None or spec.min_length is not None) and spec.type != "string":
        raise SchemaDefinitionError(f"{path}: format and min_length apply to strings only")
    if spec.format is not None and spec.format not in format_checker.checkers:
        raise SchemaDefinitionError(f"{path}: no checker registered for format {spec.format!r}")

    names = [f.name for f in spec.fields]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise SchemaDefinitionError(f"{path}: duplicate fields {duplicates}")

    for child in spec.fields:
        check_schema(child, format_checker, f"{path}.{child.name}")
    if spec.items is not None:
        check_schema(spec.items, format_checker, f"{path}[]")

    if path == "$":
        try:
            Draft7Validator.check_schema(spec.to_json_schema())
        except SchemaError as e:
            raise SchemaDefinitionError(f"rendered schema is invalid: {e.message}") from e
    return spec


def _tagged(*extra: FieldSpec) -> Tuple[FieldSpec, ...]:
    """Members shared by every object in a plan: _org, objectId, objectType."""
    return (
        FieldSpec("_org", "string"),
        FieldSpec("objectId", "string"),
        FieldSpec("objectType", "string"),
    ) + extra


COST_SHARES = (
    FieldSpec("deductible", "integer"),
    FieldSpec("copay", "integer"),
)

PLAN_SCHEMA = FieldSpec(
    name="plan",
    type="object",
    fields=(
        FieldSpec("objectId", "string", required=True),
        FieldSpec("creationDate", "string", required=True, format="date"),
        FieldSpec("objectType", "string"),
        FieldSpec("_org", "string"),
        FieldSpec("planType", "string"),
        FieldSpec("plan", "string"),
        FieldSpec("planCostShares", "object", fields=_tagged(*COST_SHARES)),
        FieldSpec(
            "linkedPlanServices",
            "array",
            items=FieldSpec(
                "linkedPlanService",
                "object",
                fields=_tagged(
                    FieldSpec("linkedService", "object", fields=_tagged(FieldSpec("name", "string"))),
                    FieldSpec("planserviceCostShares", "object", fields=_tagged(*COST_SHARES)),
                ),
            ),
        ),
    ),
)
