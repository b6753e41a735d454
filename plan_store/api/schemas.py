"""
Response models for the plan store HTTP API.
Plan documents themselves are free-form JSON checked by core.validation, not pydantic models.
"""

from typing import List

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    message: str


class ValidationFieldError(BaseModel):
    field: str
    constraint: str
    message: str


class ValidationErrorResponse(BaseModel):
    message: str
    errors: List[ValidationFieldError]


class DeleteResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str
    version: str
    backend: str
    backend_ready: bool
