"""
HTTP API for plan documents.

POST /v1/plan stores a plan under its objectId, GET /v1/plan/{id} returns it
(honouring If-None-Match), DELETE /v1/plan/{id} removes it.
"""

from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Header, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .schemas import (
    DeleteResponse,
    ErrorResponse,
    HealthResponse,
    ValidationErrorResponse,
    ValidationFieldError
)
from ..core.config import VERSION, debug_enabled
from ..core.db import create_backend
from ..core.errors import BackendUnavailable, PlanStoreError, ValidationFailed
from ..core.store import PlanStore
from ..core.validation import get_validator
from ..util.logging import logger


def get_store(request: Request) -> PlanStore:
    """Dependency returning the PlanStore bound to this application."""
    return request.app.state.store


def _error_body(exc: PlanStoreError) -> dict:
    if isinstance(exc, ValidationFailed):
        return ValidationErrorResponse.model_validate(exc.to_dict()).model_dump()
    return ErrorResponse(message=exc.message).model_dump()


def create_app(store: PlanStore = None, fail_fast: bool = True) -> FastAPI:
    """Build the FastAPI application around a PlanStore.

    With fail_fast, startup aborts when the storage backend is unreachable so
    the service never begins serving without it.
    """
    # Raises SchemaDefinitionError before serving if the plan schema is inconsistent
    get_validator()
    if store is None:
        store = PlanStore(create_backend())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        backend = app.state.store.backend
        if backend.is_ready():
            logger.log_operation("startup", "ready", {"backend": backend.name})
        else:
            logger.log_operation("startup", "backend_unreachable", {"backend": backend.name})
            if fail_fast:
                raise BackendUnavailable(f"Cannot reach {backend.name} storage backend")
        yield
        backend.close()
        logger.log_operation("shutdown", "complete", {"backend": backend.name})

    app = FastAPI(
        title="Plan Store API",
        version=VERSION,
        description="JSON plan documents with schema validation and conditional reads",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan
    )
    app.state.store = store

    @app.exception_handler(PlanStoreError)
    async def plan_store_error_handler(request: Request, exc: PlanStoreError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc))

    @app.exception_handler(RequestValidationError)
    async def malformed_body_handler(request: Request, exc: RequestValidationError):
        errors = [
            ValidationFieldError(
                field=".".join(str(part) for part in err.get("loc", ())),
                constraint=str(err.get("type", "invalid")),
                message=str(err.get("msg", "invalid request"))
            )
            for err in exc.errors()
        ]
        logger.log_validation_error("request", [e.model_dump() for e in errors])
        body = ValidationErrorResponse(message="Malformed JSON body", errors=errors)
        return JSONResponse(status_code=400, content=body.model_dump())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.get("/health", response_model=HealthResponse)
    def health_check_endpoint(store: PlanStore = Depends(get_store)):
        """Check backend reachability."""
        ready = store.backend.is_ready()
        return HealthResponse(
            status="healthy" if ready else "unhealthy",
            version=VERSION,
            backend=store.backend.name,
            backend_ready=ready
        )

    @app.post(
        "/v1/plan",
        status_code=201,
        responses={400: {"model": ValidationErrorResponse}, 500: {"model": ErrorResponse}}
    )
    def create_plan(document: Any = Body(...), store: PlanStore = Depends(get_store)):
        """Create or overwrite a plan; the response carries its ETag."""
        stored = store.create(document)
        return JSONResponse(status_code=201, content=stored.document, headers={"ETag": stored.etag})

    @app.get(
        "/v1/plan/{object_id}",
        responses={304: {"description": "Not Modified"}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
    )
    def read_plan(
        object_id: str,
        if_none_match: Optional[str] = Header(None),
        store: PlanStore = Depends(get_store)
    ):
        stored = store.read(object_id, if_none_match=if_none_match)
        if not stored.modified:
            return Response(status_code=304, headers={"ETag": stored.etag})
        return JSONResponse(status_code=200, content=stored.document, headers={"ETag": stored.etag})

    @app.delete(
        "/v1/plan/{object_id}",
        response_model=DeleteResponse,
        responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
    )
    def delete_plan(object_id: str, store: PlanStore = Depends(get_store)):
        store.delete(object_id)
        return DeleteResponse(message="Plan deleted successfully")

    return app
