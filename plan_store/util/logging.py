"""
Structured logging for plan store operations.
"""

import logging
from typing import Any, Dict, List

from ..core.config import LOG_LEVEL


class StructuredLogger:
    """Structured logger for plan lifecycle, validation and backend events."""

    def __init__(self, name: str = "plan_store", level: str = LOG_LEVEL):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level, logging.INFO))

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_plan_operation(self, operation: str, object_id: str, status: str = "success", etag: str = None):
        """Log a plan lifecycle operation."""
        details = {"objectId": object_id}
        if etag is not None:
            details["etag"] = etag

        self.log_operation(f"plan.{operation}", status, details)

    def log_validation_error(self, operation: str, errors: List[Any], object_id: str = None):
        """Log schema validation errors without the offending values."""
        sanitized_errors = []
        for error in errors:
            if hasattr(error, "to_dict"):
                error = error.to_dict()
            if isinstance(error, dict):
                sanitized = {k: v for k, v in error.items() if k not in ("value", "instance")}
                if isinstance(sanitized.get("message"), str):
                    sanitized["message"] = sanitized["message"][:100]
                sanitized_errors.append(sanitized)
            else:
                sanitized_errors.append(str(error)[:100])

        log_details = {
            "errors": sanitized_errors,
            "error_count": len(sanitized_errors)
        }
        if object_id:
            log_details["objectId"] = object_id

        self.log_operation(f"validation.{operation}", "rejected", log_details, level=logging.WARNING)

    def log_backend_error(self, operation: str, error: BaseException):
        """Log a storage backend failure with its cause."""
        self.log_operation(
            f"backend.{operation}",
            "failed",
            {"error_type": type(error).__name__, "error": str(error)[:200]},
            level=logging.ERROR
        )

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()
