"""
Custom exception classes for the application.

Configuration gaps and repeated stage transitions are not errors:
the engine recovers from them locally and logs a warning.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "ORDER_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# WORK SCHEDULE ERRORS
# ===================

class InvalidScheduleError(ValidationError):
    """Work schedule cannot be walked (no work days or bad hour bounds)."""

    def __init__(self, violations: list[str], schedule: Optional[dict] = None):
        super().__init__(
            code="INVALID_WORK_SCHEDULE",
            message="Work schedule is invalid: " + "; ".join(violations),
            details={"violations": violations, "schedule": schedule or {}}
        )
        self.violations = violations


# ===================
# ORDER ERRORS
# ===================

class OrderNotFoundError(NotFoundError):
    """Order not found."""

    def __init__(self, order_id: str):
        super().__init__(
            resource="Order",
            identifier=order_id,
            code="ORDER_NOT_FOUND"
        )


class OrderNotEditableError(ValidationError):
    """Order lines cannot change once the order is completed or archived."""

    def __init__(self, order_id: str, status: str):
        super().__init__(
            code="ORDER_NOT_EDITABLE",
            message=f"Order is {status} and can no longer be edited",
            details={"id": order_id, "status": status}
        )


class InvalidStatusTransitionError(ValidationError):
    """Explicit status change not allowed from the current status."""

    def __init__(self, current_status: str, new_status: str, required_status: str = "completed"):
        super().__init__(
            code="INVALID_STATUS_TRANSITION",
            message=f"Cannot transition from {current_status} to {new_status}",
            details={
                "current_status": current_status,
                "new_status": new_status,
                "reason": f"Only {required_status} orders can move to {new_status}"
            }
        )
