"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,

    # Work schedule
    InvalidScheduleError,

    # Orders
    OrderNotFoundError,
    OrderNotEditableError,
    InvalidStatusTransitionError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",

    # Work schedule
    "InvalidScheduleError",

    # Orders
    "OrderNotFoundError",
    "OrderNotEditableError",
    "InvalidStatusTransitionError",
]
