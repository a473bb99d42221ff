"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class RangeError(AppError, IndexError):
    """A grid or ticket size falls outside its documented bounds.

    Raised at construction time; sizes are never clamped.
    """

    def __init__(self, message: str = "Value out of range", details: Any | None = None) -> None:
        super().__init__(code="range_error", message=message, status_code=400, details=details)


class MissingReferenceError(AppError, ValueError):
    """A grid was scored without a winning grid to compare against."""

    def __init__(self, message: str = "No winning grid supplied", details: Any | None = None) -> None:
        super().__init__(code="missing_reference", message=message, status_code=400, details=details)
