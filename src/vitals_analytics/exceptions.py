"""
Custom exceptions for the vitals analytics package.

Analytics calls never raise for business edge cases (empty histories,
missing metrics, thin baselines); absence is returned as ``None``. The
exceptions here cover the input boundary only:
- strict parsing of raw measurement records
- explicit lookup of a blood-pressure guideline by key
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Error codes for consistent error payloads."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Input records
    ENTRY_VALIDATION_ERROR = "ENTRY_VALIDATION_ERROR"

    # Classification
    UNKNOWN_GUIDELINE = "UNKNOWN_GUIDELINE"


class VitalsAnalyticsError(Exception):
    """
    Base exception for all vitals analytics errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a serializable error payload."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class EntryValidationError(VitalsAnalyticsError):
    """Raised when a raw measurement record cannot be parsed in strict mode."""

    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if index is not None:
            error_details["index"] = index
        super().__init__(
            message=message,
            code=ErrorCode.ENTRY_VALIDATION_ERROR,
            details=error_details,
        )


class UnknownGuidelineError(VitalsAnalyticsError):
    """Raised when a blood-pressure guideline key is not one of the built-in tables."""

    def __init__(self, guideline: str, available: Optional[list] = None) -> None:
        details: Dict[str, Any] = {"guideline": guideline}
        if available:
            details["available"] = list(available)
        super().__init__(
            message=f"Unknown blood pressure guideline '{guideline}'",
            code=ErrorCode.UNKNOWN_GUIDELINE,
            details=details,
        )
