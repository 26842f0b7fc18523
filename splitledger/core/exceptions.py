"""
Custom exception classes for Split Ledger.
Provides specific exceptions for different error scenarios.
"""

import functools
from typing import Optional, Dict, Any


GENERIC_BALANCE_ERROR = "Failed to compute balances"


class SplitLedgerException(Exception):
    """Base exception class for all Split Ledger errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(SplitLedgerException):
    """Raised when configuration is invalid or missing."""
    pass


# =============================================================================
# VALIDATION ERRORS
# =============================================================================

class ValidationError(SplitLedgerException):
    """Base class for data validation errors."""
    pass


class InvalidInputError(ValidationError):
    """Raised when split or payment input is rejected at creation time."""
    pass


class InconsistentExpenseError(ValidationError):
    """Payments of an expense do not add up to its total.

    The ledger builder reports this through the log and keeps going.
    """
    pass


# =============================================================================
# LEDGER ERRORS
# =============================================================================

class LedgerError(SplitLedgerException):
    """Base class for ledger lookup errors."""
    pass


class MemberNotFoundError(LedgerError):
    """Raised when a member has no balance record in a ledger."""
    pass


# =============================================================================
# EXCEPTION UTILITIES
# =============================================================================

def create_error_response(
    exception: SplitLedgerException,
    include_details: bool = None
) -> Dict[str, Any]:
    """
    Create a standardized error response for API collaborators.

    The user-facing message is always the generic balance failure text;
    the specific message is kept under ``reason``.

    Args:
        exception: The exception to convert
        include_details: Whether to include error details (auto-detected from environment)

    Returns:
        Dictionary suitable for API error response
    """
    from .config import settings

    if include_details is None:
        include_details = settings.is_development

    response = {
        "success": False,
        "error": {
            "type": exception.__class__.__name__,
            "message": GENERIC_BALANCE_ERROR,
            "reason": exception.message,
            "code": exception.error_code
        }
    }

    if include_details and exception.details:
        response["error"]["details"] = exception.details

    return response


# =============================================================================
# EXCEPTION DECORATORS
# =============================================================================

def handle_exceptions(
    default_exception_class: type = SplitLedgerException,
    context: Optional[str] = None
):
    """
    Decorator to convert unexpected exceptions into Split Ledger exceptions.

    Args:
        default_exception_class: Exception class to use for unhandled exceptions
        context: Context string to add to error details
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except SplitLedgerException:
                raise
            except Exception as e:
                raise default_exception_class(
                    message=f"Error in {func.__name__}: {str(e)}",
                    error_code=e.__class__.__name__,
                    details={"context": context, "function": func.__name__}
                ) from e

        return wrapper
    return decorator
