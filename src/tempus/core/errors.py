"""
Structured error types for tempus.

Provides a small hierarchy of typed errors with metadata for categorization,
reporting, and root cause analysis through error chaining.

Temporal functions have two failure channels. Wrong argument variants and
unrepresentable arithmetic produce the soft null (``NONE``) and never reach
this module. User-correctable input, such as an unknown grouping unit, is
reported as an ``InvalidArgumentsError`` wrapped in ``Err``. Library
invariant violations raise ``InvariantError``.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors carry the function and argument involved
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        TempusError                           │
        │            (category, context, cause)                        │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ValidationError         ConfigError        InvariantError   │
        │  (VALIDATION)            (CONFIG)           (INTERNAL)       │
        │       │                                                      │
        │  InvalidArgumentsError                                       │
        │  InvalidFunctionError                                        │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = InvalidArgumentsError("time::group", "Unknown unit")
    >>> error.name
    'time::group'
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>

    Adding context to an error:

    >>> error = InvalidArgumentsError("time::group", "Unknown unit")
    >>> error.with_context(argument="fortnight")
    InvalidArgumentsError('Incorrect arguments for function time::group(). Unknown unit', category=VALIDATION)
    >>> error.context.argument
    'fortnight'

Tags:
    error-handling, exception-hierarchy, error-context, tempus

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and routing.

    Attributes:
        VALIDATION: Invalid function arguments supplied by the caller
        CONFIG: Missing config, invalid settings
        INTERNAL: Bugs, unexpected state
        UNKNOWN: Uncategorized errors
    """

    VALIDATION = "VALIDATION"     # Invalid arguments
    CONFIG = "CONFIG"             # Invalid settings
    INTERNAL = "INTERNAL"         # Invariant violations
    UNKNOWN = "UNKNOWN"           # Uncategorized errors


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Examples:
        >>> ctx = ErrorContext(function="time::group", argument="fortnight")
        >>> ctx.to_dict()
        {'function': 'time::group', 'argument': 'fortnight'}

    Attributes:
        function: Query-language name of the function that failed
        argument: The offending argument value, rendered as text
        metadata: Additional key-value pairs
    """

    function: str | None = None
    argument: str | None = None

    # Additional metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["function", "argument"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class TempusError(Exception):
    """
    Base exception for all tempus errors.

    Every TempusError carries a ``category`` for classification, an
    ``ErrorContext`` with structured metadata, and an optional ``cause`` for
    chaining. Subclasses set ``default_category``.

    Examples:
        >>> error = TempusError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'TempusError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> TempusError:
        """
        Add context to this error (fluent API).

        Usage:
            return Err(InvalidArgumentsError("time::group", msg).with_context(
                argument=unit,
            ))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(TempusError):
    """
    Caller-supplied input failed validation.

    Never retryable - the query must be fixed.
    """

    default_category = ErrorCategory.VALIDATION


class InvalidArgumentsError(ValidationError):
    """
    A function received arguments it cannot accept.

    The message names the function and, where the argument is drawn from a
    closed set, lists the allowed values (also exposed as ``allowed``).
    """

    def __init__(
        self,
        name: str,
        message: str,
        *,
        allowed: tuple[str, ...] = (),
        **kwargs: Any,
    ):
        super().__init__(f"Incorrect arguments for function {name}(). {message}", **kwargs)
        self.name = name
        self.reason = message
        self.allowed = tuple(allowed)
        self.context.function = name

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["name"] = self.name
        if self.allowed:
            result["allowed"] = list(self.allowed)
        return result


class InvalidFunctionError(ValidationError):
    """No function is registered under the requested name."""

    def __init__(self, name: str, **kwargs: Any):
        super().__init__(f"There was a problem running the {name}() function. No such function", **kwargs)
        self.name = name
        self.context.function = name


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(TempusError):
    """Configuration error. Never retryable."""

    default_category = ErrorCategory.CONFIG


# =============================================================================
# INTERNAL ERRORS
# =============================================================================


class InvariantError(TempusError):
    """
    A library invariant was violated.

    Raised, never returned: this signals a bug in tempus rather than bad
    input from the caller.
    """

    default_category = ErrorCategory.INTERNAL


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def categorize_error(error: Exception) -> ErrorCategory:
    """Get the category of an error."""
    if isinstance(error, TempusError):
        return error.category
    if isinstance(error, (ValueError, TypeError)):
        return ErrorCategory.VALIDATION
    return ErrorCategory.UNKNOWN


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "TempusError",
    "ValidationError",
    "InvalidArgumentsError",
    "InvalidFunctionError",
    "ConfigError",
    "InvariantError",
    "categorize_error",
]
