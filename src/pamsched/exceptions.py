"""Custom exception classes for PAM scheduling errors.

This module defines the exception hierarchy used throughout the pamsched
package. All exceptions inherit from ActusException, which stores a message
together with optional context information about the failing contract.
"""

from typing import Any


class ActusException(Exception):
    """Base exception for all pamsched errors.

    Attributes:
        message: Human-readable error description
        context: Additional context information about the error
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description
            context: Optional dictionary with additional error context
                    (e.g., contract_id, cycle, date)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation of the exception."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class InvalidTermsError(ActusException):
    """Raised for structurally inconsistent contract terms.

    Examples are a maturity date before the initial exchange date or a
    termination date before the status date.

    Example:
        >>> raise InvalidTermsError(
        ...     "Maturity date precedes initial exchange date",
        ...     context={"contract_id": "PAM-001", "maturity_date": "2023-01-01"}
        ... )
    """


class InvalidPeriodError(ActusException):
    """Raised for an unparsable or non-positive recurrence period.

    Example:
        >>> raise InvalidPeriodError(
        ...     "Invalid cycle format",
        ...     context={"cycle": "P0M"}
        ... )
    """


class UnsupportedConventionError(ActusException):
    """Raised for an unrecognized day count or business day convention name.

    Example:
        >>> raise UnsupportedConventionError(
        ...     "Unsupported day count convention",
        ...     context={"convention": "ACT/999"}
        ... )
    """


class DateTimeError(ActusException):
    """Raised when a date string cannot be parsed.

    Example:
        >>> raise DateTimeError(
        ...     "Unable to parse ISO date string",
        ...     context={"date_string": "2024-13-45"}
        ... )
    """


class ObserverError(ActusException):
    """Raised when market data (e.g. a rate curve) is unavailable."""


class ConfigurationError(ActusException):
    """Raised for invalid package configuration.

    This covers malformed environment variables and inconsistent
    initialization parameters.
    """


class EngineError(ActusException):
    """Raised when the portfolio scheduling engine itself fails.

    Failures of individual contracts are reported per contract and do not
    raise this exception.
    """
