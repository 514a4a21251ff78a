"""
Convenience factory methods for common failures.

Eliminates boilerplate for the most frequent error codes:

    from outcomes import OutcomeFailures

    # Instead of:
    Outcome.failure(ErrorCode.VALIDATION_ERROR, "Name is required")

    # Write:
    OutcomeFailures.validation_error("Name is required")
"""

from __future__ import annotations

from outcomes.error import Error, ErrorCode
from outcomes.outcome import Outcome


class OutcomeFailures:
    """Factory methods for failures carrying a well-known ErrorCode."""

    @staticmethod
    def validation_error(message: str) -> Outcome:
        """Invalid input — missing fields, wrong format, type mismatch."""
        return Outcome.failure(ErrorCode.VALIDATION_ERROR, message)

    @staticmethod
    def business_rule_error(message: str) -> Outcome:
        """Domain invariant violated — business constraint failed."""
        return Outcome.failure(ErrorCode.BUSINESS_RULE_ERROR, message)

    @staticmethod
    def not_found(resource_type: str, identifier: object) -> Outcome:
        """Resource doesn't exist."""
        return Outcome.failure(
            ErrorCode.NOT_FOUND,
            f"{resource_type} not found with identifier: {identifier}",
        )

    @staticmethod
    def authentication_error(message: str) -> Outcome:
        """Invalid credentials or expired token."""
        return Outcome.failure(ErrorCode.AUTHENTICATION_ERROR, message)

    @staticmethod
    def authorization_error(message: str) -> Outcome:
        """Insufficient permissions."""
        return Outcome.failure(ErrorCode.AUTHORIZATION_ERROR, message)

    @staticmethod
    def timeout_error(message: str) -> Outcome:
        """Operation exceeded time limit."""
        return Outcome.failure(ErrorCode.TIMEOUT_ERROR, message)

    @staticmethod
    def configuration_error(message: str) -> Outcome:
        """System misconfiguration."""
        return Outcome.failure(ErrorCode.CONFIGURATION_ERROR, message)

    @staticmethod
    def cancelled(message: str = "Operation was cancelled") -> Outcome:
        return Outcome.failure(ErrorCode.CANCELLED, message)

    @staticmethod
    def from_exception(exception: BaseException) -> Outcome:
        """
        Failure carrying a translated exception.

        Same translation as Outcome.try_run: the code is the exception's type
        name, the message includes the innermost cause.
        """
        return Outcome.failure(Error.from_exception(exception))
