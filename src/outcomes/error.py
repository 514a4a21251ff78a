"""
Error: a single (code, message) pair carried by a failed Outcome.

Errors are frozen dataclasses compared and hashed by value, so two errors
with the same code and message are interchangeable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Iterator


@unique
class ErrorCode(StrEnum):
    """
    Codes shared by this package and the code built on it.

    Error.code accepts any string; members of this enum are stored as their
    plain value. The comment beside each member is the HTTP status a web
    layer would usually map it to.
    """

    # 4xx: the caller can fix it
    VALIDATION_ERROR = "VALIDATION_ERROR"  # 400 malformed or missing input
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"  # 401
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"  # 403
    NOT_FOUND = "NOT_FOUND"  # 404
    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"  # 409 well-formed input a domain rule rejects
    RATE_LIMIT_ERROR = "RATE_LIMIT_ERROR"  # 429

    # 5xx: the system is at fault
    TECHNICAL_ERROR = "TECHNICAL_ERROR"  # 500
    DATABASE_ERROR = "DATABASE_ERROR"  # 500
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"  # 500
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"  # 502
    SERVICE_UNAVAILABLE_ERROR = "SERVICE_UNAVAILABLE_ERROR"  # 503
    TIMEOUT_ERROR = "TIMEOUT_ERROR"  # 504
    UNKNOWN_ERROR = "UNKNOWN_ERROR"  # 500

    # appended by outcomes.patterns
    RETRIES_EXHAUSTED = "RETRIES_EXHAUSTED"
    CANCELLED = "CANCELLED"


_CHAIN_SEPARATOR = " --> "


@dataclass(frozen=True, slots=True)
class Error:
    """
    Immutable failure descriptor: a code (possibly empty) and a message.

    >>> Error("NOT_FOUND", "User not found")
    Error(code='NOT_FOUND', message='User not found')
    >>> str(Error.of("Name is required"))
    'Name is required'
    >>> str(Error(ErrorCode.VALIDATION_ERROR, "Name is required"))
    'VALIDATION_ERROR: Name is required'
    """

    code: str = ""
    message: str = ""

    def __post_init__(self) -> None:
        # None collapses to "", ErrorCode members to their plain value.
        object.__setattr__(self, "code", "" if self.code is None else str(self.code))
        object.__setattr__(self, "message", "" if self.message is None else str(self.message))

    @staticmethod
    def of(message: str) -> Error:
        """Create a code-less error from a message alone."""
        return Error(code="", message=message)

    @staticmethod
    def from_exception(exception: BaseException) -> Error:
        """
        Translate a raised exception into an Error.

        The code is the exception's type name. The message is the exception's
        own message; when the exception was raised from (or while handling)
        another one, the innermost message of that chain is appended after
        " --> ".

            try:
                ...
            except KeyError as e:
                raise LookupError("user lookup failed") from e

            Error.from_exception(exc)
            # Error(code='LookupError', message="user lookup failed --> 'id'")
        """
        message = str(exception)
        innermost = _innermost_cause(exception)
        if innermost is not None:
            message = f"{message}{_CHAIN_SEPARATOR}{innermost}"
        return Error(code=type(exception).__name__, message=message)

    def __str__(self) -> str:
        if not self.code:
            return self.message
        return f"{self.code}: {self.message}"


def _caused_by(exception: BaseException) -> BaseException | None:
    """The exception this one was raised from, explicitly or implicitly."""
    if exception.__cause__ is not None:
        return exception.__cause__
    if exception.__suppress_context__:
        return None
    return exception.__context__


def _walk_cause_chain(exception: BaseException) -> Iterator[BaseException]:
    """Yield the causes of *exception*, outermost first, with cycle protection."""
    seen: set[int] = {id(exception)}
    current = _caused_by(exception)
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _caused_by(current)


def _innermost_cause(exception: BaseException) -> BaseException | None:
    innermost = None
    for cause in _walk_cause_chain(exception):
        innermost = cause
    return innermost
