"""
Railway-oriented outcomes for Python.

Explicit, composable error handling — no exceptions in business logic.

    from outcomes import Outcome, ErrorCode

    def validate_age(age: int) -> Outcome[int]:
        return Outcome.success(age).ensure(
            lambda a: a >= 0, ErrorCode.VALIDATION_ERROR, "Age must be non-negative"
        )

    outcome = (
        Outcome.success({"name": "Alice", "age": 30})
        .bind(lambda d: validate_age(d["age"]))
        .map(lambda age: f"Valid user, age {age}")
    )
"""

from outcomes.error import Error, ErrorCode
from outcomes.exceptions import InvalidArgumentError, InvalidStateError, OutcomeUsageError
from outcomes.outcome import Failure, Outcome, Success
from outcomes.execution import (
    ComposableExecutionContext,
    ExecutionContext,
    LoggingExecutionContext,
    NoOpExecutionContext,
    with_context,
)
from outcomes.failures import OutcomeFailures
from outcomes.assertions import OutcomeAssertions
from outcomes.config import OutcomeSettings, get_settings
from outcomes.logs import configure_logging, log_failure

__all__ = [
    "Outcome",
    "Success",
    "Failure",
    "Error",
    "ErrorCode",
    "OutcomeUsageError",
    "InvalidArgumentError",
    "InvalidStateError",
    "ExecutionContext",
    "NoOpExecutionContext",
    "LoggingExecutionContext",
    "ComposableExecutionContext",
    "with_context",
    "OutcomeFailures",
    "OutcomeAssertions",
    "OutcomeSettings",
    "get_settings",
    "configure_logging",
    "log_failure",
]

__version__ = "1.0.0"
