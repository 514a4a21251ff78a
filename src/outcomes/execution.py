"""
Execution boundaries for Outcome-returning computations.

A pipeline of map/bind/ensure steps stays pure: it only builds an Outcome.
Whatever has to happen around it, such as timing or turning a stray exception
into a failure, belongs to an ExecutionContext applied at the edge:

    def register(form: SignupForm) -> Outcome[Account]:
        return (
            Outcome.success(form)
            .bind(validate_form)
            .bind(reserve_username)
            .map(to_account)
        )

    outcome = LoggingExecutionContext(operation="register").execute(lambda: register(form))

    # or, for a handler called from many places
    @with_context(LoggingExecutionContext(operation="register"))
    def handle_signup(form: SignupForm) -> Outcome[Account]:
        return register(form)
"""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Callable, Optional, Protocol, TypeVar, runtime_checkable

import structlog

from outcomes.config import get_settings
from outcomes.exceptions import OutcomeUsageError
from outcomes.outcome import Outcome

T = TypeVar("T")
log = structlog.get_logger()


# ──────────────────────── Protocol ────────────────────────


@runtime_checkable
class ExecutionContext(Protocol):
    """Runs a computation that produces an Outcome. Implementations need not subclass this."""

    def execute(self, computation: Callable[[], Outcome[T]]) -> Outcome[T]: ...


# ──────────────────────── Passthrough ────────────────────────


class NoOpExecutionContext:
    """
    Calls the computation and returns its outcome untouched.

    The default inner context, and the one to hand a handler under test.
    """

    def execute(self, computation: Callable[[], Outcome[T]]) -> Outcome[T]:
        return computation()


# ──────────────────────── Logging ────────────────────────


class LoggingExecutionContext:
    """
    Logs the start and end of a computation, with its duration and final state.

    Delegates to *inner* (NoOpExecutionContext by default). An Exception
    escaping the computation is logged and returned as a Failure built with
    Error.from_exception. OutcomeUsageError is re-raised.

        ctx = LoggingExecutionContext(operation="import_users", log_level="debug")

    Without *log_level*, OutcomeSettings.log_level (OUTCOMES_LOG_LEVEL) is used.
    """

    def __init__(
        self,
        inner: Optional[ExecutionContext] = None,
        operation: str = "unknown",
        log_level: Optional[str] = None,
    ) -> None:
        self._inner = inner or NoOpExecutionContext()
        self._operation = operation
        level_name = (log_level or get_settings().log_level).upper()
        self._log_level = getattr(logging, level_name, logging.INFO)

    def execute(self, computation: Callable[[], Outcome[T]]) -> Outcome[T]:
        log.log(self._log_level, "execution.started", operation=self._operation)
        started = time.monotonic()

        try:
            outcome = self._inner.execute(computation)
        except OutcomeUsageError:
            raise
        except Exception as e:
            log.error(
                "execution.raised",
                operation=self._operation,
                elapsed_seconds=round(time.monotonic() - started, 3),
                error=str(e),
            )
            return Outcome.success().append_error(e)

        log.log(
            self._log_level,
            "execution.completed",
            operation=self._operation,
            elapsed_seconds=round(time.monotonic() - started, 3),
            state="SUCCESS" if outcome.is_success() else "FAILURE",
            errors=[str(e) for e in outcome.errors()],
        )
        return outcome


# ──────────────────────── Composition ────────────────────────


class ComposableExecutionContext:
    """
    Nests several contexts; the first one given is the outermost.

        ctx = ComposableExecutionContext(
            LoggingExecutionContext(operation="sync_inventory"),
            lock_context,
        )
    """

    def __init__(self, *contexts: ExecutionContext) -> None:
        if not contexts:
            raise ValueError("At least one execution context is required")
        self._contexts = tuple(contexts)

    def execute(self, computation: Callable[[], Outcome[T]]) -> Outcome[T]:
        run = computation
        for context in reversed(self._contexts):
            run = functools.partial(context.execute, run)
        return run()


# ──────────────────────── Decorator ────────────────────────


def with_context(ctx: ExecutionContext) -> Callable:
    """
    Run the decorated Outcome-returning function inside *ctx* on every call.

        @with_context(LoggingExecutionContext(operation="import_users"))
        def import_users(rows: list[dict]) -> Outcome[list[User]]:
            return Outcome.all_of(parse_user(row) for row in rows)
    """

    def decorator(fn: Callable[..., Outcome[T]]) -> Callable[..., Outcome[T]]:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Outcome[T]:
            return ctx.execute(functools.partial(fn, *args, **kwargs))

        return wrapper

    return decorator
