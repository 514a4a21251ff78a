"""
Async composition patterns built on the public Outcome contract.

The core never schedules, retries, or times anything out. These helpers are
the usual policies layered on top of it:

  - gather()           concurrent fan-out, errors aggregated like Outcome.all_of
  - retry()            re-run a failing async operation with exponential backoff
  - with_timeout()     turn a timeout into a TIMEOUT_ERROR failure
  - first_success()    fallback chain over async outcome factories
  - check_cancelled()  surface a caller-supplied cancellation signal as an error
  - summarize()        batch statistics over many outcomes

Exceptions raised by the awaited code are captured the way Outcome.try_run
captures them. asyncio.CancelledError is never captured.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, Optional, Protocol, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from outcomes.config import get_settings
from outcomes.error import Error, ErrorCode
from outcomes.exceptions import InvalidArgumentError, OutcomeUsageError
from outcomes.outcome import Outcome, Success

T = TypeVar("T")
log = structlog.get_logger()

OutcomeFactory = Callable[[], Awaitable[Outcome[T]]]


class CancellationSignal(Protocol):
    """Anything with is_set(): asyncio.Event, threading.Event, ..."""

    def is_set(self) -> bool: ...


# ──────────────────────── Fan-out ────────────────────────


async def _run_flat(factory: OutcomeFactory[T]) -> Outcome[T]:
    """Await *factory*, capturing a raised exception as a failure."""
    captured = await Outcome.try_run_async(factory)
    return captured.bind(lambda outcome: outcome)


async def gather(*awaitables: Awaitable[Outcome[T]]) -> Outcome[list[T]]:
    """
    Await outcome-producing awaitables concurrently and aggregate them.

        dashboard = await gather(get_user(uid), get_orders(uid), get_stats(uid))

    Succeeds with the values in argument order; otherwise carries the errors
    of every failing input, in argument order. A raised exception counts as
    a failure with the translated error. OutcomeUsageError is re-raised.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    outcomes: list[Outcome[T]] = []
    for result in results:
        if isinstance(result, OutcomeUsageError):
            raise result
        if isinstance(result, Exception):
            outcomes.append(Outcome.success().append_error(result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(result)
    return Outcome.all_of(outcomes)


# ──────────────────────── Retry ────────────────────────


def _log_failed_attempt(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome.result() if retry_state.outcome else None
    log.warning(
        "retry.attempt_failed",
        attempt=retry_state.attempt_number,
        errors=[str(e) for e in outcome.errors()] if outcome is not None else [],
        next_wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
    )


async def retry(
    operation: OutcomeFactory[T],
    attempts: Optional[int] = None,
    min_wait: Optional[float] = None,
    max_wait: Optional[float] = None,
) -> Outcome[T]:
    """
    Invoke *operation* until it succeeds or the attempts run out.

    Waits with exponential backoff between attempts. Defaults come from
    OutcomeSettings (OUTCOMES_RETRY_*). When every attempt fails, the last
    failure is returned with a RETRIES_EXHAUSTED error appended.

        outcome = await retry(lambda: fetch_rates("EUR", "USD"), attempts=5)
    """
    settings = get_settings()
    attempts = attempts if attempts is not None else settings.retry_attempts
    min_wait = min_wait if min_wait is not None else settings.retry_min_wait_seconds
    max_wait = max_wait if max_wait is not None else settings.retry_max_wait_seconds
    if attempts < 1:
        raise InvalidArgumentError(f"attempts must be at least 1, got {attempts}")

    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_result(lambda outcome: outcome.is_failure()),
        before_sleep=_log_failed_attempt,
        retry_error_callback=lambda state: state.outcome.result(),
    )
    outcome = await retrying(_run_flat, operation)
    if outcome.is_failure():
        log.error("retry.exhausted", attempts=attempts)
        return outcome.append_error(
            Error(ErrorCode.RETRIES_EXHAUSTED, f"Operation failed after {attempts} attempts")
        )
    return outcome


# ──────────────────────── Timeout ────────────────────────


async def with_timeout(
    awaitable: Awaitable[Outcome[T]],
    seconds: Optional[float] = None,
) -> Outcome[T]:
    """
    Await *awaitable* for at most *seconds* (default OUTCOMES_DEFAULT_TIMEOUT_SECONDS).

    On timeout the awaitable is cancelled and a TIMEOUT_ERROR failure returned.
    Exceptions raised by the awaitable itself, a TimeoutError of its own
    included, become translated errors instead.
    """
    timeout = seconds if seconds is not None else get_settings().default_timeout_seconds
    try:
        return await asyncio.wait_for(_run_flat(lambda: awaitable), timeout)
    except TimeoutError:
        log.warning("timeout.expired", timeout_seconds=timeout)
        return Outcome.failure(
            ErrorCode.TIMEOUT_ERROR, f"Operation timed out after {timeout} seconds"
        )


# ──────────────────────── Fallback ────────────────────────


async def first_success(*factories: OutcomeFactory[T]) -> Outcome[T]:
    """
    Try each factory in order; return the first success.

    Later factories are never invoked once one succeeds. If all fail, the
    last failure is returned.

        config = await first_success(load_remote, load_from_db, load_from_file)
    """
    if not factories:
        raise InvalidArgumentError("At least one factory must be provided.")
    for factory in factories[:-1]:
        outcome = await _run_flat(factory)
        if outcome.is_success():
            return outcome
        log.debug("fallback.failed", errors=[str(e) for e in outcome.errors()])
    return await _run_flat(factories[-1])


# ──────────────────────── Cancellation ────────────────────────


def check_cancelled(outcome: Outcome[T], signal: CancellationSignal) -> Outcome[T]:
    """
    Append a CANCELLED error when *signal* is set; otherwise return *outcome*.

    Call it between await points of a long chain:

        step = await outcome.bind_async(download)
        step = check_cancelled(step, stop_event)
        step = await step.bind_async(parse)
    """
    if signal.is_set():
        return outcome.append_error(Error(ErrorCode.CANCELLED, "Operation was cancelled"))
    return outcome


# ──────────────────────── Batch ────────────────────────


@dataclass(frozen=True, slots=True)
class BatchSummary(Generic[T]):
    """Per-item results of a batch: successful values, all errors, and counts."""

    successful: list[T]
    errors: list[Error]
    total: int
    success_count: int
    failure_count: int


def summarize(outcomes: Iterable[Outcome[T]]) -> BatchSummary[T]:
    """
    Split a batch into successful values and errors without failing the batch.

    Unlike Outcome.all_of, partial failure is reported, not propagated.
    """
    successful: list[T] = []
    errors: list[Error] = []
    failure_count = 0
    for outcome in outcomes:
        match outcome:
            case Success(v):
                successful.append(v)
            case _:
                failure_count += 1
                errors.extend(outcome.errors())
    return BatchSummary(
        successful=successful,
        errors=errors,
        total=len(successful) + failure_count,
        success_count=len(successful),
        failure_count=failure_count,
    )
