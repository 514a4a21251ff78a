"""
Outcome: the two-track value at the centre of railway-oriented error handling.

An Outcome[T] is either Success(value: T) or Failure(errors: tuple[Error, ...]).
Functions return one instead of raising. Once a step fails, the outcome stays
on the failure track: later map/bind/ensure steps are skipped and their
functions are never called.

    Success(form) ──bind(parse)──▶ ──bind(check_quota)──▶ ──map(save)──▶ Success(record)
                        │                     │
                        └─────────────────────┴──────────────────────▶ Failure(errors)

There is one generic type. An operation with nothing to return produces
Outcome[None]: Outcome.success() holds None, and callbacks that receive the
value simply get None.

Outcomes are immutable. append_error() and friends return a new Outcome, so
an outcome can be shared across threads and tasks without locking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Iterable,
    Optional,
    TypeVar,
)

from outcomes.error import Error, ErrorCode
from outcomes.exceptions import InvalidArgumentError, InvalidStateError, OutcomeUsageError

if TYPE_CHECKING:
    from outcomes.execution import ExecutionContext

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")

Errors = tuple[Error, ...]


class Outcome(Generic[T]):
    """
    Railway-oriented Outcome.

    Two possible states:
      - Success(value: T)               — the happy path
      - Failure(errors: tuple[Error])   — the error track, never empty

    Usage:
        >>> Outcome.success(42).map(lambda x: x * 2).value()
        84

        >>> outcome = Outcome.failure("VALIDATION_ERROR", "bad input")
        >>> outcome.map(lambda x: x * 2).is_failure()
        True
    """

    # ──────────────────────── Introspection ────────────────────────

    def is_success(self) -> bool:
        """Check if this Outcome is a Success."""
        return isinstance(self, Success)

    def is_failure(self) -> bool:
        """Check if this Outcome is a Failure."""
        return isinstance(self, Failure)

    def value(self) -> Optional[T]:
        """
        The success value, or None when this Outcome is a Failure.

        Never raises. Prefer .match() or get_value_or() when None is also a
        legitimate success value.
        """
        match self:
            case Success(v):
                return v
        return None

    def errors(self) -> Errors:
        """The errors in discovery order. Empty exactly when this is a Success."""
        match self:
            case Failure(errs):
                return errs
        return ()

    def first_error(self) -> Optional[Error]:
        """The first error, or None on Success."""
        errs = self.errors()
        return errs[0] if errs else None

    # ──────────────────────── Core Transformations ────────────────────────

    def match(
        self,
        on_success: Callable[[T], R],
        on_failure: Callable[[Errors], R],
    ) -> R:
        """
        Apply one of two functions depending on the state. Exactly one runs.

        This is the fundamental destructor:

            outcome.match(
                on_success=lambda user: f"Hello {user.name}",
                on_failure=lambda errors: f"Error: {errors[0]}",
            )
        """
        match self:
            case Success(v):
                return on_success(v)
            case Failure(errs):
                return on_failure(errs)
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[T], U]) -> Outcome[U]:
        """
        Transform the success value. Short-circuits on failure.

            Outcome.success(5).map(lambda x: x * 2)    # → Success(10)
            Outcome.failure("x").map(lambda x: x * 2)  # → Failure, mapper never called
        """
        match self:
            case Success(v):
                return Success(mapper(v))
            case Failure(errs):
                return Failure(errs)
        raise TypeError("unreachable")  # pragma: no cover

    def map_errors(self, mapper: Callable[[Error], Error]) -> Outcome[T]:
        """
        Transform every error. Passes through success unchanged.

            outcome.map_errors(lambda e: Error(e.code, f"Wrapped: {e.message}"))
        """
        match self:
            case Success(_):
                return self
            case Failure(errs):
                return Failure(tuple(mapper(e) for e in errs))
        raise TypeError("unreachable")  # pragma: no cover

    def bind(self, binder: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """
        Chain an Outcome-returning function. Short-circuits on failure.

        This is the key operator: it connects railway segments. Whatever the
        binder returns (success or failure) is returned as is.

            def validate(x: int) -> Outcome[int]:
                if x > 0:
                    return Outcome.success(x)
                return Outcome.failure("Must be positive")

            Outcome.success(5).bind(validate)   # → Success(5)
            Outcome.success(-1).bind(validate)  # → Failure(...)
        """
        match self:
            case Success(v):
                return binder(v)
            case Failure(errs):
                return Failure(errs)
        raise TypeError("unreachable")  # pragma: no cover

    def ensure(
        self,
        predicate: Callable[[T], bool],
        error: Error | str,
        message: Optional[str] = None,
    ) -> Outcome[T]:
        """
        Validate the success value against a condition.

        On an existing failure the predicate is not evaluated and the errors
        stay as they are. When the predicate returns False the given error is
        appended, producing a Failure.

        Accepts an Error, a message, or a code + message:

            Outcome.success(order).ensure(lambda o: o.total > 0, "Order total must be positive")
            Outcome.success(order).ensure(
                lambda o: o.total > 0,
                ErrorCode.VALIDATION_ERROR, "Order total must be positive",
            )
        """
        match self:
            case Success(v):
                if predicate(v):
                    return self
                return self.append_error(_coerce_error(error, message))
        return self

    def on_success(self, action: Callable[[T], Outcome[U]]) -> Outcome[U]:
        """Return action(value) on success, otherwise this failure itself."""
        match self:
            case Success(v):
                return action(v)
        return self  # type: ignore[return-value]

    def on_failure(self, action: Callable[[Errors], Outcome[T]]) -> Outcome[T]:
        """
        Return action(errors) on failure, otherwise this success itself.

            load_remote().on_failure(lambda errors: load_from_cache())
        """
        match self:
            case Failure(errs):
                return action(errs)
        return self

    # ──────────────────────── Error Accumulation ────────────────────────

    def append_error(self, error: Error | BaseException) -> Outcome[T]:
        """
        Return a Failure with this outcome's errors followed by *error*.

        A Success becomes a Failure; a Failure accumulates one more error.
        The receiver is never modified. Exceptions are translated with
        Error.from_exception().
        """
        if isinstance(error, BaseException):
            error = Error.from_exception(error)
        return Failure((*self.errors(), error))

    def append_errors(self, errors: Iterable[Error]) -> Outcome[T]:
        """
        Return a Failure with this outcome's errors followed by *errors*.

        An empty iterable leaves the outcome as it is.
        """
        additional = tuple(errors)
        if not additional:
            return self
        return Failure((*self.errors(), *additional))

    # ──────────────────────── Side Effects ────────────────────────

    def tap(self, action: Callable[[T], Any]) -> Outcome[T]:
        """
        Execute a side effect on the success value without altering the Outcome.

        Useful for logging, metrics, debugging:

            outcome.tap(lambda user: log.info("user.created", user_id=user.id))
        """
        match self:
            case Success(v):
                action(v)
        return self

    def tap_on_success(self, action: Callable[[], Any]) -> Outcome[T]:
        """Execute a no-argument side effect on success."""
        if self.is_success():
            action()
        return self

    def tap_on_failure(self, action: Callable[[Errors], Any]) -> Outcome[T]:
        """Execute a side effect on failure, receiving the errors."""
        match self:
            case Failure(errs):
                action(errs)
        return self

    def tap_always(self, action: Callable[[], Any]) -> Outcome[T]:
        """Execute a no-argument side effect whatever the state."""
        action()
        return self

    # ──────────────────────── Recovery ────────────────────────

    def recover(self, recovery_fn: Callable[[Errors], T]) -> Outcome[T]:
        """
        Recover from failure by producing a success value.

            outcome.recover(lambda errors: default_user)
        """
        match self:
            case Failure(errs):
                return Success(recovery_fn(errs))
        return self

    def get_value_or(self, default: T) -> T:
        """Extract the value, or return *default* on failure."""
        match self:
            case Success(v):
                return v
        return default

    def get_value_or_else(self, supplier: Callable[[], T]) -> T:
        """Extract the value, or compute a default. The supplier only runs on failure."""
        match self:
            case Success(v):
                return v
        return supplier()

    def or_else(self, alternative: Outcome[T]) -> Outcome[T]:
        """Return this outcome on success, otherwise *alternative*."""
        if self.is_success():
            return self
        return alternative

    def or_else_get(self, supplier: Callable[[], Outcome[T]]) -> Outcome[T]:
        """
        Return this outcome on success, otherwise the supplier's outcome.

        The supplier only runs on failure:

            load_remote().or_else_get(load_from_disk).or_else_get(lambda: Outcome.success(DEFAULTS))
        """
        if self.is_success():
            return self
        return supplier()

    def with_value(self, value: U) -> Outcome[U]:
        """
        Return a Success holding *value* in place of the current one.

        Only legal on a success. Calling it on a failure is a programming
        error and raises InvalidStateError.
        """
        if self.is_failure():
            raise InvalidStateError(
                "Cannot set the value of a failed outcome. The outcome must be successful."
            )
        return Success(value)

    # ──────────────────────── Execution Context ────────────────────────

    def within(self, execution_context: ExecutionContext) -> Outcome[T]:
        """
        Hand this Outcome to an execution context (logging, transactions, ...).

            outcome = (
                Outcome.success(data)
                .bind(validate)
                .bind(persist)
                .within(LoggingExecutionContext(operation="CreateOrder"))
            )
        """
        return execution_context.execute(lambda: self)

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def success(value: T = None) -> Outcome[T]:  # type: ignore[assignment]
        """Create a successful Outcome. Without a value it is the unit outcome (None)."""
        return Success(value)

    @staticmethod
    def failure(error: Error | str, message: Optional[str] = None) -> Outcome[T]:
        """
        Create a failed Outcome from a single error.

            Outcome.failure("User not found")                      # message only
            Outcome.failure(ErrorCode.NOT_FOUND, "User not found") # code + message
            Outcome.failure(Error("NOT_FOUND", "User not found"))  # ready-made Error
            Outcome.failure(ErrorCode.TIMEOUT_ERROR)              # code only

        A ready-made Error cannot be combined with a message (InvalidArgumentError).
        """
        return Failure((_coerce_error(error, message),))

    @staticmethod
    def failure_from(errors: Error | Iterable[Error]) -> Outcome[T]:
        """
        Create a failed Outcome from an Error or a sequence of Errors.

        Raises InvalidArgumentError when the sequence is empty: a failure
        always carries at least one error.
        """
        return Failure(errors)

    @staticmethod
    def from_optional(
        value: Optional[T],
        error_message: str,
        error_code: ErrorCode | str = ErrorCode.VALIDATION_ERROR,
    ) -> Outcome[T]:
        """
        Create an Outcome from a value that may be None.

            Outcome.from_optional(user, "User is required")
            Outcome.from_optional(config, "Missing config", ErrorCode.CONFIGURATION_ERROR)
        """
        if value is not None:
            return Success(value)
        return Outcome.failure(error_code, error_message)

    @staticmethod
    def try_run(action: Callable[[], T]) -> Outcome[T]:
        """
        Run *action* and capture its return value, or the exception it raises.

        Wraps exceptions into a Failure, eliminating try/except boilerplate:

            Outcome.try_run(lambda: repo.find(user_id))  # Outcome[User]
            Outcome.try_run(cache.clear)                 # Outcome[None]

        The error code is the exception's type name. Misuse of this API
        (OutcomeUsageError) is re-raised, never captured.
        """
        try:
            return Success(action())
        except OutcomeUsageError:
            raise
        except Exception as e:
            return Failure((Error.from_exception(e),))

    @staticmethod
    def combine(*outcomes: Outcome[Any]) -> Outcome[None]:
        """
        Combine independent outcomes into one.

        Succeeds only if every input succeeds. Otherwise the result carries
        the errors of every failing input, concatenated in input order.
        Success values are discarded; see all_of() to keep them.

            Outcome.combine(validate_name(cmd), validate_email(cmd), validate_age(cmd))
        """
        if not outcomes:
            raise InvalidArgumentError("At least one outcome must be provided to combine.")
        errors = [e for outcome in outcomes for e in outcome.errors()]
        if errors:
            return Failure(errors)
        return Success(None)

    @staticmethod
    def all_of(outcomes: Iterable[Outcome[T]]) -> Outcome[list[T]]:
        """
        Collect outcomes into an Outcome of list.

        Succeeds with every value, in order, when all inputs succeed;
        otherwise aggregates errors exactly like combine(). An empty input
        succeeds with an empty list.

            all_valid = Outcome.all_of(validate(item) for item in items)  # Outcome[list[Item]]
        """
        values: list[T] = []
        errors: list[Error] = []
        for outcome in outcomes:
            match outcome:
                case Success(v):
                    values.append(v)
                case Failure(errs):
                    errors.extend(errs)
        if errors:
            return Failure(errors)
        return Success(values)

    # ──────────────────────── Async Support ────────────────────────

    async def map_async(self, mapper: Callable[[T], Awaitable[U]]) -> Outcome[U]:
        """
        Async map: await an async function on the success value.

            outcome = await Outcome.success(user_id).map_async(fetch_user_from_api)

        On failure the mapper is neither called nor awaited.
        """
        match self:
            case Success(v):
                return Success(await mapper(v))
            case Failure(errs):
                return Failure(errs)
        raise TypeError("unreachable")  # pragma: no cover

    async def bind_async(self, binder: Callable[[T], Awaitable[Outcome[U]]]) -> Outcome[U]:
        """
        Async bind: chain an async Outcome-returning function.

            outcome = await Outcome.success(order).bind_async(persist_order)
        """
        match self:
            case Success(v):
                return await binder(v)
            case Failure(errs):
                return Failure(errs)
        raise TypeError("unreachable")  # pragma: no cover

    async def tap_async(self, action: Callable[[T], Awaitable[Any]]) -> Outcome[T]:
        """Await an async side effect on the success value; returns self."""
        match self:
            case Success(v):
                await action(v)
        return self

    @staticmethod
    async def try_run_async(supplier: Callable[[], Awaitable[T]]) -> Outcome[T]:
        """
        Async try_run: await *supplier* and capture its result or exception.

        Only Exception subclasses are captured, so asyncio.CancelledError
        still propagates to the caller.
        """
        try:
            return Success(await supplier())
        except OutcomeUsageError:
            raise
        except Exception as e:
            return Failure((Error.from_exception(e),))

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Allow truthiness check: `if outcome: ...` succeeds only on Success."""
        return self.is_success()


@dataclass(frozen=True, slots=True)
class Success(Outcome[T]):
    """The success track — wraps a value of type T (None for unit outcomes)."""

    _value: T

    def __init__(self, value: T) -> None:
        object.__setattr__(self, "_value", value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Success):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Success", self._value))


# Enable structural pattern matching: case Success(value)
Success.__match_args__ = ("_value",)


@dataclass(frozen=True, slots=True)
class Failure(Outcome[T]):
    """The failure track — wraps a non-empty tuple of Errors."""

    _errors: Errors

    def __init__(self, errors: Error | Iterable[Error]) -> None:
        frozen = (errors,) if isinstance(errors, Error) else tuple(errors)
        if not frozen:
            raise InvalidArgumentError("At least one error must be provided for a failure outcome.")
        for error in frozen:
            if not isinstance(error, Error):
                raise TypeError(f"Failure errors must be Error instances, got {type(error).__name__}")
        object.__setattr__(self, "_errors", frozen)

    def __repr__(self) -> str:
        return f"Failure({', '.join(repr(str(e)) for e in self._errors)})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Failure):
            return self._errors == other._errors
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Failure", self._errors))


# Enable structural pattern matching: case Failure(errors)
Failure.__match_args__ = ("_errors",)


def _coerce_error(error: Error | str, message: Optional[str]) -> Error:
    """
    Build an Error from an Error, a message, or a code + message pair.

    A lone ErrorCode member is a code without a message. An Error already
    carries its message, so passing another one is rejected.
    """
    if isinstance(error, Error):
        if message is not None:
            raise InvalidArgumentError("Pass either an Error or a code and message, not both.")
        return error
    if message is None:
        if isinstance(error, ErrorCode):
            return Error(code=error)
        return Error.of(error)
    return Error(code=error, message=message)
