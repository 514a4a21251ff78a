"""
Test assertions for Outcome values.

Expressive assert helpers that produce clear failure messages:

    from outcomes import OutcomeAssertions

    def test_create_user():
        outcome = create_user(valid_command)
        user = OutcomeAssertions.assert_success(outcome)
        assert user.name == "Alice"

    def test_invalid_email():
        outcome = create_user(bad_command)
        OutcomeAssertions.assert_failure(outcome, ErrorCode.VALIDATION_ERROR)
        OutcomeAssertions.assert_failure_message_contains(outcome, "email")
"""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeVar

from outcomes.error import Error
from outcomes.outcome import Outcome

T = TypeVar("T")


def _describe_errors(outcome: Outcome[Any]) -> str:
    return ", ".join(repr(str(e)) for e in outcome.errors())


class OutcomeAssertions:
    """Expressive test assertions for Outcome values."""

    @staticmethod
    def assert_success(outcome: Outcome[T], message: str = "") -> T:
        """
        Assert the Outcome is a Success and return the value.

            value = OutcomeAssertions.assert_success(outcome)
        """
        context = f" — {message}" if message else ""
        assert outcome.is_success(), (
            f"Expected Success but got Failure({_describe_errors(outcome)}){context}"
        )
        return outcome.value()  # type: ignore[return-value]

    @staticmethod
    def assert_failure(
        outcome: Outcome[T],
        expected_code: Optional[str] = None,
        message: str = "",
    ) -> Error:
        """
        Assert the Outcome is a Failure, optionally checking the first error's code.

        Returns the first error.

            error = OutcomeAssertions.assert_failure(outcome, ErrorCode.VALIDATION_ERROR)
        """
        context = f" — {message}" if message else ""
        assert outcome.is_failure(), (
            f"Expected Failure but got Success({outcome.value()!r}){context}"
        )
        error = outcome.errors()[0]
        if expected_code is not None:
            assert error.code == expected_code, (
                f"Expected error code {str(expected_code)} "
                f"but got {error.code or '<none>'}: {error.message!r}{context}"
            )
        return error

    @staticmethod
    def assert_errors(outcome: Outcome[T], expected: Sequence[Error]) -> None:
        """Assert the Outcome failed with exactly these errors, in this order."""
        assert outcome.is_failure(), (
            f"Expected Failure but got Success({outcome.value()!r})"
        )
        assert list(outcome.errors()) == list(expected), (
            f"Expected errors {[str(e) for e in expected]!r} "
            f"but got {[str(e) for e in outcome.errors()]!r}"
        )

    @staticmethod
    def assert_failure_message_contains(outcome: Outcome[T], substring: str) -> None:
        """Assert that some error message contains the given substring (case-insensitive)."""
        assert outcome.is_failure(), (
            f"Expected Failure but got Success({outcome.value()!r})"
        )
        assert any(substring.lower() in e.message.lower() for e in outcome.errors()), (
            f"Expected a failure message to contain {substring!r} "
            f"but messages were: {_describe_errors(outcome)}"
        )

    @staticmethod
    def assert_failure_message_equals(outcome: Outcome[T], expected_message: str) -> None:
        """Assert the Outcome failed with a single error with exactly this message."""
        assert outcome.is_failure(), (
            f"Expected Failure but got Success({outcome.value()!r})"
        )
        messages = [e.message for e in outcome.errors()]
        assert messages == [expected_message], (
            f"Expected failure message {expected_message!r} "
            f"but got {messages!r}"
        )

    @staticmethod
    def assert_success_value(outcome: Outcome[T], expected_value: Any) -> None:
        """Assert the Outcome is a Success with the specific value."""
        value = OutcomeAssertions.assert_success(outcome)
        assert value == expected_value, (
            f"Expected success value {expected_value!r} but got {value!r}"
        )
