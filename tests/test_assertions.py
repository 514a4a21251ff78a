"""Tests for OutcomeAssertions."""

from __future__ import annotations

import pytest

from outcomes import Error, ErrorCode, Outcome, OutcomeAssertions


class TestAssertSuccess:
    def test_returns_value(self):
        assert OutcomeAssertions.assert_success(Outcome.success(42)) == 42

    def test_failure_raises_with_errors(self):
        with pytest.raises(AssertionError, match="Expected Success but got Failure"):
            OutcomeAssertions.assert_success(Outcome.failure("NOT_FOUND", "gone"))

    def test_success_value(self):
        OutcomeAssertions.assert_success_value(Outcome.success("ok"), "ok")
        with pytest.raises(AssertionError, match="Expected success value"):
            OutcomeAssertions.assert_success_value(Outcome.success("ok"), "nope")


class TestAssertFailure:
    def test_returns_first_error(self):
        outcome = Outcome.failure(ErrorCode.VALIDATION_ERROR, "Name is required")
        error = OutcomeAssertions.assert_failure(outcome, ErrorCode.VALIDATION_ERROR)
        assert error == Error("VALIDATION_ERROR", "Name is required")

    def test_success_raises(self):
        with pytest.raises(AssertionError, match="Expected Failure but got Success"):
            OutcomeAssertions.assert_failure(Outcome.success(1))

    def test_wrong_code_raises(self):
        with pytest.raises(AssertionError, match="Expected error code NOT_FOUND"):
            OutcomeAssertions.assert_failure(Outcome.failure("BAD", "x"), ErrorCode.NOT_FOUND)

    def test_assert_errors_exact_order(self):
        outcome = Outcome.combine(Outcome.failure("a"), Outcome.failure("b"))
        OutcomeAssertions.assert_errors(outcome, [Error.of("a"), Error.of("b")])
        with pytest.raises(AssertionError):
            OutcomeAssertions.assert_errors(outcome, [Error.of("b"), Error.of("a")])


class TestAssertMessages:
    def test_contains_any_error_case_insensitive(self):
        outcome = Outcome.combine(Outcome.failure("Name is required"), Outcome.failure("Invalid EMAIL"))
        OutcomeAssertions.assert_failure_message_contains(outcome, "email")

    def test_contains_mismatch(self):
        with pytest.raises(AssertionError, match="Expected a failure message to contain"):
            OutcomeAssertions.assert_failure_message_contains(Outcome.failure("x"), "email")

    def test_equals_single_error(self):
        OutcomeAssertions.assert_failure_message_equals(Outcome.failure("exact"), "exact")
        with pytest.raises(AssertionError, match="Expected failure message"):
            OutcomeAssertions.assert_failure_message_equals(Outcome.failure("other"), "exact")
