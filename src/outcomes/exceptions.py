"""
Programmer-misuse exceptions.

These are raised, never turned into an Error: they mean the API itself was
used incorrectly, and the operation must stop right there.
"""

from __future__ import annotations


class OutcomeUsageError(Exception):
    """Base exception for incorrect use of the outcome API."""


class InvalidArgumentError(OutcomeUsageError, ValueError):
    """An argument violates the contract (e.g. a failure built from zero errors)."""


class InvalidStateError(OutcomeUsageError, RuntimeError):
    """The operation is not legal in the outcome's current state."""
