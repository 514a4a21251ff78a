"""Tests for the async Outcome operations: map_async, bind_async, tap_async, try_run_async."""

from __future__ import annotations

import asyncio

import pytest

from outcomes import Error, InvalidArgumentError, Outcome


class AsyncCounter:
    """Async callable counting its invocations."""

    def __init__(self, returns=None) -> None:
        self.returns = returns
        self.calls = 0

    async def __call__(self, *args):
        self.calls += 1
        await asyncio.sleep(0)
        return self.returns


class TestMapAsync:
    @pytest.mark.asyncio
    async def test_map_async_success(self):
        async def double(x: int) -> int:
            return x * 2

        outcome = await Outcome.success(5).map_async(double)
        assert outcome.value() == 10

    @pytest.mark.asyncio
    async def test_map_async_never_invoked_on_failure(self):
        mapper = AsyncCounter(returns=1)
        outcome = await Outcome.failure("NOT_FOUND", "x").map_async(mapper)
        assert mapper.calls == 0
        assert outcome.errors() == (Error("NOT_FOUND", "x"),)

    @pytest.mark.asyncio
    async def test_map_async_does_not_capture_exceptions(self):
        async def failing(x: int) -> int:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await Outcome.success(5).map_async(failing)


class TestBindAsync:
    @pytest.mark.asyncio
    async def test_bind_async_success(self):
        async def validate(x: int) -> Outcome[int]:
            if x > 0:
                return Outcome.success(x)
            return Outcome.failure("negative")

        assert (await Outcome.success(5).bind_async(validate)).value() == 5
        assert (await Outcome.success(-5).bind_async(validate)).errors() == (Error.of("negative"),)

    @pytest.mark.asyncio
    async def test_bind_async_never_invoked_on_failure(self):
        binder = AsyncCounter(returns=Outcome.success(1))
        outcome = await Outcome.failure("x").bind_async(binder)
        assert binder.calls == 0
        assert outcome.is_failure()

    @pytest.mark.asyncio
    async def test_async_pipeline_stops_at_first_failure(self):
        steps: list[str] = []

        async def check_inventory(order: dict) -> Outcome[dict]:
            steps.append("inventory")
            return Outcome.failure("OUT_OF_STOCK", "No stock left")

        async def take_payment(order: dict) -> Outcome[dict]:
            steps.append("payment")
            return Outcome.success(order)

        outcome = await Outcome.success({"id": 1}).bind_async(check_inventory)
        outcome = await outcome.bind_async(take_payment)

        assert steps == ["inventory"]
        assert outcome.errors() == (Error("OUT_OF_STOCK", "No stock left"),)


class TestTapAsync:
    @pytest.mark.asyncio
    async def test_tap_async_on_success(self):
        captured: list[int] = []

        async def record(value: int) -> None:
            captured.append(value)

        original = Outcome.success(42)
        outcome = await original.tap_async(record)
        assert outcome is original
        assert captured == [42]

    @pytest.mark.asyncio
    async def test_tap_async_skipped_on_failure(self):
        action = AsyncCounter()
        original = Outcome.failure("x")
        assert await original.tap_async(action) is original
        assert action.calls == 0


class TestTryRunAsync:
    @pytest.mark.asyncio
    async def test_captures_awaited_value(self):
        async def fetch() -> str:
            await asyncio.sleep(0)
            return "payload"

        assert (await Outcome.try_run_async(fetch)).value() == "payload"

    @pytest.mark.asyncio
    async def test_exception_becomes_failure(self):
        async def fetch() -> str:
            await asyncio.sleep(0)
            raise ConnectionError("Async error")

        outcome = await Outcome.try_run_async(fetch)
        assert outcome.first_error().code == "ConnectionError"
        assert "Async error" in outcome.first_error().message

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        async def cancelled() -> None:
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await Outcome.try_run_async(cancelled)

    @pytest.mark.asyncio
    async def test_misuse_is_not_captured(self):
        async def misuse() -> Outcome[None]:
            return Outcome.combine()

        with pytest.raises(InvalidArgumentError):
            await Outcome.try_run_async(misuse)
