"""Unit tests for InFlightOperation (timeout + cancellation)."""

import asyncio

import pytest

from mealsnap.application.meal.orchestrators.in_flight import InFlightOperation
from mealsnap.domain.meal.core.exceptions import (
    NetworkError,
    OperationCancelledError,
    SubmissionError,
)


async def _value(value, delay=0.0):
    await asyncio.sleep(delay)
    return value


class TestInFlightOperation:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        op = InFlightOperation("analysis", timeout_s=1.0, timeout_error=NetworkError)

        assert await op.run(_value(42)) == 42
        assert not op.running

    @pytest.mark.asyncio
    async def test_no_timeout(self):
        op = InFlightOperation("analysis", timeout_s=None, timeout_error=NetworkError)

        assert await op.run(_value("ok", delay=0.01)) == "ok"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error_type", [NetworkError, SubmissionError])
    async def test_timeout_maps_to_domain_error(self, error_type):
        op = InFlightOperation("analysis", timeout_s=0.01, timeout_error=error_type)

        with pytest.raises(error_type, match="analysis timed out"):
            await op.run(_value("late", delay=5))

    @pytest.mark.asyncio
    async def test_cancel_raises_operation_cancelled(self):
        op = InFlightOperation("submission", timeout_s=5.0, timeout_error=SubmissionError)
        task = asyncio.ensure_future(op.run(_value("never", delay=5)))
        await asyncio.sleep(0)

        assert op.cancel() is True
        assert op.cancel_requested

        with pytest.raises(OperationCancelledError, match="submission was cancelled"):
            await task

    @pytest.mark.asyncio
    async def test_cancel_after_finish_returns_false(self):
        op = InFlightOperation("analysis", timeout_s=1.0, timeout_error=NetworkError)

        await op.run(_value(1))

        assert op.cancel() is False

    @pytest.mark.asyncio
    async def test_cancel_before_start_is_honoured(self):
        op = InFlightOperation("analysis", timeout_s=1.0, timeout_error=NetworkError)
        call = _value("never")

        assert op.cancel() is True
        assert op.cancel() is False

        with pytest.raises(OperationCancelledError, match="analysis was cancelled"):
            await op.run(call)
        assert call.cr_frame is None

    @pytest.mark.asyncio
    async def test_caller_cancellation_propagates(self):
        op = InFlightOperation("analysis", timeout_s=5.0, timeout_error=NetworkError)
        task = asyncio.ensure_future(op.run(_value("never", delay=5)))
        await asyncio.sleep(0)

        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_cannot_run_twice(self):
        op = InFlightOperation("analysis", timeout_s=1.0, timeout_error=NetworkError)
        await op.run(_value(1))

        second = _value(2)
        with pytest.raises(RuntimeError, match="already started"):
            await op.run(second)
        second.close()

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            InFlightOperation("analysis", timeout_s=0, timeout_error=NetworkError)
