"""Timeout and cancellation wrapper for the workflow's awaited calls.

Each analyze/re-analyze/submit call runs inside one InFlightOperation so
that a stuck network call can neither block the session forever nor be
impossible to abort.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Type, TypeVar

from mealsnap.domain.meal.core.exceptions import MealCaptureError, OperationCancelledError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InFlightOperation:
    """
    One cancellable, time-limited awaited call.

    - Timeout → raises ``timeout_error`` (e.g. NetworkError for analysis)
    - cancel() → raises OperationCancelledError in the awaiting coroutine
    - Cancellation of the caller's own task is propagated unchanged

    Example:
        >>> op = InFlightOperation("analysis", timeout_s=60, timeout_error=NetworkError)
        >>> result = await op.run(gateway.analyze(image, hint, language))
    """

    def __init__(
        self,
        name: str,
        timeout_s: Optional[float],
        timeout_error: Type[MealCaptureError],
    ):
        """
        Initialize operation.

        Args:
            name: Label used in errors and logs ("analysis", "submission")
            timeout_s: Seconds before giving up, None for no limit
            timeout_error: Domain error raised on expiry
        """
        if timeout_s is not None and timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {timeout_s}")

        self.name = name
        self._timeout_s = timeout_s
        self._timeout_error = timeout_error
        self._task: Optional["asyncio.Future[Any]"] = None
        self._cancel_requested = False

    @property
    def cancel_requested(self) -> bool:
        """True once cancel() was accepted."""
        return self._cancel_requested

    @property
    def running(self) -> bool:
        """True while the wrapped call has not finished."""
        return self._task is not None and not self._task.done()

    def cancel(self) -> bool:
        """
        Request cancellation of the wrapped call.

        A request made before run() is honoured when run() starts.

        Returns:
            True if the call was (or will be) cancelled, False if it already finished
        """
        task = self._task
        if task is None:
            if self._cancel_requested:
                return False
            self._cancel_requested = True
            logger.info("In-flight operation cancelled before start", extra={"operation": self.name})
            return True
        if task.done():
            return False

        self._cancel_requested = True
        task.cancel()
        logger.info("In-flight operation cancel requested", extra={"operation": self.name})
        return True

    async def run(self, call: Awaitable[T]) -> T:
        """
        Await the call under the timeout and cancellation token.

        Raises:
            MealCaptureError: ``timeout_error`` on expiry
            OperationCancelledError: If cancel() was called
        """
        if self._task is not None:
            raise RuntimeError(f"{self.name} operation already started")

        if self._cancel_requested:
            if asyncio.iscoroutine(call):
                call.close()
            raise OperationCancelledError(f"{self.name} was cancelled")

        self._task = asyncio.ensure_future(call)
        try:
            if self._timeout_s is None:
                return await self._task
            return await asyncio.wait_for(self._task, timeout=self._timeout_s)
        except asyncio.TimeoutError:
            logger.warning(
                "In-flight operation timed out",
                extra={"operation": self.name, "timeout_s": self._timeout_s},
            )
            raise self._timeout_error(
                f"{self.name} timed out after {self._timeout_s:g}s"
            ) from None
        except asyncio.CancelledError:
            if self._cancel_requested:
                raise OperationCancelledError(f"{self.name} was cancelled") from None
            raise
