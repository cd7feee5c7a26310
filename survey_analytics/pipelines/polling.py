"""Fixed-interval polling with caller-owned cancellation and ordering guards.

Every tick launches a fetch without waiting for the previous one, so on a
slow network several fetches can be in flight. Each fetch is numbered when
issued; a completed fetch is applied only if no fetch issued after it has
already been applied. After the cancellation token trips, nothing is
applied, and ``stop()`` cancels the loop and every in-flight fetch.
"""
import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar

from survey_analytics.exceptions import FetchFailure, SurveyAnalyticsError

logger = logging.getLogger(__name__)
T = TypeVar("T")


class CancellationToken:
    """Liveness flag owned by the consumer (e.g. a dashboard view)."""

    def __init__(self) -> None:
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Trip the token and run registered callbacks once."""
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation (immediately if already cancelled)."""
        if self._cancelled:
            callback()
        else:
            self._callbacks.append(callback)

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise asyncio.CancelledError()


class PeriodicPoller(Generic[T]):
    """Base class for interval-driven refreshers.

    Subclasses implement ``_fetch``, ``_on_result`` and ``_on_failure``.

    Parameters
    ----------
    interval:
        Seconds between ticks.
    timeout:
        Per-fetch timeout in seconds; expiry is treated as a failed poll.
    token:
        Cancellation token; a fresh one is created when omitted.
    """

    name = "poller"

    def __init__(
        self,
        interval: float,
        timeout: Optional[float] = None,
        token: Optional[CancellationToken] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self.timeout = timeout
        self.token = token or CancellationToken()
        self._loop_task: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()
        self._issued = 0
        self._last_applied = 0

    # ── subclass hooks ────────────────────────────────────────────────────────

    async def _fetch(self) -> T:
        raise NotImplementedError

    def _on_result(self, result: T) -> None:
        raise NotImplementedError

    def _on_failure(self, error: Exception) -> None:
        raise NotImplementedError

    # ── polling ──────────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def poll_once(self) -> bool:
        """Run one fetch and apply its outcome. Returns True if a result was applied."""
        if self.token.cancelled:
            return False
        self._issued += 1
        seq = self._issued
        try:
            result = await asyncio.wait_for(self._fetch(), timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._fail(seq, FetchFailure(f"{self.name} fetch timed out after {self.timeout}s"))
        except SurveyAnalyticsError as e:
            return self._fail(seq, e)
        except Exception as e:
            logger.error(f"Unexpected {self.name} fetch error: {e}", exc_info=True)
            return self._fail(seq, e)

        if self.token.cancelled:
            logger.debug(f"{self.name} result #{seq} dropped after cancellation")
            return False
        if seq <= self._last_applied:
            logger.debug(f"{self.name} result #{seq} discarded; #{self._last_applied} already applied")
            return False
        self._last_applied = seq
        self._on_result(result)
        return True

    def _fail(self, seq: int, error: Exception) -> bool:
        if self.token.cancelled or seq <= self._last_applied:
            return False
        self._on_failure(error)
        return False

    def _spawn(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.poll_once())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run(self) -> None:
        while True:
            self.token.raise_if_cancelled()
            self._spawn()
            await asyncio.sleep(self.interval)

    def start(self) -> None:
        """Start polling immediately and then every ``interval`` seconds.

        Must be called from a running event loop. A stopped poller cannot be
        restarted; create a new one.
        """
        if self.token.cancelled:
            raise RuntimeError(f"{self.name} was cancelled and cannot be restarted")
        if self.running:
            return
        self.token.add_callback(self._cancel_tasks)
        self._loop_task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"{self.name} started (interval={self.interval}s)")

    def _cancel_tasks(self) -> None:
        if self._loop_task is not None:
            self._loop_task.cancel()
        for task in list(self._in_flight):
            task.cancel()

    async def stop(self) -> None:
        """Cancel the token, the polling loop and every in-flight fetch, and wait for them."""
        pending = [t for t in (self._loop_task, *self._in_flight) if t is not None]
        self.token.cancel()
        self._cancel_tasks()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._loop_task = None
        logger.info(f"{self.name} stopped")

    async def __aenter__(self):
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
