"""Deferred, cancellable impression registration.

A feed item only counts as viewed once it stayed mounted for a fixed delay.
Each mount arms a timer task; unmounting before it fires cancels it and no
view is recorded. There is no memory across mounts: mounting the same item
again later arms a fresh timer and can register another view.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import secrets
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_VIEW_DELAY_SECONDS = 2.0

FireCallback = Callable[[], Awaitable[object]]


class TrackerState(enum.Enum):
    """Lifecycle of one mount."""

    IDLE = "idle"
    PENDING = "pending"
    FIRED = "fired"
    CANCELLED = "cancelled"


class ViewTracker:
    """Fires ``on_fire`` once per mount, after ``delay`` seconds.

    The callback is awaited inside the timer task. Once the delay elapsed the
    registration runs to completion even if the item unmounts meanwhile.
    """

    def __init__(self, on_fire: FireCallback, delay: float = DEFAULT_VIEW_DELAY_SECONDS) -> None:
        """Initialize the tracker.

        Args:
            on_fire: Coroutine factory performing the view registration.
            delay: Seconds the item must stay mounted before it counts.
        """
        self._on_fire = on_fire
        self.delay = max(0.0, float(delay))
        self._state = TrackerState.IDLE
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    def mount(self) -> asyncio.Task[None]:
        """Arm the timer and return its task.

        While a timer is already pending the existing task is returned.
        """
        if self._state is TrackerState.PENDING and self._task is not None:
            return self._task
        self._state = TrackerState.PENDING
        task = asyncio.get_running_loop().create_task(self._run())
        self._task = task
        logger.debug("View timer armed for %.2fs", self.delay)
        return task

    def unmount(self) -> bool:
        """Cancel a pending timer.

        Returns:
            True if a pending registration was cancelled.
        """
        if self._state is not TrackerState.PENDING or self._task is None:
            return False
        self._state = TrackerState.CANCELLED
        self._task.cancel()
        logger.debug("View timer cancelled before firing")
        return True

    async def wait(self) -> None:
        """Wait until the current cycle fired or was cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self) -> None:
        await asyncio.sleep(self.delay)
        self._state = TrackerState.FIRED
        try:
            await self._on_fire()
        except Exception:
            logger.warning("Deferred view registration failed", exc_info=True)


class ViewTrackerRegistry:
    """Pending trackers addressable by an opaque token.

    Lets an HTTP client arm a tracker when an item mounts and cancel it by
    token when the item unmounts. Trackers leave the registry as soon as they
    fire or are cancelled.
    """

    def __init__(self) -> None:
        self._trackers: dict[str, ViewTracker] = {}

    def __len__(self) -> int:
        return len(self._trackers)

    def __contains__(self, token: object) -> bool:
        return token in self._trackers

    def arm(self, on_fire: FireCallback, delay: float = DEFAULT_VIEW_DELAY_SECONDS) -> str:
        """Mount a new tracker and return its token."""
        token = secrets.token_urlsafe(16)
        tracker = ViewTracker(on_fire, delay)
        task = tracker.mount()
        self._trackers[token] = tracker
        task.add_done_callback(lambda _task: self._trackers.pop(token, None))
        return token

    def get(self, token: str) -> ViewTracker | None:
        return self._trackers.get(token)

    def cancel(self, token: str) -> bool:
        """Unmount the tracker behind ``token``; False if unknown or already fired."""
        tracker = self._trackers.get(token)
        if tracker is None:
            return False
        cancelled = tracker.unmount()
        if cancelled:
            self._trackers.pop(token, None)
        return cancelled

    async def shutdown(self) -> None:
        """Cancel every pending tracker and wait for in-flight ones."""
        trackers = list(self._trackers.values())
        for tracker in trackers:
            tracker.unmount()
        for tracker in trackers:
            await tracker.wait()
        self._trackers.clear()
