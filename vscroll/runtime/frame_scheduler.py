"""Per-frame callback scheduler standing in for a display refresh loop."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from time import monotonic

FrameCallback = Callable[[float], None]


@dataclass(slots=True)
class _FrameRequest:
    handle: int
    callback: FrameCallback
    cancelled: bool = False


class FrameScheduler:
    """Single-threaded queue of one-shot frame callbacks.

    Callbacks requested while a frame runs are deferred to the next frame,
    so a callback that re-requests itself runs exactly once per frame.
    Timestamps are milliseconds from the injected time source.
    """

    def __init__(self, *, time_source: Callable[[], float] | None = None) -> None:
        self._time_source = time_source or monotonic
        self._now_ms = 0.0
        self._next_handle = 1
        self._pending: dict[int, _FrameRequest] = {}
        self._running: dict[int, _FrameRequest] = {}
        self._frame_count = 0

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def pending_count(self) -> int:
        """Return count of requests that will run on the next frame."""
        return sum(1 for request in self._pending.values() if not request.cancelled)

    def clock_ms(self) -> float:
        """Current host time in milliseconds."""
        return float(self._time_source()) * 1000.0

    def request_frame(self, callback: FrameCallback) -> int:
        """Schedule `callback(timestamp_ms)` for the next frame."""
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = _FrameRequest(handle=handle, callback=callback)
        return handle

    def cancel_frame(self, handle: int) -> None:
        """Cancel a pending request if it exists."""
        request = self._pending.get(handle) or self._running.get(handle)
        if request is not None:
            request.cancelled = True

    def run_frame(self, timestamp_ms: float | None = None) -> int:
        """Run every request made before this frame; return executed count."""
        now_ms = self.clock_ms() if timestamp_ms is None else float(timestamp_ms)
        if now_ms < self._now_ms:
            raise ValueError("timestamp_ms cannot move backwards")
        self._now_ms = now_ms
        self._frame_count += 1
        self._running = self._pending
        self._pending = {}
        executed = 0
        try:
            for request in self._running.values():
                if request.cancelled:
                    continue
                request.callback(self._now_ms)
                executed += 1
        finally:
            self._running = {}
        return executed

    def advance(self, delta_ms: float) -> int:
        """Move the frame clock forward by `delta_ms` and run one frame."""
        if delta_ms < 0.0:
            raise ValueError("delta_ms must be >= 0")
        return self.run_frame(self._now_ms + delta_ms)
