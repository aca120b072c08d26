"""Per-frame telemetry sampler validating that virtualization keeps rendering cheap."""

from __future__ import annotations

import logging
import math
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Protocol

from vscroll.api.virtualization import INITIAL_SNAPSHOT, TelemetryObserver, TelemetrySnapshot
from vscroll.runtime.config import get_virtualization_config
from vscroll.runtime.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.memory_probe import ProcessMemoryProbe
from vscroll.runtime.node_count import count_nodes
from vscroll.runtime.render_timing import MeasureEntry, PerformanceTimeline

_LOG = logging.getLogger("vscroll.telemetry")


class MemoryProbe(Protocol):
    def available(self) -> bool: ...

    def read_mb(self) -> float | None: ...


class SamplerState(Enum):
    IDLE = "idle"
    MONITORING = "monitoring"


@dataclass(frozen=True, slots=True)
class TelemetryCapabilities:
    """Platform facilities found usable when monitoring started."""

    memory: bool
    timing_marks: bool
    timing_observer: bool


def _non_negative(value: float | None) -> float:
    if value is None:
        return 0.0
    number = float(value)
    if not math.isfinite(number) or number < 0.0:
        return 0.0
    return number


class TelemetrySampler:
    """Sample fps, memory, node count and render time once per frame.

    One sampling loop exists per instance. `start()` while monitoring is
    ignored, and once `stop()` returns the observer is never called again.
    """

    def __init__(
        self,
        *,
        scheduler: FrameScheduler,
        memory_probe: MemoryProbe | None = None,
        timeline: PerformanceTimeline | None = None,
        node_counter: Callable[[object | None], int] = count_nodes,
        window_ms: float | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._memory_probe = memory_probe if memory_probe is not None else ProcessMemoryProbe()
        self._timeline = timeline if timeline is not None else PerformanceTimeline()
        self._node_counter = node_counter
        if window_ms is None:
            window_ms = get_virtualization_config().telemetry_window_ms
        self._window_ms = max(1.0, float(window_ms))
        self._timing_marks = callable(getattr(self._timeline, "mark", None)) and callable(
            getattr(self._timeline, "measure", None)
        )
        self._metrics = INITIAL_SNAPSHOT
        self._state = SamplerState.IDLE
        self._observer: TelemetryObserver | None = None
        self._container: object | None = None
        self._frame_timestamps: deque[float] = deque()
        self._frame_handle: int | None = None
        self._timeline_token: int | None = None
        self._capabilities: TelemetryCapabilities | None = None
        self._origin_ms = 0.0

    @property
    def state(self) -> SamplerState:
        return self._state

    @property
    def is_monitoring(self) -> bool:
        return self._state is SamplerState.MONITORING

    @property
    def capabilities(self) -> TelemetryCapabilities | None:
        return self._capabilities

    @property
    def origin_ms(self) -> float:
        """Time at which the current sampling window started."""
        return self._origin_ms

    def start(self, observer: TelemetryObserver, container: object | None = None) -> bool:
        if self.is_monitoring:
            _LOG.warning("telemetry_already_monitoring")
            return False

        self._observer = observer
        self._container = container
        self._state = SamplerState.MONITORING
        self._frame_timestamps.clear()
        self._origin_ms = self._scheduler.clock_ms()
        self._capabilities = TelemetryCapabilities(
            memory=self._probe_memory(),
            timing_marks=self._timing_marks,
            timing_observer=self._subscribe_timeline(),
        )
        self._frame_handle = self._scheduler.request_frame(self._on_frame)
        _LOG.debug(
            "telemetry_started window_ms=%.1f container=%s",
            self._window_ms,
            container is not None,
        )
        return True

    def stop(self) -> None:
        if not self.is_monitoring:
            return
        self._state = SamplerState.IDLE
        self._observer = None
        self._container = None
        self._frame_timestamps.clear()
        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        token, self._timeline_token = self._timeline_token, None
        if token is not None:
            try:
                self._timeline.unobserve(token)
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "telemetry_timing_unobserve_failed", level=logging.WARNING)
        _LOG.debug("telemetry_stopped")

    def snapshot(self) -> TelemetrySnapshot:
        return replace(self._metrics)

    def mark_render_start(self, label: str = "render") -> None:
        if not self._timing_marks:
            return
        try:
            self._timeline.mark(f"{label}-start")
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "telemetry_render_mark_failed")

    def mark_render_end(self, label: str = "render") -> None:
        if not self._timing_marks:
            return
        start_mark = f"{label}-start"
        end_mark = f"{label}-end"
        try:
            self._timeline.mark(end_mark)
            self._timeline.measure(label, start_mark, end_mark)
            entries = self._timeline.entries_by_name(label)
            if entries:
                self._set_render_time(entries[-1].duration_ms)
            self._timeline.clear_marks(start_mark, end_mark)
            self._timeline.clear_measures(label)
        except (KeyError, *RECOVERABLE_RUNTIME_ERRORS):
            log_recoverable(_LOG, "telemetry_render_measure_failed")

    def _probe_memory(self) -> bool:
        try:
            return bool(self._memory_probe.available())
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "telemetry_memory_probe_unavailable")
            return False

    def _subscribe_timeline(self) -> bool:
        try:
            self._timeline_token = self._timeline.observe(self._on_measure)
        except RECOVERABLE_RUNTIME_ERRORS:
            self._timeline_token = None
            log_recoverable(_LOG, "telemetry_timing_observer_unavailable", level=logging.WARNING)
            return False
        return True

    def _on_measure(self, entry: MeasureEntry) -> None:
        if "render" in entry.name:
            self._set_render_time(entry.duration_ms)

    def _set_render_time(self, duration_ms: float) -> None:
        self._metrics = replace(self._metrics, render_time_ms=_non_negative(duration_ms))

    def _read_memory_mb(self) -> float:
        if self._capabilities is None or not self._capabilities.memory:
            return 0.0
        try:
            return round(_non_negative(self._memory_probe.read_mb()), 2)
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "telemetry_memory_read_failed")
            return 0.0

    def _on_frame(self, timestamp_ms: float) -> None:
        self._frame_handle = None
        if not self.is_monitoring:
            return

        self._frame_timestamps.append(timestamp_ms)
        window_floor = timestamp_ms - self._window_ms
        while self._frame_timestamps and self._frame_timestamps[0] <= window_floor:
            self._frame_timestamps.popleft()

        self._metrics = TelemetrySnapshot(
            fps=len(self._frame_timestamps),
            memory_usage_mb=self._read_memory_mb(),
            dom_node_count=max(0, int(self._node_counter(self._container))),
            render_time_ms=self._metrics.render_time_ms,
        )
        observer = self._observer
        try:
            if observer is not None:
                observer(replace(self._metrics))
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "telemetry_observer_failed", level=logging.WARNING)
        finally:
            # The observer may have stopped, or stopped and restarted, the sampler.
            if self.is_monitoring and self._frame_handle is None:
                self._frame_handle = self._scheduler.request_frame(self._on_frame)
