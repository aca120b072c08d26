"""Public list-virtualization contracts shared by calculator, sampler and consumers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any, Protocol


@dataclass(frozen=True, slots=True)
class VirtualizationDefaults:
    """Immutable calculator constants used by input sanitization."""

    min_item_height: float = 1.0
    default_item_height: float = 50.0
    default_overscan: int = 3
    max_reasonable_value: float = 1_000_000.0

    @property
    def max_scroll_offset(self) -> float:
        return self.max_reasonable_value * self.max_reasonable_value


DEFAULTS = VirtualizationDefaults()


@dataclass(frozen=True, slots=True)
class VisibleRange:
    """Inclusive index interval of rows to materialize, overscan included."""

    start: int
    end: int

    @property
    def count(self) -> int:
        return max(0, self.end - self.start + 1)

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def indices(self) -> range:
        return range(self.start, self.end + 1)

    def contains(self, index: int) -> bool:
        return self.start <= index <= self.end


EMPTY_RANGE = VisibleRange(start=0, end=-1)


@dataclass(frozen=True, slots=True)
class ItemPosition:
    """Absolute placement of one row inside the scroll surface."""

    top: float
    height: float


@dataclass(frozen=True, slots=True)
class TelemetrySnapshot:
    """One complete set of rendering-health measurements."""

    fps: int = 0
    memory_usage_mb: float = 0.0
    dom_node_count: int = 0
    render_time_ms: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


INITIAL_SNAPSHOT = TelemetrySnapshot()

TelemetryObserver = Callable[[TelemetrySnapshot], None]


class RangeCalculatorPort(Protocol):
    """Pure range/position arithmetic injected into list consumers."""

    def compute_visible_range(
        self,
        scroll_offset: float,
        viewport_height: float,
        item_count: float,
        item_height: float,
        overscan: float,
    ) -> VisibleRange: ...

    def compute_item_position(self, index: float, item_height: float) -> ItemPosition: ...

    def compute_total_extent(self, item_count: float, item_height: float) -> float: ...


class TelemetrySamplerPort(Protocol):
    """Start/stop sampling surface used by list consumers."""

    def start(self, observer: TelemetryObserver, container: object | None = None) -> bool: ...

    def stop(self) -> None: ...

    def snapshot(self) -> TelemetrySnapshot: ...


@dataclass(frozen=True, slots=True)
class VirtualizationOptions:
    """Consumer options; `viewport_height` is required."""

    viewport_height: float
    overscan: int = DEFAULTS.default_overscan
    calculator: RangeCalculatorPort | None = None
    enable_telemetry: bool = False


__all__ = [
    "DEFAULTS",
    "EMPTY_RANGE",
    "INITIAL_SNAPSHOT",
    "ItemPosition",
    "RangeCalculatorPort",
    "TelemetryObserver",
    "TelemetrySamplerPort",
    "TelemetrySnapshot",
    "VirtualizationDefaults",
    "VirtualizationOptions",
    "VisibleRange",
]
