"""Fixed-height list virtualization core with render-health telemetry."""

from vscroll.api.virtualization import ItemPosition, TelemetrySnapshot, VisibleRange
from vscroll.runtime.frame_scheduler import FrameScheduler
from vscroll.runtime.telemetry import TelemetrySampler
from vscroll.ui_runtime.range_calculator import (
    RangeCalculator,
    compute_item_position,
    compute_total_extent,
    compute_visible_range,
)
from vscroll.ui_runtime.virtual_list import VirtualListController

__all__ = [
    "FrameScheduler",
    "ItemPosition",
    "RangeCalculator",
    "TelemetrySampler",
    "TelemetrySnapshot",
    "VirtualListController",
    "VisibleRange",
    "compute_item_position",
    "compute_total_extent",
    "compute_visible_range",
]
