"""List-viewport helpers built on top of the range calculator."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from vscroll.api.virtualization import VisibleRange
from vscroll.ui_runtime.range_calculator import (
    compute_total_extent,
    effective_item_height,
    sanitize_numeric,
)

T = TypeVar("T")


def visible_items(items: Sequence[T], visible_range: VisibleRange) -> list[T]:
    """Return the rows of `items` covered by `visible_range`."""
    if visible_range.is_empty or not items:
        return []
    start = max(0, visible_range.start)
    return list(items[start : visible_range.end + 1])


def clamp_scroll_offset(
    offset: float,
    viewport_height: float,
    item_count: float,
    item_height: float,
) -> float:
    """Clamp a pixel scroll offset to the scrollable span of the list."""
    extent = compute_total_extent(item_count, item_height)
    viewport = sanitize_numeric(viewport_height, 0.0)
    max_offset = max(0.0, extent - viewport)
    return max(0.0, min(sanitize_numeric(offset, 0.0), max_offset))


def scroll_offset_for_index(index: float, item_height: float) -> float:
    """Offset that puts row `index` at the top of the viewport."""
    return int(sanitize_numeric(index, 0.0)) * effective_item_height(item_height)
