"""Pure range/position arithmetic for fixed-height list virtualization.

Every function here is total: any input, including NaN, infinities, negatives
and non-numeric values, is sanitized per argument and a well-formed result is
returned. Nothing is raised and no state is kept between calls.
"""

from __future__ import annotations

import math
from numbers import Real

from vscroll.api.virtualization import (
    DEFAULTS,
    EMPTY_RANGE,
    ItemPosition,
    VisibleRange,
)


def sanitize_numeric(value: object, default: float, maximum: float | None = None) -> float:
    """Return a finite, non-negative value or `default`, clamped to `maximum`."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except OverflowError:
        # Exact ints or fractions beyond float range.
        if maximum is not None and isinstance(value, Real) and value > 0:
            return float(maximum)
        return float(default)
    except (TypeError, ValueError):
        return float(default)
    if not math.isfinite(number):
        return float(default)
    if number < 0.0:
        return float(default)
    if maximum is not None and number > maximum:
        return float(maximum)
    return number


def effective_item_height(item_height: object) -> float:
    """Sanitized, strictly positive row height."""
    height = sanitize_numeric(
        item_height,
        DEFAULTS.default_item_height,
        DEFAULTS.max_reasonable_value,
    )
    return max(height, DEFAULTS.min_item_height)


def compute_visible_range(
    scroll_offset: object,
    viewport_height: object,
    item_count: object,
    item_height: object,
    overscan: object,
) -> VisibleRange:
    """Return the inclusive row range to render for a scroll position."""
    offset = sanitize_numeric(scroll_offset, 0.0, DEFAULTS.max_scroll_offset)
    viewport = sanitize_numeric(viewport_height, 0.0, DEFAULTS.max_reasonable_value)
    count = int(sanitize_numeric(item_count, 0.0, DEFAULTS.max_reasonable_value))
    buffer = int(
        sanitize_numeric(overscan, DEFAULTS.default_overscan, DEFAULTS.max_reasonable_value)
    )

    if count == 0:
        return EMPTY_RANGE

    height = effective_item_height(item_height)
    first_visible = math.floor(offset / height)
    last_visible = math.floor((offset + viewport) / height)

    end = min(count - 1, last_visible + buffer)
    start = max(0, first_visible - buffer)
    # Offsets past the end of the list still yield the last rows.
    start = min(start, end)
    return VisibleRange(start=start, end=end)


def compute_item_position(index: object, item_height: object) -> ItemPosition:
    """Return absolute top and height of the row at `index`."""
    safe_index = int(sanitize_numeric(index, 0.0, DEFAULTS.max_reasonable_value))
    height = effective_item_height(item_height)
    return ItemPosition(top=safe_index * height, height=height)


def compute_total_extent(item_count: object, item_height: object) -> float:
    """Return full scrollable height of the list in pixels."""
    count = sanitize_numeric(item_count, 0.0, DEFAULTS.max_reasonable_value)
    return count * effective_item_height(item_height)


class RangeCalculator:
    """Stateless calculator object for injection into list consumers."""

    def compute_visible_range(
        self,
        scroll_offset: float,
        viewport_height: float,
        item_count: float,
        item_height: float,
        overscan: float,
    ) -> VisibleRange:
        return compute_visible_range(
            scroll_offset, viewport_height, item_count, item_height, overscan
        )

    def compute_item_position(self, index: float, item_height: float) -> ItemPosition:
        return compute_item_position(index, item_height)

    def compute_total_extent(self, item_count: float, item_height: float) -> float:
        return compute_total_extent(item_count, item_height)
