from __future__ import annotations

import math
from fractions import Fraction

import pytest

from vscroll.api.virtualization import DEFAULTS, EMPTY_RANGE, ItemPosition, VisibleRange
from vscroll.ui_runtime.range_calculator import (
    RangeCalculator,
    compute_item_position,
    compute_total_extent,
    compute_visible_range,
    sanitize_numeric,
)

_HOSTILE = (math.nan, math.inf, -math.inf, -5.0, 0.0)


def test_visible_range_mid_list_applies_overscan() -> None:
    assert compute_visible_range(500, 600, 1000, 50, 3) == VisibleRange(start=7, end=25)


def test_visible_range_clamps_start_at_top() -> None:
    assert compute_visible_range(0, 600, 1000, 50, 3).start == 0


def test_visible_range_clamps_end_at_bottom() -> None:
    visible = compute_visible_range(49400, 600, 1000, 50, 3)
    assert visible.end == 999
    assert visible.start == 985


def test_visible_range_overscan_larger_than_list() -> None:
    assert compute_visible_range(0, 600, 5, 50, 10) == VisibleRange(start=0, end=4)


@pytest.mark.parametrize("scroll", [0, 123.4, math.nan, -1.0])
@pytest.mark.parametrize("overscan", [0, 3, math.inf])
def test_empty_list_returns_canonical_empty_range(scroll: float, overscan: float) -> None:
    visible = compute_visible_range(scroll, 600, 0, 50, overscan)
    assert visible == EMPTY_RANGE
    assert visible.count == 0
    assert visible.is_empty


def test_visible_range_bounds_hold_across_scroll_positions() -> None:
    for item_count in (1, 2, 17, 1000):
        for scroll in range(0, 60_000, 377):
            visible = compute_visible_range(scroll, 600, item_count, 50, 3)
            assert 0 <= visible.start <= visible.end <= item_count - 1


def test_visible_range_scrolled_past_end_keeps_start_le_end() -> None:
    visible = compute_visible_range(1_000_000, 600, 10, 50, 3)
    assert visible == VisibleRange(start=9, end=9)


def test_overscan_widens_range_monotonically() -> None:
    previous = compute_visible_range(5000, 600, 1000, 50, 0)
    for overscan in range(1, 30):
        current = compute_visible_range(5000, 600, 1000, 50, overscan)
        assert current.start <= previous.start
        assert current.end >= previous.end
        previous = current


def test_fractional_inputs_produce_integer_indices() -> None:
    visible = compute_visible_range(75.5, 130.25, 99.9, 25.0, 2.7)
    assert isinstance(visible.start, int)
    assert isinstance(visible.end, int)
    assert visible == VisibleRange(start=1, end=10)


def test_zero_item_height_is_floored_at_minimum() -> None:
    # 0 is kept by sanitization and then floored at 1 px
    assert compute_visible_range(10, 5, 100, 0, 0) == VisibleRange(start=10, end=15)


def test_invalid_item_height_uses_default() -> None:
    expected = compute_visible_range(500, 600, 1000, DEFAULTS.default_item_height, 3)
    assert compute_visible_range(500, 600, 1000, math.nan, 3) == expected
    assert compute_visible_range(500, 600, 1000, -20, 3) == expected


def test_invalid_overscan_uses_default() -> None:
    assert compute_visible_range(500, 600, 1000, 50, -1) == VisibleRange(start=7, end=25)
    assert compute_visible_range(500, 600, 1000, 50, math.nan) == VisibleRange(start=7, end=25)


@pytest.mark.parametrize("scroll", _HOSTILE)
@pytest.mark.parametrize("viewport", _HOSTILE)
@pytest.mark.parametrize("count", _HOSTILE + (10.0,))
@pytest.mark.parametrize("height", _HOSTILE)
def test_visible_range_never_raises(scroll: float, viewport: float, count: float, height: float) -> None:
    visible = compute_visible_range(scroll, viewport, count, height, math.nan)
    assert visible.start >= 0
    assert visible == EMPTY_RANGE or visible.start <= visible.end


@pytest.mark.parametrize("index", _HOSTILE)
@pytest.mark.parametrize("height", _HOSTILE)
def test_item_position_and_extent_never_raise(index: float, height: float) -> None:
    position = compute_item_position(index, height)
    extent = compute_total_extent(index, height)
    assert math.isfinite(position.top) and position.top >= 0
    assert position.height >= DEFAULTS.min_item_height
    assert math.isfinite(extent) and extent >= 0


def test_non_numeric_inputs_are_treated_as_invalid() -> None:
    assert compute_visible_range("x", None, "10", object(), None) == VisibleRange(start=0, end=3)
    assert compute_item_position(None, "tall") == ItemPosition(top=0, height=50)


def test_item_position_example() -> None:
    assert compute_item_position(10, 50) == ItemPosition(top=500, height=50)


def test_item_position_is_linear_in_index() -> None:
    for height in (1, 7.5, 50, 333):
        for index in range(0, 500, 13):
            delta = compute_item_position(index + 1, height).top - compute_item_position(index, height).top
            assert delta == pytest.approx(height)


def test_item_position_negative_index_is_zero() -> None:
    assert compute_item_position(-3, 40) == ItemPosition(top=0, height=40)


def test_total_extent_examples() -> None:
    assert compute_total_extent(1000, 50) == 50000
    assert compute_total_extent(0, 50) == 0
    assert compute_total_extent(12, 7.5) == pytest.approx(90.0)


def test_total_extent_keeps_fractional_count() -> None:
    assert compute_total_extent(12.5, 50) == pytest.approx(625.0)


def test_total_extent_is_clamped_to_finite_ceiling() -> None:
    extent = compute_total_extent(1e300, 1e300)
    assert extent == DEFAULTS.max_reasonable_value * DEFAULTS.max_reasonable_value


def test_sanitize_numeric_policy() -> None:
    assert sanitize_numeric(math.nan, 7.0) == 7.0
    assert sanitize_numeric(-math.inf, 7.0) == 7.0
    assert sanitize_numeric(-1, 7.0) == 7.0
    assert sanitize_numeric(10, 7.0, 5.0) == 5.0
    assert sanitize_numeric(3, 7.0, 5.0) == 3.0


def test_range_calculator_class_delegates_to_functions() -> None:
    calculator = RangeCalculator()
    assert calculator.compute_visible_range(500, 600, 1000, 50, 3) == VisibleRange(start=7, end=25)
    assert calculator.compute_item_position(10, 50) == ItemPosition(top=500, height=50)
    assert calculator.compute_total_extent(1000, 50) == 50000


@pytest.mark.parametrize("huge", [10**400, Fraction(10**400)])
def test_values_beyond_float_range_clamp_to_ceiling(huge: object) -> None:
    ceiling = DEFAULTS.max_reasonable_value
    assert compute_visible_range(huge, 600, 1000, 50, 3) == VisibleRange(start=999, end=999)
    assert compute_visible_range(0, huge, 1000, 50, 3) == VisibleRange(start=0, end=999)
    assert compute_visible_range(0, 600, huge, 50, huge) == VisibleRange(start=0, end=int(ceiling) - 1)
    assert compute_item_position(huge, 50) == ItemPosition(top=ceiling * 50, height=50)
    assert compute_item_position(3, huge) == ItemPosition(top=3 * ceiling, height=ceiling)
    assert compute_total_extent(huge, 50) == ceiling * 50
    assert sanitize_numeric(huge, 7.0, 5.0) == 5.0
    assert sanitize_numeric(huge, 7.0) == 7.0


@pytest.mark.parametrize("huge", [-(10**400), Fraction(-(10**400))])
def test_negative_values_beyond_float_range_use_default(huge: object) -> None:
    assert compute_visible_range(huge, 600, 1000, 50, 3) == VisibleRange(start=0, end=15)
    assert compute_item_position(huge, huge) == ItemPosition(top=0, height=DEFAULTS.default_item_height)
    assert compute_total_extent(huge, 50) == 0
