"""
Derived series reducer.

Impact series are never generated or forecast on their own: they are the
product of a raw factor and its base factor, and the entity impact is the
sum of every factor impact. Bounds are combined channel by channel, lower
with lower and upper with upper.
"""

from __future__ import annotations

from typing import Optional, Sequence

from src.domain.entities.series import Point


def _multiply(left: Optional[float], right: Optional[float]) -> Optional[float]:
    if left is None or right is None:
        return None
    return left * right


def combine_impact(raw: Point, base: Point, series_id: int) -> Point:
    """Return the impact point of one factor at the offset of ``raw``."""
    if not raw.at_offset(base.day_offset):
        raise ValueError(
            f"Cannot combine points at offsets {raw.day_offset:g} "
            f"and {base.day_offset:g}"
        )
    return Point(
        series_id=series_id,
        day_offset=raw.day_offset,
        sample_count=raw.sample_count,
        value=raw.value * base.value,
        lower_bound=_multiply(raw.lower_bound, base.lower_bound),
        upper_bound=_multiply(raw.upper_bound, base.upper_bound),
    )


def sum_impacts(impacts: Sequence[Point], series_id: int) -> Point:
    """Return the entity impact point aggregating factor impacts."""
    if not impacts:
        raise ValueError("At least one impact point is required")

    first = impacts[0]
    for impact in impacts[1:]:
        if not impact.at_offset(first.day_offset):
            raise ValueError("Impact points must share the same day offset")

    return Point(
        series_id=series_id,
        day_offset=first.day_offset,
        sample_count=first.sample_count,
        value=sum(impact.value for impact in impacts),
        lower_bound=_sum_bounds([impact.lower_bound for impact in impacts]),
        upper_bound=_sum_bounds([impact.upper_bound for impact in impacts]),
    )


def _sum_bounds(bounds: Sequence[Optional[float]]) -> Optional[float]:
    if any(bound is None for bound in bounds):
        return None
    return sum(bound for bound in bounds if bound is not None)
