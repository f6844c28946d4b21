from __future__ import annotations

import pytest

from src.domain.entities.series import Point
from src.domain.services.derived_series import combine_impact, sum_impacts


def test_combine_impact_multiplies_value_and_bounds() -> None:
    raw = Point(1, 2.0, 100, 40.0, lower_bound=30.0, upper_bound=50.0)
    base = Point(2, 2.0, 100, 2.0, lower_bound=1.5, upper_bound=2.5)

    impact = combine_impact(raw, base, series_id=3)

    assert impact.series_id == 3
    assert impact.day_offset == 2.0
    assert impact.value == pytest.approx(80.0)
    assert impact.lower_bound == pytest.approx(45.0)
    assert impact.upper_bound == pytest.approx(125.0)


def test_combine_impact_of_history_has_no_bounds() -> None:
    impact = combine_impact(Point(1, -1.0, 100, 10.0), Point(2, -1.0, 100, 3.0), 3)
    assert impact.value == pytest.approx(30.0)
    assert not impact.is_predicted


def test_combine_impact_rejects_misaligned_points() -> None:
    with pytest.raises(ValueError):
        combine_impact(Point(1, -1.0, 100, 1.0), Point(2, -2.0, 100, 1.0), 3)


def test_sum_impacts_blends_min_with_min_and_max_with_max() -> None:
    impacts = [
        Point(3, 0.0, 100, 10.0, lower_bound=8.0, upper_bound=12.0),
        Point(6, 0.0, 100, 20.0, lower_bound=15.0, upper_bound=30.0),
    ]

    entity = sum_impacts(impacts, series_id=7)

    assert entity.value == pytest.approx(30.0)
    assert entity.lower_bound == pytest.approx(23.0)
    assert entity.upper_bound == pytest.approx(42.0)


def test_sum_impacts_drops_bounds_when_one_is_missing() -> None:
    impacts = [
        Point(3, 0.0, 100, 10.0, lower_bound=8.0, upper_bound=12.0),
        Point(6, 0.0, 100, 20.0),
    ]
    entity = sum_impacts(impacts, series_id=7)
    assert entity.lower_bound is None
    assert entity.upper_bound is None


def test_sum_impacts_requires_aligned_input() -> None:
    with pytest.raises(ValueError):
        sum_impacts([], series_id=7)
    with pytest.raises(ValueError):
        sum_impacts([Point(3, 0.0, 100, 1.0), Point(6, 1.0, 100, 1.0)], series_id=7)
