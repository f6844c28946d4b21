from __future__ import annotations

import pytest

from src.domain.entities.errors import InvalidParameterError
from src.domain.entities.series import BASE_FACTOR_RANGE, FACTOR_RANGE, SeriesKind
from src.domain.services.risk_catalog import build_risk_catalog


def test_default_catalog_ids_and_names() -> None:
    catalog = build_risk_catalog()

    assert [d.series_id for d in catalog.descriptors] == [1, 2, 3, 4, 5, 6, 7]
    assert [d.name for d in catalog.descriptors] == [
        "risk factor 1",
        "risk base factor 1",
        "impact of factor 1",
        "risk factor 2",
        "risk base factor 2",
        "impact of factor 2",
        "impact across all factors",
    ]
    assert catalog.entity_impact.kind is SeriesKind.ENTITY_IMPACT


def test_forecast_sources_are_raw_and_base_only() -> None:
    catalog = build_risk_catalog(factor_count=3)

    sources = catalog.forecast_sources
    assert [d.series_id for d in sources] == [1, 2, 4, 5, 7, 8]
    assert all(d.is_forecast_source for d in sources)
    assert sources[0].value_range is FACTOR_RANGE
    assert sources[1].value_range is BASE_FACTOR_RANGE
    assert catalog.entity_impact.series_id == 10


def test_factor_count_must_be_positive() -> None:
    with pytest.raises(InvalidParameterError):
        build_risk_catalog(factor_count=0)
