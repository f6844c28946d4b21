"""Catalog of the series tracked for a risk entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from src.domain.entities.errors import InvalidParameterError
from src.domain.entities.series import (
    BASE_FACTOR_RANGE,
    FACTOR_RANGE,
    SeriesDescriptor,
    SeriesKind,
)


@dataclass(frozen=True, slots=True)
class FactorSeries:
    """The three series describing one risk factor."""

    index: int
    raw: SeriesDescriptor
    base: SeriesDescriptor
    impact: SeriesDescriptor


@dataclass(frozen=True, slots=True)
class RiskCatalog:
    """Every factor of the tracked entity plus the aggregated impact."""

    factors: Tuple[FactorSeries, ...]
    entity_impact: SeriesDescriptor

    @property
    def descriptors(self) -> List[SeriesDescriptor]:
        descriptors: List[SeriesDescriptor] = []
        for factor in self.factors:
            descriptors.extend([factor.raw, factor.base, factor.impact])
        descriptors.append(self.entity_impact)
        return descriptors

    @property
    def forecast_sources(self) -> List[SeriesDescriptor]:
        """Raw and base series, in the order the random stream visits them."""
        sources: List[SeriesDescriptor] = []
        for factor in self.factors:
            sources.extend([factor.raw, factor.base])
        return sources


def build_risk_catalog(factor_count: int = 2) -> RiskCatalog:
    """Build the catalog for ``factor_count`` factors.

    Ids are assigned in registration order: raw, base and impact of each
    factor, then the entity impact.
    """
    if factor_count <= 0:
        raise InvalidParameterError(
            "Factor count must be greater than 0.",
            details={"factor_count": factor_count},
        )

    factors = []
    for index in range(1, factor_count + 1):
        first_id = 3 * index - 2
        factors.append(
            FactorSeries(
                index=index,
                raw=SeriesDescriptor(
                    series_id=first_id,
                    name=f"risk factor {index}",
                    kind=SeriesKind.FACTOR,
                    factor_index=index,
                    value_range=FACTOR_RANGE,
                ),
                base=SeriesDescriptor(
                    series_id=first_id + 1,
                    name=f"risk base factor {index}",
                    kind=SeriesKind.BASE_FACTOR,
                    factor_index=index,
                    value_range=BASE_FACTOR_RANGE,
                ),
                impact=SeriesDescriptor(
                    series_id=first_id + 2,
                    name=f"impact of factor {index}",
                    kind=SeriesKind.IMPACT,
                    factor_index=index,
                ),
            )
        )

    entity_impact = SeriesDescriptor(
        series_id=3 * factor_count + 1,
        name="impact across all factors",
        kind=SeriesKind.ENTITY_IMPACT,
    )
    return RiskCatalog(factors=tuple(factors), entity_impact=entity_impact)
