"""Domain services: pure business rules shared by the use cases."""

from .derived_series import combine_impact, sum_impacts
from .forecast_validator import validate_forecast_parameters
from .random_walk import BoundedRandomWalkGenerator
from .risk_catalog import FactorSeries, RiskCatalog, build_risk_catalog

__all__ = [
    "BoundedRandomWalkGenerator",
    "FactorSeries",
    "RiskCatalog",
    "build_risk_catalog",
    "combine_impact",
    "sum_impacts",
    "validate_forecast_parameters",
]
