"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application. The container is the single owner of the
series store: every use case receives it from here.
"""

from contextlib import asynccontextmanager
from typing import Any, Dict

from dependency_injector import containers, providers

from src.application.models import SystemInfo
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.application.use_cases.roll_forward_use_case import RollForwardUseCase
from src.application.use_cases.series_generation_use_case import (
    GenerateRiskSeriesUseCase,
)
from src.application.use_cases.snapshot_use_cases import GetRiskSnapshotUseCase
from src.domain.entities.forecast import ForecastParameters
from src.domain.services.forecast_validator import (
    validate_forecast_parameters,
    validate_history_length,
)
from src.domain.services.risk_catalog import build_risk_catalog
from src.infrastructure.forecasting import SSAForecastEngine
from src.infrastructure.repositories import InMemorySeriesStore
from src.infrastructure.services import (
    HealthCheckService,
    RollForwardScheduler,
    SeededRandomSource,
)
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _simulation_summary(
    simulation: Dict[str, Any], forecast: Dict[str, Any]
) -> Dict[str, Any]:
    return {
        "factor_count": simulation["factor_count"],
        "history_length": simulation["history_length"],
        "sample_count": simulation["sample_count"],
        "seed": simulation["seed"],
        "roll_forward_interval_seconds": simulation["roll_forward_interval_seconds"],
        "forecast": dict(forecast),
    }


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Domain
    risk_catalog = providers.Singleton(
        build_risk_catalog,
        factor_count=config.simulation.factor_count,
    )

    forecast_parameters = providers.Singleton(
        ForecastParameters,
        window_size=config.forecast.window_size,
        series_length=config.forecast.series_length,
        train_fraction=config.forecast.train_fraction,
        horizon=config.forecast.horizon,
        confidence_level=config.forecast.confidence_level,
    )

    # Infrastructure
    series_store = providers.Singleton(InMemorySeriesStore)

    random_source = providers.Singleton(
        SeededRandomSource,
        seed=config.simulation.seed,
    )

    forecast_engine = providers.Singleton(
        SSAForecastEngine,
        rank=config.forecast.rank,
        energy_threshold=config.forecast.energy_threshold,
    )

    # Application (use cases)
    generate_risk_series_use_case = providers.Factory(
        GenerateRiskSeriesUseCase,
        series_store=series_store,
        random_source=random_source,
        catalog=risk_catalog,
        history_length=config.simulation.history_length,
        horizon=config.forecast.horizon,
        sample_count=config.simulation.sample_count,
    )

    # Concurrent triggers must share one lock.
    roll_forward_use_case = providers.Singleton(
        RollForwardUseCase,
        series_store=series_store,
        forecast_engine=forecast_engine,
        random_source=random_source,
        catalog=risk_catalog,
        forecast_parameters=forecast_parameters,
        sample_count=config.simulation.sample_count,
    )

    get_risk_snapshot_use_case = providers.Factory(
        GetRiskSnapshotUseCase,
        series_store=series_store,
    )

    roll_forward_scheduler = providers.Singleton(
        RollForwardScheduler,
        roll_forward=roll_forward_use_case,
        interval_seconds=config.simulation.roll_forward_interval_seconds,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        series_store=series_store,
        roll_forward=roll_forward_use_case,
        expected_series=providers.Callable(
            lambda catalog: len(catalog.descriptors), risk_catalog
        ),
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.ge.title,
        description=config.ge.description,
        version=config.ge.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.ge.git_commit,
        build_time=config.ge.build_time,
        simulation=providers.Callable(
            _simulation_summary, config.simulation, config.forecast
        ),
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for in-process resources.

    Validates the forecast configuration and checks that the seeded
    history covers the forecast series length. Then it seeds the series
    store and starts the roll-forward scheduler when one is configured.
    The scheduler is shut down on the way out.
    """
    container = get_container()

    parameters = container.forecast_parameters()
    validate_forecast_parameters(
        **parameters.as_kwargs(), rank=container.config.forecast.rank()
    )
    validate_history_length(
        container.config.simulation.history_length(), parameters.series_length
    )

    scheduler = container.roll_forward_scheduler()

    try:
        snapshot = await container.generate_risk_series_use_case().execute()
        logger.info(
            "container.series_store.seeded",
            series=len(snapshot),
            version=snapshot.version,
        )

        scheduler.start()

        logger.info("container.resources.initialized")
        yield container

    finally:
        await scheduler.stop()
        logger.info("container.resources.shutdown")
