"""System endpoints exposing health and info."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Request, Response, status

from src.application.dtos.health_dto import ApplicationInfoDTO, SystemHealthDTO
from src.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from src.domain.entities.health import ServiceStatus
from src.main.container import AppContainer
from src.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get("/health", response_model=SystemHealthDTO)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide[AppContainer.get_health_status_use_case]
    ),
) -> SystemHealthDTO:
    """Return the health of the series store and the roll-forward loop.

    Answers 503 when a component is down so that probes fail.
    """
    health_status = await get_health_status_use_case.execute()
    if health_status.status == ServiceStatus.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning(
            "health.check.down",
            dependencies=[
                dep.name
                for dep in health_status.dependencies
                if dep.status == ServiceStatus.DOWN
            ],
        )
    else:
        logger.debug("health.check.success", status=health_status.status.value)
    return health_status


@router.get("/info", response_model=ApplicationInfoDTO)
@inject
async def info(
    request: Request,
    get_application_info_use_case: GetApplicationInfoUseCase = Depends(
        Provide[AppContainer.get_application_info_use_case]
    ),
) -> ApplicationInfoDTO:
    """Return service metadata and the simulation parameters in effect."""
    started_at = getattr(request.app.state, "started_at", None)
    info_response = await get_application_info_use_case.execute(started_at)
    logger.debug("info.retrieved", status=info_response.status.value)
    return info_response
