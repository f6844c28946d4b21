"""
Presentation Layer - Risk Controller

This module exposes the current state of every risk series and lets
clients advance the simulation by one day.
"""

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from src.application.dtos.roll_forward_dto import RollForwardResultDTO
from src.application.dtos.series_dto import RiskSnapshotDTO
from src.application.use_cases.roll_forward_use_case import RollForwardUseCase
from src.application.use_cases.snapshot_use_cases import GetRiskSnapshotUseCase
from src.domain.entities.errors import CycleAbortedError
from src.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/risk", tags=["risk"])


@router.get(
    "",
    response_model=RiskSnapshotDTO,
    summary="Get current risk series",
    description="""
    Return every tracked series with its points:
    - History at negative day offsets (-1 is today)
    - Forecast at day offsets 0..horizon-1 with confidence bounds
    The snapshot always reflects the last committed roll-forward cycle.
    """,
)
@inject
async def get_risk_snapshot(
    snapshot_use_case: GetRiskSnapshotUseCase = Depends(
        Provide[AppContainer.get_risk_snapshot_use_case]
    ),
) -> RiskSnapshotDTO:
    """Get the current aggregate snapshot."""
    snapshot = await snapshot_use_case.execute()
    return RiskSnapshotDTO.from_domain(snapshot)


@router.post(
    "/roll-forward",
    response_model=RollForwardResultDTO,
    summary="Advance the simulation by one day",
    description="""
    Run one roll-forward cycle: drop the forecast and the oldest point,
    shift every series one day into the past, synthesize today's values
    and re-forecast every raw and base factor.
    A cycle triggered while another one runs waits for it to finish.
    """,
)
@inject
async def roll_forward(
    roll_forward_use_case: RollForwardUseCase = Depends(
        Provide[AppContainer.roll_forward_use_case]
    ),
) -> RollForwardResultDTO:
    """Trigger a roll-forward cycle."""
    try:
        return await roll_forward_use_case.execute()

    except CycleAbortedError as e:
        logger.error(
            "risk.roll_forward.failed",
            cycle=e.cycle,
            error=e.message,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.message,
        )
