import asyncio

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from src.api.config import settings
from src.api.core.engine import get_simulator
from src.api.schemas.simulation import SimulationParamsResponse, SimulationRequest, SimulationResponse
from src.models.simulation import ScenarioSimulator, SimulationParams
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/defaults", response_model=SimulationParamsResponse)
async def get_default_params():
    """Get the scenario parameters a new simulation starts from"""
    return SimulationParamsResponse(**SimulationParams.defaults().to_dict())


@router.post("/run", response_model=SimulationResponse)
async def run_simulation(
    request: SimulationRequest,
    simulator: ScenarioSimulator = Depends(get_simulator)
):
    """
    Run a flood scenario simulation.

    - **rainfall_intensity**: 0-100
    - **river_overflow**: 0-100
    - **terrain_type**: urban, rural or mixed
    - **duration**: 6-72 hours

    Returns affected area, population at risk, infrastructure impact,
    evacuation zones and, for large affected areas, mitigation measures.
    """
    params = SimulationParams(
        rainfall_intensity=request.rainfall_intensity,
        river_overflow=request.river_overflow,
        terrain_type=request.terrain_type,
        duration=request.duration
    )
    # Validate before the presentation delay so bad input fails immediately
    params = simulator.validate(params)

    if settings.SIMULATION_DELAY_SECONDS > 0:
        await asyncio.sleep(settings.SIMULATION_DELAY_SECONDS)

    result = await run_in_threadpool(simulator.simulate, params)

    return SimulationResponse(
        params=SimulationParamsResponse(**params.to_dict()),
        severity=simulator.severity(params),
        **result.to_dict(),
        mitigation=[action.to_dict() for action in simulator.mitigation_plan(result)]
    )
