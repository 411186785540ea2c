"""Routes for simulation control (play, pause, reset, speed, scenario, tick, run)."""

import logging
from fastapi import APIRouter, HTTPException
from ..schemas.control_schemas import (
    SpeedRequest,
    ScenarioRequest,
    TickRequest,
    RunRequest,
    ControlResponse,
    TickResponse,
    RunResponse,
)
from ..services.singleton import get_simulation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["control"])


@router.post("/play", response_model=ControlResponse)
async def play():
    """Start (or resume) the simulation."""
    status = get_simulation_service().play()
    return ControlResponse(message="Simulation started", **status)


@router.post("/pause", response_model=ControlResponse)
async def pause():
    """Pause the simulation; ticks become no-ops."""
    status = get_simulation_service().pause()
    return ControlResponse(message="Simulation paused", **status)


@router.post("/reset", response_model=ControlResponse)
async def reset():
    """
    Reset to the initial population of the current scenario.

    Returns:
        Control state after the reset (paused, speed 1)
    """
    simulation_service = get_simulation_service()

    try:
        status = simulation_service.reset()
        return ControlResponse(message="Simulation reset", **status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error resetting simulation: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/speed", response_model=ControlResponse)
async def set_speed(request: SpeedRequest):
    """
    Set the global speed multiplier.

    Args:
        request: New speed (must be positive)

    Returns:
        Control state after the change
    """
    simulation_service = get_simulation_service()

    try:
        status = simulation_service.set_speed(request.speed)
        return ControlResponse(message=f"Speed set to {request.speed}x", **status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/scenario", response_model=ControlResponse)
async def set_scenario(request: ScenarioRequest):
    """
    Select a scenario and rebuild the world from it.

    Args:
        request: Scenario name; unknown names use the default preset

    Returns:
        Control state after the change
    """
    simulation_service = get_simulation_service()

    try:
        status = simulation_service.set_scenario(request.scenario)
        return ControlResponse(message=f"Scenario set to {request.scenario}", **status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error changing scenario: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/tick", response_model=TickResponse)
async def tick(request: TickRequest):
    """
    Advance one tick (driven by the external render loop).

    Args:
        request: Elapsed time since the previous tick

    Returns:
        Tick number, clock and the events emitted by this tick
    """
    simulation_service = get_simulation_service()

    try:
        events = simulation_service.tick(request.delta_time)
        status = simulation_service.get_status()
        return TickResponse(
            tick=status["tick"],
            simulation_time=status["simulation_time"],
            events=events,
        )
    except Exception as e:
        logger.error(f"Error advancing tick: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/run", response_model=RunResponse)
async def run(request: RunRequest):
    """
    Run a headless batch of ticks.

    Args:
        request: Tick count, per-tick delta and logging options

    Returns:
        Run summary
    """
    simulation_service = get_simulation_service()

    try:
        result = simulation_service.run(
            request.ticks,
            request.delta_time,
            log_ticks=request.log_ticks,
            write_report=request.write_report,
        )
        return RunResponse(**result)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error running simulation: {e}")
        raise HTTPException(status_code=500, detail=str(e))
