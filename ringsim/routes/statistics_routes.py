"""Routes for traffic statistics and demand forecasts."""

from typing import Optional
from fastapi import APIRouter, HTTPException
from ..demand import DemandForecast
from ..schemas.observation_schemas import StatisticsResponse
from ..services.singleton import get_simulation_service

router = APIRouter(prefix="/api", tags=["statistics"])


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics():
    """
    Get running traffic counters and utilization.

    Returns:
        Counters since the last reset, current utilization and recorded history
    """
    return StatisticsResponse(**get_simulation_service().get_statistics())


@router.get("/demand", response_model=DemandForecast)
async def get_demand(hour: Optional[int] = None, day: Optional[int] = None):
    """
    Get the demand forecast for an hour of a day.

    Args:
        hour: Hour of day 0-23 (default: current simulated hour)
        day: Day of week 0-6, 0=Monday (default: current simulated day)
    """
    try:
        return get_simulation_service().get_demand(hour, day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
