"""Routes for the read-only observation surface."""

from typing import Optional
from fastapi import APIRouter, HTTPException
from ..models.world import WorldSnapshot
from ..schemas.observation_schemas import (
    AircraftListResponse,
    AircraftResponse,
    GatesResponse,
    PipelinesResponse,
    EventsResponse,
)
from ..services.singleton import get_simulation_service

router = APIRouter(prefix="/api", tags=["observation"])


@router.get("/snapshot", response_model=WorldSnapshot)
async def get_snapshot(event_limit: Optional[int] = 20):
    """
    Get a read-only snapshot of the world for rendering.

    Args:
        event_limit: Number of most recent events to include (default: 20)

    Returns:
        Aircraft, gates, pipelines, recent events and counters
    """
    return get_simulation_service().simulation.snapshot(event_limit)


@router.get("/aircraft", response_model=AircraftListResponse)
async def list_aircraft(status: Optional[str] = None):
    """
    Get the aircraft population.

    Args:
        status: Only aircraft in this state (in_ring, descending, ...)
    """
    return AircraftListResponse(**get_simulation_service().list_aircraft(status))


@router.get("/aircraft/{aircraft_id}", response_model=AircraftResponse)
async def get_aircraft(aircraft_id: str):
    """Get one aircraft by id."""
    try:
        return AircraftResponse(aircraft=get_simulation_service().get_aircraft(aircraft_id))
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Aircraft {aircraft_id} not found")


@router.get("/gates", response_model=GatesResponse)
async def list_gates(city: Optional[str] = None):
    """
    Get gate status.

    Args:
        city: Only gates of this city
    """
    gates = get_simulation_service().list_gates(city)
    return GatesResponse(gates=gates, count=len(gates))


@router.get("/pipelines", response_model=PipelinesResponse)
async def list_pipelines():
    """Get corridor capacity and occupancy."""
    return PipelinesResponse(pipelines=get_simulation_service().simulation.world.pipelines)


@router.get("/events", response_model=EventsResponse)
async def list_events(limit: Optional[int] = 20):
    """
    Get the most recent events, newest first.

    Args:
        limit: Number of events (default: 20, use 0 or None for all retained)
    """
    simulation = get_simulation_service().simulation
    return EventsResponse(events=simulation.recent_events(limit if limit and limit > 0 else None))
