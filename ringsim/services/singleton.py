"""Process-wide SimulationService shared by all routers."""

from typing import Optional

from .simulation_service import SimulationService

_simulation_service: Optional[SimulationService] = None


def get_simulation_service() -> SimulationService:
    """Return the shared service, creating it from the environment on first use."""
    global _simulation_service
    if _simulation_service is None:
        _simulation_service = SimulationService()
    return _simulation_service


def reset_simulation_service(service: Optional[SimulationService] = None) -> None:
    """
    Replace the shared service.

    Args:
        service: New service, or None to rebuild lazily on the next request
    """
    global _simulation_service
    _simulation_service = service
