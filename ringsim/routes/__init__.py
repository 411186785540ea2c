"""Routes package for API endpoints."""

from .control_routes import router as control_router
from .observation_routes import router as observation_router
from .statistics_routes import router as statistics_router

__all__ = ["control_router", "observation_router", "statistics_router"]
