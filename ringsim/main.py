"""FastAPI main application for simulation control and observation."""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config
from .logger import configure_logging
from .routes import control_router, observation_router, statistics_router

config = Config()

# Configure logging
configure_logging(config.LOG_LEVEL, config.LOG_FILE)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(title="RINGS Traffic Simulation API", version="1.0.0")

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(control_router)
app.include_router(observation_router)
app.include_router(statistics_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "RINGS Traffic Simulation API", "status": "running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
