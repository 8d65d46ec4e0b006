"""FastAPI main application."""

import threading
from typing import List, Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from ..config import settings
from ..core.diamond_square import DiamondSquareConfig, DiamondSquareGenerator, TerrainSnapshot
from ..core.heightfield import ConfigurationError
from ..logging_config import configure_logging
from ..render.plot import render_png
from ..utils.random import resolve_seed

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terragen API",
    description="Diamond-Square terrain generation with isometric rendering",
    version="0.1.0"
)


# Request/Response models
class RegenerateRequest(BaseModel):
    """Request to generate a new terrain."""

    seed: Optional[str] = Field(None, description="Seed for reproducible terrain (time based if omitted)")
    size: Optional[int] = Field(None, description="Grid side length, 2^k + 1")
    initial_amplitude: Optional[float] = Field(None, ge=0, description="Noise amplitude of the first level")
    roughness: Optional[float] = Field(None, description="Amplitude decay exponent per level")
    include_heights: bool = Field(False, description="Return the full grid of elevations")


class TerrainResponse(BaseModel):
    """Summary of a generated terrain."""

    size: int
    seed: Optional[int]
    initial_amplitude: float
    roughness: float
    min_height: float
    max_height: float
    generation_time_seconds: float
    heights: Optional[List[List[float]]] = None


class TerrainService:
    """Holds the current generator and serializes regeneration."""

    def __init__(self):
        self._lock = threading.Lock()
        self.generator: Optional[DiamondSquareGenerator] = None

    @property
    def snapshot(self) -> Optional[TerrainSnapshot]:
        return self.generator.snapshot if self.generator else None

    def regenerate(self, config: DiamondSquareConfig, seed: int) -> TerrainSnapshot:
        with self._lock:
            if self.generator is None or self.generator.config != config:
                self.generator = DiamondSquareGenerator(config, seed=seed)
            return self.generator.regenerate(seed)

    def reset(self) -> None:
        with self._lock:
            self.generator = None


service = TerrainService()


def _to_response(snapshot: TerrainSnapshot, include_heights: bool = False) -> TerrainResponse:
    return TerrainResponse(
        size=snapshot.size,
        seed=snapshot.seed,
        initial_amplitude=snapshot.config.initial_amplitude,
        roughness=snapshot.config.roughness,
        min_height=snapshot.height_range.min,
        max_height=snapshot.height_range.max,
        generation_time_seconds=snapshot.generation_time_seconds,
        heights=snapshot.heights.tolist() if include_heights else None,
    )


def _current_snapshot() -> TerrainSnapshot:
    snapshot = service.snapshot
    if snapshot is None:
        raise HTTPException(status_code=404, detail="No terrain generated yet")
    return snapshot


# Event handlers
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Terragen API", grid_size=settings.grid_size)


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terragen API",
        "version": "0.1.0",
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "terrain_ready": service.snapshot is not None}


@app.post("/terrain/regenerate", response_model=TerrainResponse)
def regenerate_terrain(request: RegenerateRequest):
    """
    Generate a new terrain, replacing the current one.

    Unspecified parameters fall back to the configured defaults.
    """
    logger.info("Terrain generation requested", request=request.model_dump(exclude={"include_heights"}))

    size = request.size if request.size is not None else settings.grid_size
    if size > settings.max_api_grid_size:
        raise HTTPException(
            status_code=400,
            detail=f"Grid size {size} exceeds the maximum of {settings.max_api_grid_size}",
        )

    config = DiamondSquareConfig(
        size=size,
        initial_amplitude=(
            request.initial_amplitude if request.initial_amplitude is not None else settings.initial_amplitude
        ),
        roughness=request.roughness if request.roughness is not None else settings.roughness,
    )
    seed = resolve_seed(request.seed)

    try:
        snapshot = service.regenerate(config, seed)
    except ConfigurationError as e:
        logger.warning("Rejected terrain configuration", error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return _to_response(snapshot, request.include_heights)


@app.get("/terrain", response_model=TerrainResponse)
def get_terrain(include_heights: bool = False):
    """Summary of the current terrain."""
    return _to_response(_current_snapshot(), include_heights)


@app.get("/terrain/render.png")
def render_terrain():
    """Isometric PNG rendering of the current terrain."""
    snapshot = _current_snapshot()
    return Response(content=render_png(snapshot, settings), media_type="image/png")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
