"""
Room Graph Layout Service
Main entry point for the Python layout generation service.
"""

import logging
import sys
from pathlib import Path

# Add server directory to path for imports
server_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(server_dir))

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError
from typing import Any, Dict, List, Optional, Union
import uvicorn

from internal.roomgraph import config
from internal.roomgraph import generation
from internal.roomgraph import presets
from internal.roomgraph import seeds
from internal.roomgraph.models import ConfigurationError, Layout, LayoutConfig

SERVICE_NAME = "roomgraph-layout-service"
SERVICE_VERSION = "0.1.0"

# Load configuration
cfg = config.load_config()

logging.basicConfig(
    level=cfg.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Room Graph Layout Service",
    description="Service for generating seeded room graph layouts with doors, trusses, lights and pads",
    version=SERVICE_VERSION,
)

# CORS middleware (allow game servers and tools to call this service)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    service: str
    version: str


class GenerateLayoutResponse(BaseModel):
    """Response from layout generation"""

    success: bool
    layout: Layout
    message: Optional[str] = None


class SeedResponse(BaseModel):
    """Numeric and per-stage seeds for a seed value"""

    seed_input: Union[int, str]
    seed: int
    seeds: Dict[str, int]


class PresetResponse(BaseModel):
    """A named settings overlay"""

    name: str
    description: str = ""
    settings: Dict[str, Any]


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="ok",
        service=SERVICE_NAME,
        version=SERVICE_VERSION,
    )


@app.post("/api/v1/layouts/generate", response_model=GenerateLayoutResponse)
async def generate_layout(request: LayoutConfig):
    """
    Generate a layout.

    Requests without a seed use DEFAULT_SEED when it is configured and a
    random seed otherwise; the seed used is returned in the layout header.
    """
    if request.seed is None and cfg.default_seed is not None:
        request = request.model_copy(update={"seed": cfg.default_seed})

    try:
        layout = generation.generate_layout(request)
    except (ConfigurationError, ValidationError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid layout configuration: {str(e)}")
    except Exception as e:
        logger.exception("Layout generation failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate layout: {str(e)}")

    message = f"Generated {len(layout.rooms)} rooms"
    if layout.diagnostics:
        message += f" with {len(layout.diagnostics)} diagnostics"

    return GenerateLayoutResponse(success=True, layout=layout, message=message)


@app.get("/api/v1/layouts/seed/{seed}", response_model=SeedResponse)
async def get_layout_seed(seed: str):
    """Get the numeric and per-stage seeds for a seed (useful for debugging)"""
    # Path values are strings; all-digit seeds are numeric seeds
    seed_input: Union[int, str] = int(seed) if seed.isdigit() else seed
    return SeedResponse(
        seed_input=seed_input,
        seed=seeds.string_to_seed(seed_input),
        seeds=seeds.derive_stage_seeds(seed_input),
    )


@app.get("/api/v1/presets", response_model=List[str])
async def list_presets():
    """List the available preset names"""
    return presets.list_presets()


@app.get("/api/v1/presets/{name}", response_model=PresetResponse)
async def get_preset(name: str):
    """Get the settings a preset applies"""
    try:
        settings = presets.get_preset(name)
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e))

    description = presets.load_presets()[name].get("description", "")
    return PresetResponse(name=name, description=description, settings=settings)


if __name__ == "__main__":
    uvicorn.run(
        "main:app", host=cfg.host, port=cfg.port, reload=cfg.environment == "development"
    )
