# Main FastAPI application file
# File: api/main.py

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Dict

from api.utils.auth import get_api_key
from api.utils.config import Config
from api.utils.logging import api_logger as logger
from api.utils.sessions import registry
from api.endpoints.layouts import router as layouts_router

from wall_panel_layout import __version__
from wall_panel_layout.utils.logging_config import WallLayoutLogger


# Define lifespan context manager (replaces on_event)
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Run on application startup.")
    Config.validate()
    WallLayoutLogger.configure(debug_mode=Config.DEBUG, console_only=True)

    yield

    logger.info(f"Application shutting down; dropping {len(registry.list_ids())} layouts.")
    registry.clear()


logger.info("==== API INITIALIZATION STARTING ====")

app = FastAPI(
    title="Wall Panel Layout API",
    description="""
    # Wall Panel Layout API

    Compose a wall out of modular panels on an 18 in. grid.

    ## Features

    - Grid solving: column count and reveal width for a wall
    - Drag-and-drop panel placement
    - Selection and combining of stacked panels
    - Seam join/split
    - Face rectangles and seam overlay lines for rendering

    ## Authentication

    All `/layouts` endpoints require an API key in the `X-API-Key` header.

    ## Workflow

    1. Create a layout with `POST /layouts`
    2. Edit it with the drag, selection, combine and seam endpoints
    3. Read `GET /layouts/{layout_id}/faces` to render it
    4. Save the `GET /layouts/{layout_id}` output and restore it with
       `PUT /layouts/{layout_id}/state`
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {
            "name": "Layouts",
            "description": "Wall panel layout editing"
        },
        {
            "name": "Status",
            "description": "API status and health check endpoints"
        },
    ],
    lifespan=lifespan,
)


@app.get("/", tags=["Status"])
async def root():
    logger.info("Root endpoint called")
    return {"status": "online", "message": "Wall Panel Layout API is running"}


@app.get("/health", tags=["Status"], response_model=Dict[str, str])
async def health_check():
    """Check if the API service is healthy."""
    return {"status": "healthy", "message": "Wall Panel Layout API is running"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict this in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    layouts_router,
    prefix="/layouts",
    tags=["Layouts"],
    dependencies=[Depends(get_api_key)]
)
logger.info("Included layouts router with prefix /layouts")

logger.info("==== API INITIALIZATION COMPLETE ====")

# Run with: uvicorn api.main:app --reload
