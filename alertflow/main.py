"""
AlertFlow - FastAPI Application Entry Point.

Serves stored workflows and executes them against user inputs.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import httpx
import logging

from alertflow.config import settings
from alertflow.api.routes import workflows
from alertflow.engine.executor import Executor
from alertflow.engine.node import list_node_types
from alertflow.tools.weather import WeatherLookup
from alertflow.workflows.weather_alert import SAMPLE_WORKFLOW_ID, register_weather_alert_workflow


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    """Create the HTTP client shared by every weather lookup."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.LOOKUP_TIMEOUT),
        limits=httpx.Limits(
            max_connections=settings.HTTP_MAX_CONNECTIONS,
            max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE,
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    http_client = create_http_client()
    lookup = WeatherLookup(
        http_client,
        api_url=settings.WEATHER_API_URL,
        timeout=settings.LOOKUP_TIMEOUT,
    )
    app.state.executor = Executor(
        lookup=lookup,
        alert_sender=settings.ALERT_SENDER,
        alert_subject=settings.ALERT_SUBJECT,
    )

    if settings.SEED_SAMPLE_WORKFLOW:
        await register_weather_alert_workflow()

    yield

    # Shutdown
    logger.info("Shutting down...")
    await http_client.aclose()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## AlertFlow API

Execute weather alert workflows and inspect each step.

### Node types
- **start** / **end**: entry and exit points
- **form**: copies the required input fields
- **integration**: fetches the current temperature for the chosen city
- **condition**: compares the temperature with a threshold
- **email**: drafts an alert when the condition is met

### Quick Start
1. Get the sample workflow: `GET /api/v1/workflows/{id}`
2. Execute it: `POST /api/v1/workflows/{id}/execute`
    """,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(workflows.router)


# ============================================================
# Root Endpoints
# ============================================================

@app.get("/", tags=["Root"])
async def root():
    """API root - returns basic info and links."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "description": "A small workflow engine for weather alert pipelines",
        "docs": "/docs",
        "redoc": "/redoc",
        "endpoints": {
            "workflows": "/api/v1/workflows",
            "workflow": "/api/v1/workflows/{id}",
            "execute": "/api/v1/workflows/{id}/execute",
        },
        "node_types": list_node_types(),
        "sample_workflow": SAMPLE_WORKFLOW_ID,
    }


@app.get("/health", tags=["Root"])
async def health():
    """Health check endpoint."""
    from alertflow.storage.memory import workflow_storage

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "workflows_count": len(workflow_storage),
    }


# ============================================================
# Error Handlers
# ============================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "detail": str(exc) if settings.DEBUG else "An unexpected error occurred",
        },
    )
