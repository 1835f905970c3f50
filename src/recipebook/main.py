"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from recipebook.config import settings
from recipebook.errors import RecipeDataError
from recipebook.logging_config import LoggingContext, configure_logging, get_logger
from recipebook.repository import RecipeRepository
from recipebook.routers import recipes_router

# Configure logging on module load
configure_logging(log_level=settings.log_level, environment=settings.environment)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Starting Recipebook API")

    try:
        app.state.repository = RecipeRepository.from_file(settings.recipes_data_path)
        logger.info(f"Recipe repository ready with {len(app.state.repository)} recipes")
    except RecipeDataError as e:
        logger.error(f"Recipe data unavailable: {e}")
        app.state.repository = None

    yield

    logger.info("Shutting down Recipebook API")
    app.state.repository = None


app = FastAPI(
    title="Recipebook API",
    description="Recipe browsing with serving scaling and metric/imperial conversion",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag log records emitted while handling a request with a request id."""
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["x-request-id"] = request_id
    return response


app.include_router(recipes_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipebook-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "Recipebook API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
