"""Main FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config import get_settings
from app.core.database import MongoConnection
import logging

from app.api.weather import router as weather_router

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

database = MongoConnection(settings.mongodb_uri, settings.mongodb_timeout_ms)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages application startup and shutdown events."""
    # Startup
    logger.info("Starting Crop Weather Dashboard API")
    if not await database.ensure_connected():
        logger.warning("Continuing without a database connection")

    yield

    # Shutdown
    logger.info("Shutting down Crop Weather Dashboard API")
    await database.close()


app = FastAPI(
    title="Crop Weather Dashboard API",
    description="Weather, forecast and AI crop advisory for farmers",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(weather_router)


@app.get("/")
async def root():
    """Provides basic information about the running API and its features."""
    return {
        "message": "Crop Weather Dashboard API",
        "status": "running",
        "features": {
            "weather": bool(settings.weather_api_key),
            "advisory": bool(settings.google_api_key),
            "chat_widget": bool(settings.kommunicate_app_id),
        },
    }


@app.get("/health")
async def health_check():
    """Performs a health check of the API and its dependent services."""
    return {
        "status": "healthy",
        "database_connected": database.is_connected,
    }
