from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, Query
from app.config import get_settings
from app.core.exceptions import WeatherFetchError
from app.core.llm_client import GeminiClient
from app.core.pipeline import WeatherPipeline
from app.core.weather_api import OpenWeatherClient
from app.models.weather import DashboardResponse, WeatherSnapshot
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/weather", tags=["weather"])


@lru_cache
def get_pipeline() -> WeatherPipeline:
    """Builds the weather pipeline once from the process settings."""
    settings = get_settings()
    return WeatherPipeline(OpenWeatherClient(settings), GeminiClient(settings))


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    location: str = Query(..., min_length=1),
    pipeline: WeatherPipeline = Depends(get_pipeline),
):
    """Current weather, forecast and AI advisory for a location"""
    try:
        data = await pipeline.run(location)
    except WeatherFetchError as e:
        logger.error(f"Dashboard request for '{location}' failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))

    message = (
        "Weather and advisory retrieved successfully"
        if data.advisory
        else "Weather retrieved successfully, advisory unavailable"
    )
    return DashboardResponse(
        success=True, location=location, data=data, message=message
    )


@router.get("/snapshot/{location}", response_model=WeatherSnapshot)
async def get_snapshot(
    location: str, pipeline: WeatherPipeline = Depends(get_pipeline)
):
    """Current weather and forecast only, without the advisory"""
    try:
        return await pipeline.snapshot(location)
    except WeatherFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
