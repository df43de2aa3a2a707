"""The fetch -> normalize -> enrich cycle behind the dashboard."""

import logging

from app.core.llm_client import GeminiClient
from app.core.normalizer import normalize
from app.core.weather_api import OpenWeatherClient
from app.models.weather import DashboardData, WeatherSnapshot

logger = logging.getLogger(__name__)


class WeatherPipeline:
    """Runs one dashboard cycle for a location."""

    def __init__(self, weather_client: OpenWeatherClient, llm_client: GeminiClient):
        self.weather_client = weather_client
        self.llm_client = llm_client

    async def snapshot(self, location: str) -> WeatherSnapshot:
        """Fetch and normalize; raises WeatherFetchError on any weather failure."""
        raw = await self.weather_client.fetch_weather(location)
        return normalize(raw.current, raw.forecast)

    async def run(self, location: str) -> DashboardData:
        """Full cycle. The advisory is only requested once a complete snapshot exists."""
        snapshot = await self.snapshot(location)
        advisory = await self.llm_client.get_advisory(snapshot)
        if advisory is None:
            logger.info(f"No advisory for '{location}', returning weather only")
        return DashboardData(snapshot=snapshot, advisory=advisory)
