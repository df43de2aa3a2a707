"""
check_dashboard.py
Runs one real dashboard cycle (OpenWeather + Gemini) and prints the result.
Run:
    python scripts/check_dashboard.py "New Delhi"
Prerequisites:
    WEATHER_API_KEY, GOOGLE_API_KEY and MONGODB_URI in the environment or .env
"""

import asyncio
import logging
import sys

from app.config import get_settings
from app.core.dashboard import DashboardController
from app.core.llm_client import GeminiClient
from app.core.pipeline import WeatherPipeline
from app.core.weather_api import OpenWeatherClient

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s - %(message)s"
)


async def main(location: str) -> int:
    settings = get_settings()
    pipeline = WeatherPipeline(OpenWeatherClient(settings), GeminiClient(settings))
    controller = DashboardController(
        pipeline, default_location=location, cycle_timeout=settings.cycle_timeout_seconds
    )

    state = await controller.mount()
    print(state.model_dump_json(indent=2, by_alias=True))
    return 0 if state.snapshot else 1


if __name__ == "__main__":
    city = sys.argv[1] if len(sys.argv) > 1 else get_settings().default_location
    sys.exit(asyncio.run(main(city)))
