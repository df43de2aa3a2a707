"""Client for fetching raw weather data from the OpenWeather API."""

import httpx
from typing import Any, Dict, Optional
from app.config import Settings
from app.core.exceptions import MalformedResponseError, WeatherFetchError
from app.models.weather import RawWeather
import logging

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """Fetches current conditions and the 5-day/3-hour forecast for a location."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = settings.openweather_base_url
        self.api_key = settings.weather_api_key
        self.timeout = settings.request_timeout_seconds
        self._transport = transport

    async def fetch_weather(self, location: str) -> RawWeather:
        """
        Get both raw payloads for a location. Either call failing fails the
        whole fetch; nothing partial is returned.
        """
        if not self.api_key:
            raise WeatherFetchError("WEATHER_API_KEY is not configured")

        params = {"q": location, "units": "metric", "appid": self.api_key}

        async with httpx.AsyncClient(
            transport=self._transport, timeout=self.timeout
        ) as client:
            current = await self._get_json(client, "weather", params)
            forecast = await self._get_json(client, "forecast", params)

        logger.info(f"Fetched current weather and forecast for '{location}'")
        return RawWeather(current=current, forecast=forecast)

    async def _get_json(
        self, client: httpx.AsyncClient, endpoint: str, params: Dict[str, Any]
    ) -> Dict[str, Any]:
        """GET one endpoint and return its JSON object body."""
        url = f"{self.base_url}/{endpoint}"
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"OpenWeather /{endpoint} timed out for '{params['q']}'")
            raise WeatherFetchError(f"Weather provider timed out ({endpoint})") from e
        except httpx.HTTPStatusError as e:
            logger.error(
                f"OpenWeather /{endpoint} returned {e.response.status_code} for '{params['q']}'"
            )
            raise WeatherFetchError(
                f"Weather provider returned HTTP {e.response.status_code} ({endpoint})"
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"OpenWeather /{endpoint} request failed: {e}")
            raise WeatherFetchError(f"Weather provider unreachable ({endpoint})") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Weather provider sent a non-JSON body ({endpoint})"
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Weather provider sent an unexpected body ({endpoint})"
            )
        return data
