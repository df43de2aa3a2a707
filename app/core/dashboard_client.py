"""HTTP client that runs dashboard cycles through the backend API."""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.exceptions import MalformedResponseError, WeatherFetchError
from app.models.weather import DashboardData, DashboardResponse

logger = logging.getLogger(__name__)


class DashboardApiClient:
    """Pipeline for the frontend controller, backed by GET /weather/dashboard."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def run(self, location: str) -> DashboardData:
        async with httpx.AsyncClient(
            base_url=self.base_url, transport=self._transport, timeout=self.timeout
        ) as client:
            try:
                response = await client.get(
                    "/weather/dashboard", params={"location": location}
                )
            except httpx.HTTPError as e:
                logger.error(f"Dashboard API call failed: {e}")
                raise WeatherFetchError("Could not reach the dashboard API") from e

        if response.status_code != 200:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = (
                body.get("detail", response.text)
                if isinstance(body, dict)
                else response.text
            )
            raise WeatherFetchError(f"Dashboard API error {response.status_code}: {detail}")

        try:
            payload = DashboardResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise MalformedResponseError("Dashboard API sent an unexpected body") from e

        if not payload.success or payload.data is None:
            raise WeatherFetchError(payload.message)
        return payload.data
