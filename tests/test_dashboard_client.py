"""Tests for the frontend's HTTP pipeline against the dashboard API."""

import asyncio

import httpx
import pytest

from app.core.dashboard import DashboardController, DashboardStatus
from app.core.dashboard_client import DashboardApiClient
from app.core.exceptions import MalformedResponseError, WeatherFetchError
from app.models.weather import DashboardResponse, WeatherAdvisory
from conftest import ADVISORY_JSON, make_data


def api_client(handler):
    return DashboardApiClient(
        "http://api.test/", transport=httpx.MockTransport(handler)
    )


def dashboard_body(location, advisory=None):
    response = DashboardResponse(
        success=True,
        location=location,
        data=make_data(location, advisory),
        message="ok",
    )
    return response.model_dump(mode="json", by_alias=True)


def test_run_returns_dashboard_data():
    """A 200 answer is parsed back into DashboardData."""
    requests = []

    def handler(request):
        requests.append(request)
        advisory = WeatherAdvisory.model_validate(ADVISORY_JSON)
        return httpx.Response(200, json=dashboard_body("Pune", advisory))

    data = asyncio.run(api_client(handler).run("Pune"))

    assert requests[0].url.path == "/weather/dashboard"
    assert requests[0].url.params["location"] == "Pune"
    assert data.snapshot.current.location_name == "Pune"
    assert data.advisory.irrigation.soil_moisture[0].moisture_percent == 45


def test_run_raises_on_bad_gateway():
    """A 502 from the API is a weather fetch failure."""
    handler = lambda request: httpx.Response(502, json={"detail": "HTTP 500"})
    with pytest.raises(WeatherFetchError, match="502"):
        asyncio.run(api_client(handler).run("Atlantis"))


def test_run_raises_on_unreachable_api():
    """Connection errors are weather fetch failures."""

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(WeatherFetchError):
        asyncio.run(api_client(handler).run("Pune"))


def test_run_raises_on_unexpected_body():
    """A body that is not a DashboardResponse is malformed."""
    handler = lambda request: httpx.Response(200, json={"hello": "world"})
    with pytest.raises(MalformedResponseError):
        asyncio.run(api_client(handler).run("Pune"))


def test_controller_over_http_fails_closed():
    """A controller driven through the API ends in failed on a 500."""
    handler = lambda request: httpx.Response(500, text="Internal Server Error")
    controller = DashboardController(api_client(handler))

    state = asyncio.run(controller.mount())

    assert state.status is DashboardStatus.FAILED
    assert state.snapshot is None
    assert state.advisory is None


def test_run_keeps_status_when_error_body_is_not_an_object():
    """A JSON error body that is not an object still reports the status."""
    handler = lambda request: httpx.Response(502, json=["bad", "gateway"])
    with pytest.raises(WeatherFetchError, match="502"):
        asyncio.run(api_client(handler).run("Atlantis"))
