"""Simple API tests."""

from fastapi.testclient import TestClient
from app.api.weather import get_pipeline
from app.core.exceptions import WeatherFetchError
from app.main import app
from app.models.weather import WeatherAdvisory
from conftest import ADVISORY_JSON, make_data

client = TestClient(app)


class StubPipeline:
    """Pipeline double for the weather routes."""

    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error

    async def snapshot(self, location):
        if self.error:
            raise self.error
        return self.data.snapshot

    async def run(self, location):
        if self.error:
            raise self.error
        return self.data


def use_pipeline(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline


def teardown_function():
    app.dependency_overrides.clear()


def test_root_endpoint():
    """Test the root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Crop Weather Dashboard API"
    assert data["status"] == "running"


def test_health_endpoint():
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "database_connected" in data


def test_dashboard_with_advisory():
    """The dashboard returns snapshot and advisory in camelCase JSON."""
    advisory = WeatherAdvisory.model_validate(ADVISORY_JSON)
    use_pipeline(StubPipeline(data=make_data("New Delhi", advisory)))

    response = client.get("/weather/dashboard", params={"location": "New Delhi"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["location"] == "New Delhi"
    assert body["data"]["snapshot"]["current"]["icon_category"] == "Clear"
    irrigation = body["data"]["advisory"]["irrigation"]
    assert irrigation["soilMoisture"][0]["moisture"] == 45


def test_dashboard_without_advisory():
    """A missing advisory is not an error."""
    use_pipeline(StubPipeline(data=make_data("Pune")))

    response = client.get("/weather/dashboard", params={"location": "Pune"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["advisory"] is None
    assert "advisory unavailable" in body["message"]


def test_dashboard_weather_failure():
    """Weather failures map to 502 with the cause."""
    use_pipeline(StubPipeline(error=WeatherFetchError("Weather provider returned HTTP 500 (weather)")))

    response = client.get("/weather/dashboard", params={"location": "Atlantis"})

    assert response.status_code == 502
    assert "HTTP 500" in response.json()["detail"]


def test_dashboard_requires_location():
    """An empty location is rejected."""
    response = client.get("/weather/dashboard", params={"location": ""})
    assert response.status_code == 422


def test_snapshot_endpoint():
    """The snapshot route returns weather only."""
    use_pipeline(StubPipeline(data=make_data("Pune")))

    response = client.get("/weather/snapshot/Pune")

    assert response.status_code == 200
    assert response.json()["current"]["location_name"] == "Pune"


def test_invalid_endpoint():
    """Test calling an invalid endpoint."""
    response = client.get("/invalid")
    assert response.status_code == 404
