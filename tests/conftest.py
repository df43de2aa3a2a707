"""Shared fixtures: test environment and OpenWeather-shaped payloads."""

import os

# Settings are built at import time of app.main
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/test")
os.environ.setdefault("WEATHER_API_KEY", "test-weather-key")

import pytest

from app.config import load_settings
from app.models.weather import (
    CurrentConditions,
    DashboardData,
    IconCategory,
    WeatherSnapshot,
)


def make_current(
    name="New Delhi", temp=28, humidity=60, wind=10, main="Clear", rain=None
):
    payload = {
        "name": name,
        "main": {"temp": temp, "humidity": humidity},
        "wind": {"speed": wind},
        "weather": [{"main": main, "description": f"{main.lower()} sky"}],
    }
    if rain is not None:
        payload["rain"] = rain
    return payload


def make_forecast(count=7, start_day=19):
    """`count` samples, 3 hours apart, starting on 2026-10-19 (a Monday)."""
    samples = []
    for index in range(count):
        hour = index * 3
        samples.append(
            {
                "dt_txt": f"2026-10-{start_day + hour // 24:02d} {hour % 24:02d}:00:00",
                "main": {"temp": 20 + index},
                "weather": [{"main": "Clouds", "description": "scattered clouds"}],
            }
        )
    return {"cnt": count, "list": samples}


def make_snapshot(name="New Delhi", temp=28.0):
    return WeatherSnapshot(
        current=CurrentConditions(
            location_name=name,
            temperature_celsius=temp,
            condition_text="clear sky",
            humidity_percent=60,
            wind_speed=10,
            icon_category=IconCategory.CLEAR,
        ),
        forecast=[],
    )


def make_data(name="New Delhi", advisory=None):
    return DashboardData(snapshot=make_snapshot(name), advisory=advisory)


ADVISORY_JSON = {
    "advisory": [
        {"crop": "Wheat", "stage": "Tillering", "advice": "Hold irrigation."},
    ],
    "irrigation": {
        "soilMoisture": [{"field": "Field A", "crop": "Wheat", "moisture": 45}],
        "recommendations": [
            {"field": "Field A", "crop": "Wheat", "advice": "Irrigate lightly."}
        ],
    },
}


@pytest.fixture
def settings():
    return load_settings(
        mongodb_uri="mongodb://localhost:27017/test",
        weather_api_key="test-weather-key",
        google_api_key=None,
        openweather_base_url="https://weather.test/data/2.5",
        request_timeout_seconds=1.0,
        advisory_timeout_seconds=1.0,
    )
