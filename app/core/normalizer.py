"""Maps raw OpenWeather payloads onto the dashboard's WeatherSnapshot."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.exceptions import MalformedResponseError
from app.models.weather import (
    CurrentConditions,
    ForecastEntry,
    IconCategory,
    WeatherSnapshot,
)

MAX_FORECAST_ENTRIES = 7

# Fixed en-US short weekday names, indexed by datetime.weekday()
WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_ICON_CATEGORIES = {
    "clear": IconCategory.CLEAR,
    "clouds": IconCategory.CLOUDS,
    "rain": IconCategory.RAIN,
}


def icon_category_for(condition: Optional[str]) -> IconCategory:
    """Map a provider condition keyword (e.g. "Clouds") to an icon category."""
    if not isinstance(condition, str):
        return IconCategory.OTHER
    return _ICON_CATEGORIES.get(condition.strip().lower(), IconCategory.OTHER)


def day_label(entry: Dict[str, Any]) -> str:
    """Short weekday name for a forecast sample."""
    dt_txt = entry.get("dt_txt")
    if dt_txt:
        moment = datetime.strptime(dt_txt, "%Y-%m-%d %H:%M:%S")
    elif entry.get("dt") is not None:
        moment = datetime.fromtimestamp(entry["dt"], tz=timezone.utc)
    else:
        return ""
    return WEEKDAY_LABELS[moment.weekday()]


def _primary_condition(payload: Dict[str, Any]) -> Dict[str, Any]:
    conditions = payload.get("weather") or []
    if not conditions:
        raise MalformedResponseError("Weather payload has no condition entry")
    return conditions[0]


def _precipitation(payload: Dict[str, Any]) -> float:
    rain = payload.get("rain") or {}
    return float(rain.get("1h") or 0)


def normalize_current(raw_current: Dict[str, Any]) -> CurrentConditions:
    """Build CurrentConditions from the /weather payload."""
    try:
        condition = _primary_condition(raw_current)
        return CurrentConditions(
            location_name=raw_current["name"],
            temperature_celsius=raw_current["main"]["temp"],
            condition_text=condition.get("description", ""),
            humidity_percent=raw_current["main"]["humidity"],
            wind_speed=raw_current["wind"]["speed"],
            precipitation_mm=_precipitation(raw_current),
            icon_category=icon_category_for(condition.get("main")),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise MalformedResponseError(
            f"Current weather payload is malformed: {e}"
        ) from e


def normalize_forecast_entry(entry: Dict[str, Any]) -> ForecastEntry:
    """Build one ForecastEntry from an item of the /forecast list."""
    try:
        condition = _primary_condition(entry)
        return ForecastEntry(
            day_label=day_label(entry),
            temperature_celsius=entry["main"]["temp"],
            condition_text=condition.get("description", ""),
            icon_category=icon_category_for(condition.get("main")),
        )
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise MalformedResponseError(f"Forecast entry is malformed: {e}") from e


def normalize(
    raw_current: Dict[str, Any], raw_forecast: Dict[str, Any]
) -> WeatherSnapshot:
    """
    Pure mapping of both provider payloads into a WeatherSnapshot.

    Only the first MAX_FORECAST_ENTRIES forecast samples are kept, in the
    order the provider returned them.
    """
    samples = raw_forecast.get("list") or []
    if not isinstance(samples, list):
        raise MalformedResponseError("Forecast payload 'list' is not a list")
    return WeatherSnapshot(
        current=normalize_current(raw_current),
        forecast=[
            normalize_forecast_entry(entry)
            for entry in samples[:MAX_FORECAST_ENTRIES]
        ],
    )
