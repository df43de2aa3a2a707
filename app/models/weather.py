"""Pydantic models for the weather dashboard and its AI advisory."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IconCategory(str, Enum):
    """Small fixed icon taxonomy used by the presentation layer."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    OTHER = "Other"


class CurrentConditions(BaseModel):
    """Current weather at the requested location."""

    model_config = ConfigDict(frozen=True)

    location_name: str
    temperature_celsius: float
    condition_text: str
    humidity_percent: int
    wind_speed: float
    precipitation_mm: float = 0.0
    icon_category: IconCategory


class ForecastEntry(BaseModel):
    """One forecast sample (3-hour step of the provider's forecast)."""

    model_config = ConfigDict(frozen=True)

    day_label: str
    temperature_celsius: float
    condition_text: str
    icon_category: IconCategory


class WeatherSnapshot(BaseModel):
    """Current conditions plus the chronological forecast. Rebuilt on every fetch."""

    model_config = ConfigDict(frozen=True)

    current: CurrentConditions
    forecast: List[ForecastEntry] = Field(default_factory=list)


class RawWeather(BaseModel):
    """The two untouched provider payloads of one fetch."""

    current: Dict[str, Any]
    forecast: Dict[str, Any]


# --- Advisory models ---
# The generative backend answers in camelCase JSON; both spellings are accepted.


class AdvisoryItem(BaseModel):
    """Guidance for one crop at its growth stage."""

    crop: str
    stage: str
    advice: str


class SoilMoistureItem(BaseModel):
    """Estimated soil moisture of a field."""

    model_config = ConfigDict(populate_by_name=True)

    field: str
    crop: str
    moisture_percent: float = Field(alias="moisture")

    @field_validator("moisture_percent")
    @classmethod
    def clamp_percent(cls, value: float) -> float:
        """Keeps the value inside 0-100 so progress bars stay drawable."""
        return min(max(value, 0.0), 100.0)


class IrrigationRecommendation(BaseModel):
    """Irrigation advice for a field."""

    field: str
    crop: str
    advice: str


class IrrigationPlan(BaseModel):
    """Soil moisture status together with irrigation recommendations."""

    model_config = ConfigDict(populate_by_name=True)

    soil_moisture: List[SoilMoistureItem] = Field(
        default_factory=list, alias="soilMoisture"
    )
    recommendations: List[IrrigationRecommendation] = Field(default_factory=list)


class WeatherAdvisory(BaseModel):
    """Structured advisory produced once per weather snapshot."""

    advisory: List[AdvisoryItem]
    irrigation: IrrigationPlan


class DashboardData(BaseModel):
    """Result of one full fetch -> normalize -> enrich cycle."""

    snapshot: WeatherSnapshot
    advisory: Optional[WeatherAdvisory] = None


class DashboardResponse(BaseModel):
    """API response for the dashboard endpoint."""

    success: bool
    location: str
    data: Optional[DashboardData] = None
    message: str
