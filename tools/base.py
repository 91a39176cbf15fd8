"""Shared types for the relay, the pipeline and the render loop. Upstream payloads use pydantic."""

from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from tools.conditions import ConditionCategory
from tools.errors import MalformedPayload


@dataclass(frozen=True)
class LocationQuery:
    """Where the caller is, as reported by IP geolocation."""
    city: str
    country_code: str


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass
class RelayResponse:
    """Relay result: raw onecall payload plus the two convenience fields."""
    weather_data: dict[str, Any]
    daily_weather_description: str
    city: str


@dataclass(frozen=True)
class FetchResult:
    """
    Outcome of one fetch cycle. On failure summary_text holds the user-facing
    message and error names the error kind (e.g. "RelayUnreachable").
    """
    summary_text: str
    short_description: Optional[str] = None
    location_label: Optional[str] = None
    category: ConditionCategory = ConditionCategory.CLEAR
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, message: str, error: str) -> "FetchResult":
        return cls(summary_text=message, error=error)


class WeatherCondition(BaseModel):
    description: str


class CurrentConditions(BaseModel):
    temp: float
    feels_like: float
    humidity: int
    wind_speed: float
    wind_deg: float
    weather: list[WeatherCondition]


class DailyTemp(BaseModel):
    min: float
    max: float


class DailyForecast(BaseModel):
    pop: float = Field(default=0.0, description="Probability of precipitation, nominally 0..1")
    summary: str = ""
    temp: DailyTemp
    weather: list[WeatherCondition]


class WeatherSnapshot(BaseModel):
    """The parts of a onecall response the formatter reads. Extra fields are ignored."""
    current: CurrentConditions
    daily: list[DailyForecast]


def parse_snapshot(data: Any) -> WeatherSnapshot:
    """Validate a raw onecall object; shape mismatches become MalformedPayload."""
    try:
        return WeatherSnapshot.model_validate(data)
    except ValidationError as e:
        raise MalformedPayload(f"Failed to parse weather data: {e.error_count()} invalid field(s)") from e
