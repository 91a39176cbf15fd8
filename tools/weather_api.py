"""
Weather tool: HTTP client for OpenWeatherMap and IP geolocation.
Geocodes city,country via /geo/1.0/direct, then reads current + daily via /data/3.0/onecall.
No retries: each failure is raised as a typed WeatherError for the caller to map.
"""
import logging
from typing import Any, Optional

import httpx

from app.config import get_settings
from tools.base import Coordinates, LocationQuery, RelayResponse
from tools.errors import (
    CredentialMissing,
    LocationNotFound,
    MalformedPayload,
    UpstreamUnavailable,
)

logger = logging.getLogger(__name__)

GEOCODE_PATH = "/geo/1.0/direct"
ONECALL_PATH = "/data/3.0/onecall"
ONECALL_EXCLUDE = "minutely,hourly,alerts"
DEFAULT_CITY = "Unknown City"
DEFAULT_COUNTRY = "US"


def _http_get(url: str, params: Optional[dict], timeout: float, what: str) -> Any:
    """HTTP GET returning parsed JSON. `what` names the resource in error messages."""
    try:
        with httpx.Client(timeout=timeout) as client:
            r = client.get(url, params=params)
    except httpx.TimeoutException as e:
        logger.warning("Weather API timeout: %s %s", url, e)
        raise UpstreamUnavailable(f"Failed to get {what}: request timed out.") from e
    except httpx.RequestError as e:
        logger.warning("Weather API request error: %s %s", url, e)
        raise UpstreamUnavailable(f"Failed to get {what}: {e}") from e

    if r.status_code != 200:
        try:
            msg = r.json().get("message", r.text)
        except Exception:
            msg = r.text
        logger.warning("Weather API %s error %s: %s", url, r.status_code, msg)
        raise UpstreamUnavailable(f"Failed to get {what}: upstream returned {r.status_code}.")

    try:
        return r.json()
    except ValueError as e:
        raise MalformedPayload(f"Failed to parse {what}: {e}") from e


def _require_key(api_key: Optional[str]) -> str:
    key = api_key or get_settings().openweathermap_api_key
    if not key:
        raise CredentialMissing("OPENWEATHERMAP_API_KEY is not set.")
    return key


def geocode(city: str, country_code: str, api_key: str) -> Coordinates:
    """Resolve city,country to coordinates using the first geocoding hit only."""
    settings = get_settings()
    params = {"q": f"{city},{country_code}", "limit": 1, "appid": api_key}
    data = _http_get(
        settings.openweather_geo_base + GEOCODE_PATH, params, settings.upstream_timeout, "coordinates"
    )
    if not isinstance(data, list):
        raise MalformedPayload("Failed to parse coordinates: expected a list.")
    if not data:
        raise LocationNotFound("Unable to get location coordinates.")
    first = data[0]
    try:
        return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedPayload(f"Failed to parse coordinates: {e!r}") from e


def fetch_onecall(coords: Coordinates, api_key: str) -> dict[str, Any]:
    """Current + daily weather in imperial units; returned unmodified."""
    settings = get_settings()
    params = {
        "lat": coords.latitude,
        "lon": coords.longitude,
        "units": "imperial",
        "exclude": ONECALL_EXCLUDE,
        "appid": api_key,
    }
    data = _http_get(
        settings.openweather_base + ONECALL_PATH, params, settings.upstream_timeout, "weather data"
    )
    if not isinstance(data, dict):
        raise MalformedPayload("Failed to parse weather data: expected an object.")
    return data


def daily_description(weather_data: dict[str, Any]) -> str:
    """daily[0].weather[0].description, or "Unknown" when any level is missing."""
    try:
        desc = weather_data["daily"][0]["weather"][0]["description"]
    except (KeyError, IndexError, TypeError):
        return "Unknown"
    return desc if isinstance(desc, str) else "Unknown"


def get_weather_impl(
    city: str,
    country_code: str,
    api_key: Optional[str] = None,
) -> RelayResponse:
    """
    Geocode then fetch onecall weather. Exactly two provider calls; the weather
    object is passed through as-is for the caller to format.
    """
    key = _require_key(api_key)
    coords = geocode(city, country_code, key)
    weather_data = fetch_onecall(coords, key)
    logger.info("Weather fetched for %s,%s (%.2f, %.2f)", city, country_code, coords.latitude, coords.longitude)
    return RelayResponse(
        weather_data=weather_data,
        daily_weather_description=daily_description(weather_data),
        city=city,
    )


def get_user_location(timeout: Optional[float] = None) -> LocationQuery:
    """IP-based location. Missing fields fall back to Unknown City / US."""
    settings = get_settings()
    data = _http_get(
        settings.geoip_url,
        None,
        timeout if timeout is not None else settings.geoip_timeout,
        "user location",
    )
    if not isinstance(data, dict):
        raise MalformedPayload("Failed to parse user location: expected an object.")
    return LocationQuery(
        city=data.get("city") or DEFAULT_CITY,
        country_code=data.get("countryCode") or DEFAULT_COUNTRY,
    )
