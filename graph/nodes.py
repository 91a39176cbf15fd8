"""
LangGraph nodes for the background fetch: LocateNode, WeatherNode, PresentNode.
Each node has a single responsibility. A WeatherError is turned into a failure
FetchResult with user-facing guidance, and routing then ends the graph.
"""
import time
from typing import Any

import structlog

from graph.state import FetchState
from tools.base import FetchResult, parse_snapshot
from tools.conditions import classify
from tools.errors import CredentialMissing, RelayUnreachable, WeatherError
from tools.formatter import format_weather

log = structlog.get_logger()

CREDENTIAL_MISSING_MESSAGE = (
    "API Key Missing: Please set OPENWEATHERMAP_API_KEY environment variable.\n\n"
    "For packaged apps, you can:\n"
    "1. Create a .env file in the app's directory\n"
    "2. Or set it as a system environment variable\n"
    "3. Or run: export OPENWEATHERMAP_API_KEY='your-key' before launching"
)


def user_message(err: WeatherError) -> str:
    """Guidance text; remediation differs for each of the three cases."""
    if isinstance(err, CredentialMissing):
        return CREDENTIAL_MISSING_MESSAGE
    if isinstance(err, RelayUnreachable):
        return (
            f"Weather server unreachable: {err.message}\n\n"
            "Start the relay with `python -m app.main` (or set WEATHER_PROXY_URL) and relaunch."
        )
    return f"Error fetching weather data: {err.message}"


def _fail(node: str, err: WeatherError, start: float) -> dict[str, Any]:
    duration = time.perf_counter() - start
    log.warning(node, error_type=type(err).__name__, error=err.message[:200], duration_sec=round(duration, 3))
    return {"result": FetchResult.failure(user_message(err), type(err).__name__)}


def locate_node(state: FetchState) -> dict[str, Any]:
    """LocateNode: IP geolocation of the caller (bounded by geoip_timeout)."""
    from tools.weather_api import get_user_location

    start = time.perf_counter()
    try:
        location = get_user_location()
    except WeatherError as e:
        return _fail("locate_node", e, start)
    duration = time.perf_counter() - start
    log.info("locate_node", city=location.city, country_code=location.country_code, duration_sec=round(duration, 3))
    return {"location": location}


def weather_node(state: FetchState) -> dict[str, Any]:
    """
    WeatherNode: gets the onecall payload for the located city, either through
    the relay (default) or straight from the provider when source is "direct".
    """
    from tools.relay_client import fetch_via_relay
    from tools.weather_api import get_weather_impl

    location = state["location"]
    source = state.get("source") or "relay"
    start = time.perf_counter()
    try:
        if source == "direct":
            response = get_weather_impl(location.city, location.country_code)
        else:
            response = fetch_via_relay(location)
    except WeatherError as e:
        return _fail("weather_node", e, start)
    duration = time.perf_counter() - start
    log.info("weather_node", source=source, city=response.city, duration_sec=round(duration, 3))
    return {
        "weather_data": response.weather_data,
        "daily_description": response.daily_weather_description,
        "city": response.city,
    }


def present_node(state: FetchState) -> dict[str, Any]:
    """PresentNode: format the payload and classify today's description (no I/O)."""
    start = time.perf_counter()
    try:
        snapshot = parse_snapshot(state.get("weather_data"))
        summary, short_description = format_weather(snapshot)
    except WeatherError as e:
        return _fail("present_node", e, start)
    description = state.get("daily_description") or ""
    category = classify(description)
    log.info("present_node", category=category.value, duration_sec=round(time.perf_counter() - start, 3))
    return {
        "result": FetchResult(
            summary_text=summary,
            short_description=short_description,
            location_label=state.get("city"),
            category=category,
        )
    }
