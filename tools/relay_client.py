"""
Relay client: POSTs the caller's location to the relay's /api/weather and
returns its payload. The relay holds the provider key; this side holds none.
"""
import logging
from typing import Optional

import httpx

from app.config import get_settings
from tools.base import LocationQuery, RelayResponse
from tools.errors import MalformedPayload, RelayUnreachable, UpstreamUnavailable

logger = logging.getLogger(__name__)


def fetch_via_relay(
    location: LocationQuery,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> RelayResponse:
    settings = get_settings()
    base_url = (base_url or settings.weather_proxy_url).rstrip("/")
    timeout = timeout if timeout is not None else settings.relay_timeout
    body = {"city": location.city, "country_code": location.country_code}

    try:
        r = httpx.post(f"{base_url}/api/weather", json=body, timeout=timeout)
    except httpx.RequestError as e:
        logger.warning("Relay request error: %s %s", base_url, e)
        raise RelayUnreachable(
            f"Failed to connect to weather server at {base_url}: {e}. "
            "Make sure the proxy server is running."
        ) from e

    if r.status_code != 200:
        try:
            detail = r.json().get("error") or r.text
        except Exception:
            detail = r.text or "Unknown error"
        raise UpstreamUnavailable(f"Weather server error: {detail}")

    try:
        data = r.json()
        return RelayResponse(
            weather_data=data["weather_data"],
            daily_weather_description=data["daily_weather_description"],
            city=data["city"],
        )
    except (ValueError, KeyError, TypeError) as e:
        raise MalformedPayload(f"Failed to parse weather server response: {e!r}") from e
