"""
Weather formatter: WeatherSnapshot -> multi-line summary for display plus the
short capitalized description of today's weather.
"""
import math

from tools.base import DailyForecast, WeatherSnapshot
from tools.errors import MalformedPayload

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def degrees_to_cardinal(degrees: float) -> str:
    """16-point compass direction; 348.75 and above wraps back to N."""
    index = math.floor((degrees + 11.25) / 22.5) % 16
    return COMPASS_POINTS[index]


def precip_percent(pop: float) -> int:
    """Clamp pop into [0, 1] and return a whole percentage (half rounds up)."""
    clamped = min(max(pop, 0.0), 1.0)
    return int(math.floor(clamped * 100 + 0.5))


def capitalize_first(text: str) -> str:
    """Upper-case only the first character; 'light snow' -> 'Light snow'."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def _precip_label(day: DailyForecast | None) -> str:
    if day is not None and day.weather and "snow" in day.weather[0].description.lower():
        return "Snow"
    return "Rain"


def format_weather(snapshot: WeatherSnapshot) -> tuple[str, str]:
    """Return (summary_text, short_description). Raises MalformedPayload on missing days/conditions."""
    if not snapshot.daily:
        raise MalformedPayload("Weather data has no daily forecast.")
    current = snapshot.current
    today = snapshot.daily[0]
    tomorrow = snapshot.daily[1] if len(snapshot.daily) > 1 else None
    if not current.weather or not today.weather:
        raise MalformedPayload("Weather data has no condition description.")

    chance_tomorrow = precip_percent(tomorrow.pop) if tomorrow is not None else 0

    lines = [
        f"Summary: {today.summary}",
        f"Current weather: {current.weather[0].description}",
        f"Temperature: {current.temp:.1f}°F (Feels like {current.feels_like:.1f}°F)",
        f"High: {today.temp.max:.1f}°F",
        f"Low: {today.temp.min:.1f}°F",
        f"Humidity: {current.humidity}%",
        f"Wind: {current.wind_speed:.1f} mph {degrees_to_cardinal(current.wind_deg)}",
        f"Chance of {_precip_label(today)} Today: {precip_percent(today.pop)}%",
        f"Chance of {_precip_label(tomorrow)} Tomorrow: {chance_tomorrow}%",
    ]
    return "\n".join(lines), capitalize_first(today.weather[0].description)
