"""Pytest config: PYTHONPATH, env, and a onecall payload factory for tests."""
import os
import sys
from pathlib import Path

import pytest

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.environ.setdefault("OPENWEATHERMAP_API_KEY", "test-key")
os.environ.setdefault("WEATHER_PROXY_URL", "http://relay.test")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are lru_cached; each test sees the env as it is now."""
    from app.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_onecall():
    """Build a onecall-shaped dict. Pass daily=[...] to replace the forecast days."""
    def _make(daily=None, **current_overrides):
        current = {
            "temp": 31.4,
            "feels_like": 25.0,
            "humidity": 80,
            "wind_speed": 5.7,
            "wind_deg": 200,
            "weather": [{"description": "light snow"}],
        }
        current.update(current_overrides)
        if daily is None:
            daily = [
                {
                    "pop": 0.42,
                    "summary": "Expect a day of light snow",
                    "temp": {"min": 28.9, "max": 34.2},
                    "weather": [{"description": "light snow"}],
                },
                {
                    "pop": 0.1,
                    "summary": "Clearing up",
                    "temp": {"min": 25.0, "max": 38.0},
                    "weather": [{"description": "clear sky"}],
                },
            ]
        return {"lat": 48.85, "lon": 2.35, "timezone": "Europe/Paris", "current": current, "daily": daily}
    return _make
