"""
Load settings from .env. Never log or expose secret values.
All values come from environment variables (populated via .env file).
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Weather provider (required by the relay, and by the client in direct mode)
    openweathermap_api_key: Optional[str] = Field(default=None, description="OpenWeatherMap API key")
    openweather_geo_base: str = Field(default="http://api.openweathermap.org", description="Geocoding host")
    openweather_base: str = Field(default="https://api.openweathermap.org", description="One Call host")
    geoip_url: str = Field(default="http://ip-api.com/json/", description="IP geolocation endpoint")

    # Client
    weather_proxy_url: str = Field(default="http://localhost:3000", description="Relay base URL")
    weather_source: Literal["relay", "direct"] = Field(
        default="relay", description="Fetch through the relay or call the provider directly"
    )
    geoip_timeout: float = Field(default=5.0, description="IP geolocation timeout (s)")
    relay_timeout: float = Field(default=30.0, description="Relay request timeout (s)")
    frame_interval: float = Field(default=0.5, description="Seconds between render-loop polls")

    # Relay
    upstream_timeout: float = Field(default=10.0, description="Per-call provider timeout (s)")
    relay_host: str = Field(default="0.0.0.0", description="Relay bind host")
    relay_port: int = Field(default=3000, description="Relay port")

    # App
    log_level: str = Field(default="INFO", description="Log level")

    @property
    def has_api_key(self) -> bool:
        return bool(self.openweathermap_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
