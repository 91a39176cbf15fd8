"""
FastAPI relay: hides the OpenWeatherMap key and composes geocoding + onecall into one response.
Logs are structured (request_id, city, duration); errors are always JSON {"error": ...}.
"""
import logging
import os
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from app.config import Settings, get_settings
from tools.errors import CredentialMissing, WeatherError
from tools.weather_api import get_weather_impl

log = logging.getLogger(__name__)
logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")))

logging.getLogger("httpx").setLevel(logging.WARNING)

HEALTH_TEXT = "Weather Proxy Server is running! Use POST /api/weather to get weather data."


def require_api_key(settings: Settings) -> str:
    if not settings.openweathermap_api_key:
        raise CredentialMissing("OPENWEATHERMAP_API_KEY must be set in the environment or .env file")
    return settings.openweathermap_api_key


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Refuse to start without a provider key."""
    require_api_key(get_settings())
    log.info("relay_start", extra={"api_key_loaded": True})
    yield


app = FastAPI(title="Weather Alerts Relay", lifespan=lifespan)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


class WeatherRequest(BaseModel):
    city: str = Field(..., min_length=1, max_length=200)
    country_code: str = Field(..., min_length=1, max_length=10)


class WeatherResponse(BaseModel):
    weather_data: dict[str, Any]
    daily_weather_description: str
    city: str


def api_key_dependency(settings: Settings = Depends(get_settings)) -> str:
    return require_api_key(settings)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = rid
    response = await call_next(request)
    response.headers["x-request-id"] = rid
    return response


@app.exception_handler(WeatherError)
async def weather_error_handler(request: Request, exc: WeatherError):
    request_id = getattr(request.state, "request_id", None)
    log.warning(
        "relay_error",
        extra={"request_id": request_id, "error_type": type(exc).__name__, "error": exc.message[:200]},
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid request body")
    detail = f"Invalid request body: {where}: {msg}" if where else f"Invalid request body: {msg}"
    return JSONResponse(status_code=400, content={"error": detail})


@app.get("/", response_class=PlainTextResponse)
async def health():
    """Plain-text health check."""
    return HEALTH_TEXT


@app.post("/api/weather", response_model=WeatherResponse)
def weather(req: WeatherRequest, request: Request, api_key: str = Depends(api_key_dependency)):
    """Geocode, fetch onecall, and pass the weather object through untouched."""
    request_id = getattr(request.state, "request_id", str(uuid.uuid4()))
    start = time.perf_counter()
    log.info("weather_start", extra={"request_id": request_id, "city": req.city, "country_code": req.country_code})
    result = get_weather_impl(req.city, req.country_code, api_key=api_key)
    duration = time.perf_counter() - start
    log.info("weather_done", extra={"request_id": request_id, "duration_sec": round(duration, 3)})
    return WeatherResponse(
        weather_data=result.weather_data,
        daily_weather_description=result.daily_weather_description,
        city=result.city,
    )


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.relay_host, port=settings.relay_port)
