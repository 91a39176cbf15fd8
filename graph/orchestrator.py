"""
Fetch orchestrator: bridges the blocking fetch graph into a render loop that
polls every frame and must never block.

One lock guards the in-flight flag, the pending-result slot and the view.
poll() either consumes a published result or, when idle with nothing shown,
flips to in-flight and starts the worker in the same critical section. The
worker publishes its result and clears the flag in one critical section, so a
poller sees (in flight, no result), (idle, result) or (idle, consumed) only.
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

import structlog

from app.config import get_settings
from graph.nodes import user_message
from tools.base import FetchResult
from tools.conditions import ConditionCategory
from tools.errors import WeatherError

log = structlog.get_logger()


@dataclass(frozen=True)
class WeatherView:
    """What the render loop draws. Empty until the first result is applied."""
    summary_text: Optional[str] = None
    short_description: Optional[str] = None
    location_label: Optional[str] = None
    category: ConditionCategory = ConditionCategory.CLEAR

    @property
    def has_data(self) -> bool:
        return self.summary_text is not None

    @classmethod
    def from_result(cls, result: FetchResult) -> "WeatherView":
        return cls(
            summary_text=result.summary_text,
            short_description=result.short_description,
            location_label=result.location_label,
            category=result.category,
        )


@dataclass(frozen=True)
class OrchestratorState:
    in_flight: bool
    pending_result: Optional[FetchResult]
    displayed: bool


def _default_pipeline() -> FetchResult:
    from graph.graph import run_pipeline
    return run_pipeline(get_settings().weather_source)


class FetchOrchestrator:
    """Single-flight fetch with a one-slot mailbox shared with the render thread."""

    def __init__(self, pipeline: Optional[Callable[[], FetchResult]] = None) -> None:
        self._pipeline = pipeline or _default_pipeline
        self._lock = threading.Lock()
        self._in_flight = False
        self._pending: Optional[FetchResult] = None
        self._view = WeatherView()
        self._worker: Optional[threading.Thread] = None

    def poll(self) -> WeatherView:
        """Called every frame. Never performs I/O; holds the lock only briefly."""
        launched = False
        with self._lock:
            if self._pending is not None:
                result, self._pending = self._pending, None
                self._view = WeatherView.from_result(result)
            elif not self._in_flight and not self._view.has_data:
                self._in_flight = True
                self._worker = threading.Thread(target=self._run, name="weather-fetch", daemon=True)
                self._worker.start()
                launched = True
            view = self._view
        if launched:
            log.info("fetch_launched")
        return view

    def snapshot(self) -> OrchestratorState:
        with self._lock:
            return OrchestratorState(
                in_flight=self._in_flight,
                pending_result=self._pending,
                displayed=self._view.has_data,
            )

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the current worker (if any) finishes. For scripts and tests, not the render loop."""
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()

    def _run(self) -> None:
        start = time.perf_counter()
        try:
            result = self._pipeline()
        except WeatherError as e:
            result = FetchResult.failure(user_message(e), type(e).__name__)
        except Exception as e:
            # Anything escaping the graph still has to reach the screen as text.
            log.exception("fetch_pipeline_error")
            result = FetchResult.failure(f"Error fetching weather data: {e}", type(e).__name__)
        with self._lock:
            self._pending = result
            self._in_flight = False
        log.info("fetch_done", ok=result.ok, error=result.error, duration_sec=round(time.perf_counter() - start, 3))
