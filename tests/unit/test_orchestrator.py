"""
Unit tests for FetchOrchestrator: single flight under concurrent polls, only
valid shared states observed, result hand-off, and error conversion.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

from graph.orchestrator import FetchOrchestrator, WeatherView
from tools.base import FetchResult
from tools.conditions import ConditionCategory
from tools.errors import RelayUnreachable

OK = FetchResult(
    summary_text="Summary: fine",
    short_description="Clear sky",
    location_label="Paris",
    category=ConditionCategory.CLEAR,
)


def _blocking_pipeline(release: threading.Event, calls: list, result=OK):
    def pipeline():
        calls.append(threading.current_thread().name)
        release.wait(5)
        return result
    return pipeline


def _valid(state) -> bool:
    fetching = state.in_flight and state.pending_result is None and not state.displayed
    published = not state.in_flight and state.pending_result is not None and not state.displayed
    consumed = not state.in_flight and state.pending_result is None and state.displayed
    return fetching or published or consumed


def test_initial_view_is_empty():
    assert WeatherView().has_data is False


def test_thousand_concurrent_polls_launch_one_fetch():
    release, calls = threading.Event(), []
    orch = FetchOrchestrator(pipeline=_blocking_pipeline(release, calls))

    with ThreadPoolExecutor(max_workers=32) as ex:
        views = list(ex.map(lambda _: orch.poll(), range(1000)))

    assert all(not v.has_data for v in views)
    assert orch.snapshot().in_flight is True
    release.set()
    assert orch.wait(5)
    assert len(calls) == 1
    assert calls[0] == "weather-fetch"


def test_result_consumed_once_and_no_refetch():
    release, calls = threading.Event(), []
    release.set()
    orch = FetchOrchestrator(pipeline=_blocking_pipeline(release, calls))

    assert orch.poll().has_data is False
    assert orch.wait(5)
    assert orch.snapshot().pending_result is OK

    view = orch.poll()
    assert view.summary_text == "Summary: fine"
    assert view.location_label == "Paris"
    assert orch.snapshot().pending_result is None

    for _ in range(10):
        assert orch.poll() == view
    assert len(calls) == 1


def test_pollers_only_observe_valid_states():
    release, calls = threading.Event(), []
    orch = FetchOrchestrator(pipeline=_blocking_pipeline(release, calls))
    stop = threading.Event()
    seen = []

    def poller():
        while not stop.is_set():
            orch.poll()
            seen.append(orch.snapshot())

    threads = [threading.Thread(target=poller) for _ in range(4)]
    for t in threads:
        t.start()
    time.sleep(0.05)
    release.set()
    assert orch.wait(5)
    time.sleep(0.05)
    stop.set()
    for t in threads:
        t.join(5)

    assert seen
    assert all(_valid(s) for s in seen)
    assert any(s.in_flight for s in seen)
    assert seen[-1].displayed
    assert len(calls) == 1


def test_weather_error_becomes_failure_view():
    def pipeline():
        raise RelayUnreachable("connection refused")

    orch = FetchOrchestrator(pipeline=pipeline)
    orch.poll()
    assert orch.wait(5)
    view = orch.poll()
    assert view.has_data
    assert "python -m app.main" in view.summary_text
    assert view.category is ConditionCategory.CLEAR


def test_unexpected_error_does_not_escape():
    def pipeline():
        raise RuntimeError("boom")

    orch = FetchOrchestrator(pipeline=pipeline)
    orch.poll()
    assert orch.wait(5)
    view = orch.poll()
    assert view.summary_text == "Error fetching weather data: boom"


def test_default_pipeline_uses_configured_source():
    with patch("graph.graph.run_pipeline", return_value=OK) as run:
        orch = FetchOrchestrator()
        orch.poll()
        assert orch.wait(5)
    run.assert_called_once_with("relay")
    assert orch.poll().short_description == "Clear sky"
