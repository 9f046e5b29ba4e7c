"""Root conftest for all tests.

Shared fixtures for building calendar days, a literal short-date formatter,
an isolated storage file and an API client backed by httpx.MockTransport.
"""

import json
from collections.abc import Callable
from datetime import date

import httpx
import pytest
from loguru import logger

from planner.calendar.range_selector import CalendarDay
from planner.config.settings import settings
from planner.integrations.api.client import PlannerAPIClient

API_URL = "http://planner.test"


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep loguru output out of the test report."""
    logger.remove()
    yield


@pytest.fixture
def day() -> Callable[[str], CalendarDay]:
    return CalendarDay.from_string


@pytest.fixture
def iso_formatter() -> Callable[[date], str]:
    """Locale-free formatter so labels can be asserted literally."""
    return lambda value: value.strftime("%d/%m")


@pytest.fixture
def storage_file(tmp_path, monkeypatch):
    path = tmp_path / "storage.json"
    monkeypatch.setattr(settings, "storage_path", str(path))
    return path


class RecordingHandler:
    """MockTransport handler answering from a route table and recording requests."""

    def __init__(self, routes: dict[tuple[str, str], httpx.Response]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not found"})
        return self.routes[key]

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def api_factory() -> Callable[[dict[tuple[str, str], httpx.Response]], tuple[PlannerAPIClient, RecordingHandler]]:
    def _build(routes: dict[tuple[str, str], httpx.Response]) -> tuple[PlannerAPIClient, RecordingHandler]:
        handler = RecordingHandler(routes)
        client = PlannerAPIClient(base_url=API_URL, timeout=1.0, transport=httpx.MockTransport(handler))
        return client, handler

    return _build
