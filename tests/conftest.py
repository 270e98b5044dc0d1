from __future__ import annotations

import threading
import time
from pathlib import Path
from typing import Any, Dict, Optional

import pytest
import requests

from launchboard.config import Settings
from launchboard.fetch import Aggregator

BASE = "http://launches.test/v3"
PAST_URL = f"{BASE}/launches/past"
UPCOMING_URL = f"{BASE}/launches/upcoming"


class FakeResponse:
    def __init__(self, body: Any = None, status_code: int = 200, text: Optional[str] = None):
        self._body = body
        self.status_code = status_code
        self._text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self._text, 0)
        return self._body


class FakeSession:
    """Stand-in for requests.Session keyed by URL."""

    def __init__(self, routes: Dict[str, Any], delays: Optional[Dict[str, float]] = None,
                 gate: Optional[threading.Event] = None, barrier: Optional[threading.Barrier] = None):
        self.routes = routes
        self.delays = delays or {}
        self.gate = gate
        self.barrier = barrier
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append(url)
        if self.gate is not None:
            self.gate.wait(5)
        if self.barrier is not None:
            # raises BrokenBarrierError unless the other GET is in flight too
            self.barrier.wait()
        time.sleep(self.delays.get(url, 0))
        answer = self.routes[url]
        if isinstance(answer, Exception):
            raise answer
        return answer


def make_launch(flight_number: int, mission_name: str = "Mission", rocket_name: str = "Falcon 9",
                upcoming: bool = False, **extra) -> Dict[str, Any]:
    rec = {
        "flight_number": flight_number,
        "mission_name": mission_name,
        "upcoming": upcoming,
        "launch_date_local": "2018-02-06T15:45:00-05:00",
        "launch_success": None if upcoming else True,
        "rocket": {"rocket_name": rocket_name, "second_stage": {"payloads": [{"payload_mass_kg": 1000}]}},
        "launch_site": {"site_name_long": "Kennedy Space Center Historic Launch Complex 39A"},
        "links": {"video_link": None, "wikipedia": None},
        "details": None,
    }
    rec.update(extra)
    return rec


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(base_url=BASE, timeout=1.0, log_dir=tmp_path / "logs")


@pytest.fixture
def make_aggregator(settings):
    def _make(past: Any, upcoming: Any, **kwargs) -> Aggregator:
        def _wrap(x):
            if isinstance(x, (FakeResponse, Exception)):
                return x
            return FakeResponse(x)

        session = FakeSession({PAST_URL: _wrap(past), UPCOMING_URL: _wrap(upcoming)}, **kwargs)
        return Aggregator(settings, session=session)

    return _make
