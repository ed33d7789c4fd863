import pytest
import requests

from services.astrology_client import AstrologyClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else str(body)

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Stands in for requests.Session; routes are keyed by URL path suffix."""

    def __init__(self, routes=None, default=None):
        self.routes = routes or {}
        self.default = default
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        for suffix, outcome in self.routes.items():
            if url.endswith(suffix):
                break
        else:
            outcome = self.default
        if outcome is None:
            raise requests.ConnectionError("connection refused")
        if isinstance(outcome, Exception):
            raise outcome
        if callable(outcome):
            return outcome()
        return outcome

    def close(self):
        pass


@pytest.fixture
def make_client():
    def _make(routes=None, default=None, timeout=1.0, max_workers=21):
        session = FakeSession(routes, default)
        client = AstrologyClient(
            base_url="https://astro.test",
            api_key="secret",
            timeout=timeout,
            session=session,
            max_workers=max_workers,
        )
        return client, session

    return _make


@pytest.fixture
def payload():
    return {
        "year": 2024,
        "month": 4,
        "date": 15,
        "hours": 6,
        "minutes": 0,
        "seconds": 0,
        "latitude": 28.6,
        "longitude": 77.2,
        "timezone": 5.5,
        "config": {"observation_point": "topocentric", "ayanamsha": "lahiri"},
    }


@pytest.fixture
def respond():
    return FakeResponse
