"""Shared fixtures: fake HTTP clients, a fake clock and sample RandomUser payloads."""

import asyncio
import itertools

import pytest

from randompeople.config import Settings
from randompeople.orchestrator import RequestOrchestrator


def make_person(n: int, nat: str = "US") -> dict:
    return {
        "gender": "female" if n % 2 else "male",
        "name": {"title": "Ms", "first": f"First{n}", "last": f"Last{n}"},
        "location": {"city": f"City{n}", "country": nat},
        "email": f"person{n}@example.com",
        "login": {"uuid": f"uuid-{nat}-{n}"},
        "phone": f"555-{n:04d}",
        "picture": {"medium": f"https://randomuser.me/api/portraits/med/{n}.jpg"},
        "nat": nat,
    }


def make_body(count: int = 12, nat: str = "US") -> dict:
    return {
        "results": [make_person(n, nat) for n in range(count)],
        "info": {"seed": "abc", "results": count, "page": 1, "version": "1.4"},
    }


class FakeClient:
    """
    HttpClient stand-in.

    Set `body` for the decoded JSON to return, or `error` to raise it.
    Set `gate` (an asyncio.Event) to hold the request until the test releases it.
    Every requested URL is kept in `calls`.
    """

    def __init__(self, name: str, body=None, error=None):
        self.name = name
        self.body = body if body is not None else make_body()
        self.error = error
        self.gate = None
        self.calls = []

    async def get(self, url: str) -> dict:
        self.calls.append(url)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.body


class FakeClock:
    """Each call moves time forward by `step` seconds."""

    def __init__(self, step: float = 0.25):
        self._ticks = itertools.count()
        self.step = step

    def __call__(self) -> float:
        return next(self._ticks) * self.step


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url="https://randomuser.test/api/", autoload=False)


@pytest.fixture
def client_a() -> FakeClient:
    return FakeClient("requests")


@pytest.fixture
def client_b() -> FakeClient:
    return FakeClient("urllib")


@pytest.fixture
def orchestrator(client_a, client_b, settings) -> RequestOrchestrator:
    return RequestOrchestrator(clients=[client_a, client_b], settings=settings, clock=FakeClock())


@pytest.fixture
def body_factory():
    return make_body


@pytest.fixture
def client_factory():
    return FakeClient


@pytest.fixture
def clock_factory():
    return FakeClock
