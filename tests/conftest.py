"""Shared test fixtures for scoreboard tests."""

import asyncio
from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest

from scoreboard.services.config import ClientSettings
from scoreboard.services.scores import Score

BASE_URL = "http://scoreboard.test/"
REFRESH_PATH = "/api/auth/refresh"


def scores_path(challenge: str) -> str:
    return f"/api/game/scores/{challenge}"


async def settle(rounds: int = 20) -> None:
    """Give spawned fetch tasks and their done-callbacks a chance to run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class FakeBackend:
    """Scripted backend behind ``httpx.MockTransport``.

    Responses are queued per path and served in order; the last one keeps
    being served once the queue is down to it. Paths can be held so a
    request stays in flight until released.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responses: dict[str, list[tuple[int, dict[str, Any]]]] = {}
        self._holds: dict[str, asyncio.Event] = {}

    def queue(self, path: str, status: int, **kwargs: Any) -> None:
        self._responses.setdefault(path, []).append((status, kwargs))

    def hold(self, path: str) -> None:
        self._holds[path] = asyncio.Event()

    def release(self, path: str) -> None:
        self._holds.pop(path).set()

    def count(self, path: str, method: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if r.url.path == path and (method is None or r.method == method)
        )

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self._holds:
            await self._holds[path].wait()
        queued = self._responses.get(path)
        if not queued:
            return httpx.Response(404, text=f"no route for {path}")
        status, kwargs = queued.pop(0) if len(queued) > 1 else queued[0]
        return httpx.Response(status, **kwargs)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def client(backend: FakeBackend) -> AsyncGenerator[httpx.AsyncClient, None]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as c:
        yield c


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(backend_url=BASE_URL)


@pytest.fixture
def sample_scores() -> list[Score]:
    """Three runs from two players in two languages."""
    return [
        Score(name="alice", language="rust", time_ns=1_200_000, command="a.out"),
        Score(name="bob", language="python", time_ns=3_050_000, command="main.py"),
        Score(name="alice", language="rust", time_ns=900_000, command="fast.out"),
    ]


@pytest.fixture
def sample_payload(sample_scores: list[Score]) -> list[dict[str, Any]]:
    return [score.to_dict() for score in sample_scores]
