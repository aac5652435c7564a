"""One-shot asynchronous fetches that the render loop polls for completion.

A fetch runs as an asyncio task on the host's event loop. The caller never
awaits it: each render pass calls ``poll()``, which hands back the outcome
exactly once and ``None`` at every other time. Retries are the caller's job.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, Union

import httpx

_log = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_OK = 200
STATUS_UNAUTHORIZED = 401


class FetchError(Exception):
    """Base error for the fetch layer."""


class DecodeError(FetchError):
    """Response body could not be decoded into the expected type."""


class FetchInFlightError(FetchError):
    """A fetch was spawned while the previous handle was still unconsumed."""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str


@dataclass(frozen=True)
class AuthRequired:
    """The session credential was rejected (HTTP 401)."""


FetchOutcome = Union[Success[T], Failure, AuthRequired]

Decoder = Callable[[httpx.Response], T]


class FetchState(Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"


@dataclass(frozen=True)
class FetchRequest:
    """A fully-formed request.

    ``credentials=True`` sends the shared client's cookie jar, which is how
    the backend's session travels.
    """

    url: str
    method: str = "GET"
    credentials: bool = True


def decode_json(response: httpx.Response) -> Any:
    try:
        return json.loads(response.text)
    except ValueError as exc:
        raise DecodeError(f"Invalid JSON response: {exc}") from exc


def decode_text(response: httpx.Response) -> str:
    """Decode a plain text or markdown body, rejecting bytes the charset can't hold."""
    try:
        return response.content.decode(response.encoding or "utf-8")
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"Response is not valid text: {exc}") from exc


class FetchHandle(Generic[T]):
    """Completion token for a single spawned fetch.

    The outcome is handed out once; after that ``poll()`` returns ``None``
    again and the handle should be dropped.
    """

    def __init__(self, task: asyncio.Task[FetchOutcome[T]]) -> None:
        self._task = task
        self._consumed = False

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def consumed(self) -> bool:
        return self._consumed

    def poll(self) -> FetchOutcome[T] | None:
        """Return the terminal outcome once, else ``None``. Never blocks."""
        if self._consumed or not self._task.done():
            return None
        self._consumed = True
        if self._task.cancelled():
            return Failure("Request cancelled")
        return self._task.result()

    async def join(self) -> None:
        """Wait for the request to finish without consuming its outcome."""
        await asyncio.wait({self._task})

    def cancel(self) -> None:
        self._consumed = True
        self._task.cancel()


class RemoteResourceFetcher:
    """Owns at most one outstanding fetch against a shared ``httpx.AsyncClient``.

    Args:
        client: Client whose cookie jar carries the session.
        on_complete: Called once when a spawned request finishes, so that a
            host loop which only re-renders on events notices the result.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._client = client
        self._on_complete = on_complete
        self._handle: FetchHandle[Any] | None = None

    @property
    def state(self) -> FetchState:
        if self._handle is None:
            return FetchState.IDLE
        if self._handle.done:
            return FetchState.COMPLETED
        return FetchState.IN_FLIGHT

    @property
    def in_flight(self) -> bool:
        return self._handle is not None

    def spawn(self, request: FetchRequest, decode: Decoder[T]) -> FetchHandle[T]:
        """Schedule ``request`` on the running loop and return immediately."""
        if self._handle is not None:
            raise FetchInFlightError(
                f"Fetch already outstanding; cannot start {request.method} {request.url}"
            )
        _log.debug("Spawning %s %s", request.method, request.url)
        task = asyncio.get_running_loop().create_task(self._run(request, decode))
        if self._on_complete is not None:
            task.add_done_callback(self._notify)
        self._handle = FetchHandle(task)
        return self._handle

    def poll(self) -> FetchOutcome[Any] | None:
        if self._handle is None:
            return None
        outcome = self._handle.poll()
        if outcome is not None:
            self._handle = None
        return outcome

    def discard(self) -> None:
        """Abandon the outstanding fetch; its result is dropped."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None

    def _notify(self, task: asyncio.Task[Any]) -> None:
        if not task.cancelled():
            self._on_complete()

    async def _run(self, request: FetchRequest, decode: Decoder[T]) -> FetchOutcome[T]:
        try:
            response = await self._send(request)
        except httpx.HTTPError as exc:
            _log.error("Request to %s failed: %s", request.url, exc)
            return Failure(str(exc) or type(exc).__name__)
        return self._map_response(response, decode)

    async def _send(self, request: FetchRequest) -> httpx.Response:
        if request.credentials:
            return await self._client.request(request.method, request.url)
        # Rebuilt without the Cookie header so the session jar stays out of it.
        built = self._client.build_request(request.method, request.url)
        built.headers.pop("Cookie", None)
        return await self._client.send(built)

    def _map_response(
        self, response: httpx.Response, decode: Decoder[T]
    ) -> FetchOutcome[T]:
        if response.status_code == STATUS_OK:
            try:
                return Success(decode(response))
            except DecodeError as exc:
                _log.error("Could not decode response from %s: %s", response.url, exc)
                return Failure(str(exc))

        if response.status_code == STATUS_UNAUTHORIZED:
            _log.warning("Auth Error: %r", response.text)
            return AuthRequired()

        _log.error("Response %s: %r", response.status_code, response.text)
        return Failure(response.text or f"HTTP {response.status_code}")
