"""Asynchronous spawn-and-poll fetch primitive."""

from scoreboard.services.fetch.fetcher import (
    AuthRequired,
    DecodeError,
    Failure,
    FetchError,
    FetchHandle,
    FetchInFlightError,
    FetchOutcome,
    FetchRequest,
    FetchState,
    RemoteResourceFetcher,
    Success,
    decode_json,
    decode_text,
)

__all__ = [
    "AuthRequired",
    "DecodeError",
    "Failure",
    "FetchError",
    "FetchHandle",
    "FetchInFlightError",
    "FetchOutcome",
    "FetchRequest",
    "FetchState",
    "RemoteResourceFetcher",
    "Success",
    "decode_json",
    "decode_text",
]
