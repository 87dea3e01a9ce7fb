from __future__ import annotations

from typing import Any

import pytest
import pytest_asyncio
from pydantic import BaseModel

from pypager import AggregationPolicy, Aggregator, disable_tracing, set_default_aggregator
from pypager.core.connection import _clients, disconnect

BASE_URL = "https://api.example"


class Track(BaseModel):
    name: str


class FakeClient:
    """In-memory request capability that serves canned JSON bodies.

    Routes are keyed by the requested path followed by every non-limit
    query parameter, e.g. "/v1/tracks?offset=50" or "/me/recent&after=t1".
    A route whose value is an exception raises it instead.
    """

    def __init__(self, routes: dict[str, Any], log: list[tuple] | None = None) -> None:
        self.base_url = BASE_URL
        self.routes = routes
        self.requests: list[tuple[str, list[tuple[str, Any]]]] = []
        self.log = log if log is not None else []

    async def get(self, path: str, params=(), response_model=None):
        params = list(params)
        self.requests.append((path, params))
        self.log.append(("get", path))
        key = path + "".join(f"&{k}={v}" for k, v in params if k != "limit")
        body = self.routes[key]
        if isinstance(body, Exception):
            raise body
        return response_model.model_validate(body) if response_model else body


class RecordingSleep:
    """Stand-in for asyncio.sleep that records every requested delay."""

    def __init__(self, log: list[tuple]) -> None:
        self.log = log
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.log.append(("sleep", seconds))


def offset_payload(offset: int, names: list[str | None], *, total: int, limit: int = 2, next: str | None = None, previous: str | None = None) -> dict:
    return {
        "href": f"{BASE_URL}/v1/tracks?offset={offset}&limit={limit}",
        "limit": limit,
        "offset": offset,
        "total": total,
        "next": next,
        "previous": previous,
        "items": [None if n is None else {"name": n} for n in names],
    }


def cursor_payload(names: list[str | None], *, before: str | None = None, after: str | None = None, limit: int = 2, next: str | None = None, cursors: bool = True) -> dict:
    return {
        "href": f"{BASE_URL}/v1/me/recent?limit={limit}",
        "limit": limit,
        "next": next,
        "cursors": {"before": before, "after": after} if cursors else None,
        "total": None,
        "items": [None if n is None else {"name": n} for n in names],
    }


@pytest.fixture
def call_log() -> list[tuple]:
    return []


@pytest.fixture
def recording_sleep(call_log) -> RecordingSleep:
    return RecordingSleep(call_log)


@pytest.fixture
def aggregator(recording_sleep) -> Aggregator:
    return Aggregator(AggregationPolicy(interval=0.1, max_limit=50), sleep=recording_sleep)


@pytest_asyncio.fixture(autouse=True)
async def reset_state():
    """Reset tracing, the default aggregator and registered clients after each test."""
    yield
    disable_tracing()
    set_default_aggregator(None)
    for alias in list(_clients):
        await disconnect(alias)
