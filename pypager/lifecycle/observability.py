"""Request tracing for Client.get.

Every traced request produces one FetchEvent, successful or not, which is
handed to registered listeners. Requests slower than the configured
threshold are logged, failures at DEBUG with their error, and an
OpenTelemetry span is recorded when the library is installed.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable

from pypager.utils.exceptions import RequestFailed
from pypager.utils.types import QueryParams

logger = logging.getLogger("pypager")

FetchListener = Callable[["FetchEvent"], Any]


@dataclass(frozen=True)
class FetchEvent:
    """One GET issued by a Client."""

    method: str
    path: str
    params: tuple[tuple[str, Any], ...] = ()
    status_code: int | None = None
    item_count: int | None = None
    duration_ms: float = 0.0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class FetchRecord:
    """Response details filled in by the caller while a request is in flight."""

    status_code: int | None = None
    item_count: int | None = None


@dataclass
class _Tracer:
    enabled: bool = False
    slow_request_ms: float = 1000.0
    listeners: list[FetchListener] = field(default_factory=list)


_tracer = _Tracer()


def enable_tracing(slow_request_ms: float = 1000.0) -> None:
    """Start emitting FetchEvents; warn about requests slower than slow_request_ms."""
    _tracer.enabled = True
    _tracer.slow_request_ms = slow_request_ms


def disable_tracing() -> None:
    """Stop tracing and drop all listeners."""
    _tracer.enabled = False
    _tracer.slow_request_ms = 1000.0
    _tracer.listeners.clear()


def add_listener(callback: FetchListener) -> None:
    _tracer.listeners.append(callback)


def remove_listener(callback: FetchListener) -> None:
    _tracer.listeners.remove(callback)


@asynccontextmanager
async def track_fetch(method: str, path: str, params: QueryParams = ()) -> AsyncIterator[FetchRecord]:
    """Time a request and emit its FetchEvent when the block exits.

    An exception leaving the block is recorded on the event and re-raised;
    a RequestFailed also contributes its status code.
    """
    record = FetchRecord()
    if not _tracer.enabled:
        yield record
        return

    start = time.perf_counter()
    error: str | None = None
    try:
        yield record
    except Exception as e:
        error = f"{type(e).__name__}: {e}"
        if isinstance(e, RequestFailed) and e.status_code is not None:
            record.status_code = e.status_code
        raise
    finally:
        _emit(
            FetchEvent(
                method=method,
                path=path,
                params=tuple((key, value) for key, value in params),
                status_code=record.status_code,
                item_count=record.item_count,
                duration_ms=(time.perf_counter() - start) * 1000,
                error=error,
            )
        )


def _emit(event: FetchEvent) -> None:
    if event.failed:
        logger.debug(f"{event.method} {event.path} failed after {event.duration_ms:.1f}ms: {event.error}")
    elif event.duration_ms > _tracer.slow_request_ms:
        logger.warning(
            "Slow request: %s %s took %.1fms (threshold: %.1fms)",
            event.method,
            event.path,
            event.duration_ms,
            _tracer.slow_request_ms,
        )

    for listener in _tracer.listeners:
        listener(event)

    _record_span(event)


def _record_span(event: FetchEvent) -> None:
    """Record the request as an OpenTelemetry span if the library is available."""
    try:
        from opentelemetry import trace
        from opentelemetry.trace import Status, StatusCode
    except ImportError:
        return

    tracer = trace.get_tracer("pypager")
    with tracer.start_as_current_span(f"{event.method} {event.path}") as span:
        span.set_attribute("http.request.method", event.method)
        span.set_attribute("url.path", event.path)
        if event.params:
            span.set_attribute("url.query", "&".join(f"{key}={value}" for key, value in event.params))
        if event.status_code is not None:
            span.set_attribute("http.response.status_code", event.status_code)
        if event.item_count is not None:
            span.set_attribute("pypager.item_count", event.item_count)
        span.set_attribute("pypager.duration_ms", event.duration_ms)
        if event.failed:
            span.set_status(Status(StatusCode.ERROR, event.error))
