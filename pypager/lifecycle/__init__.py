from pypager.lifecycle.observability import (
    enable_tracing,
    disable_tracing,
    FetchEvent,
    FetchRecord,
    add_listener,
    remove_listener,
    track_fetch,
)

__all__ = [
    "enable_tracing",
    "disable_tracing",
    "FetchEvent",
    "FetchRecord",
    "add_listener",
    "remove_listener",
    "track_fetch",
]
