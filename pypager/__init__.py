from pypager.core import (
    OffsetPage,
    CursorPage,
    Cursor,
    NullableItem,
    filter_present,
    Endpoint,
    EndpointDescriptor,
    Client,
    RequestCapability,
    AggregationPolicy,
    Aggregator,
    get_default_aggregator,
    set_default_aggregator,
    connect,
    disconnect,
    get_client,
)
from pypager.lifecycle import (
    enable_tracing,
    disable_tracing,
    FetchEvent,
    add_listener,
)
from pypager.utils import (
    PypagerError,
    NoRemainingPages,
    NotConnected,
    MissingEndpoint,
    RequestFailed,
    PAGE_MAX_LIMIT,
    PAGINATION_INTERVAL,
)

__all__ = [
    # Pages
    "OffsetPage",
    "CursorPage",
    "Cursor",
    "NullableItem",
    "filter_present",
    "Endpoint",
    "EndpointDescriptor",
    # Client
    "Client",
    "RequestCapability",
    "connect",
    "disconnect",
    "get_client",
    # Aggregation
    "AggregationPolicy",
    "Aggregator",
    "get_default_aggregator",
    "set_default_aggregator",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "FetchEvent",
    "add_listener",
    # Utils
    "PypagerError",
    "NoRemainingPages",
    "NotConnected",
    "MissingEndpoint",
    "RequestFailed",
    "PAGE_MAX_LIMIT",
    "PAGINATION_INTERVAL",
]
