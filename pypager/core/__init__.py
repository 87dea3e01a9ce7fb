from pypager.core.items import NullableItem, filter_present
from pypager.core.endpoint import Endpoint, EndpointDescriptor
from pypager.core.client import Client, RequestCapability, strip_base_url
from pypager.core.aggregator import (
    AggregationPolicy,
    Aggregator,
    Traversable,
    get_default_aggregator,
    set_default_aggregator,
)
from pypager.core.page import Cursor, CursorPage, OffsetPage
from pypager.core.connection import connect, disconnect, get_client

__all__ = [
    "NullableItem",
    "filter_present",
    "Endpoint",
    "EndpointDescriptor",
    "Client",
    "RequestCapability",
    "strip_base_url",
    "AggregationPolicy",
    "Aggregator",
    "Traversable",
    "get_default_aggregator",
    "set_default_aggregator",
    "Cursor",
    "CursorPage",
    "OffsetPage",
    "connect",
    "disconnect",
    "get_client",
]
