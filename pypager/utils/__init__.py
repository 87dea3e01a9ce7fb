from pypager.utils.exceptions import (
    PypagerError,
    NoRemainingPages,
    NotConnected,
    MissingEndpoint,
    RequestFailed,
)
from pypager.utils.types import (
    QueryParams,
    JsonData,
    merge_params,
    PAGE_MAX_LIMIT,
    PAGINATION_INTERVAL,
)

__all__ = [
    "PypagerError",
    "NoRemainingPages",
    "NotConnected",
    "MissingEndpoint",
    "RequestFailed",
    "QueryParams",
    "JsonData",
    "merge_params",
    "PAGE_MAX_LIMIT",
    "PAGINATION_INTERVAL",
]
