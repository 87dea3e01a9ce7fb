from typing import Any, Sequence, TypeVar

# Type aliases for better clarity
QueryParams = Sequence[tuple[str, Any]]
JsonData = dict[str, Any]

# Generic type variable for page items
T = TypeVar("T")

# Constants
PAGE_MAX_LIMIT = 50  # Largest page size the API accepts
PAGINATION_INTERVAL = 0.1  # Seconds awaited between aggregation fetches


def merge_params(
    base: QueryParams | None = None,
    override: QueryParams | None = None,
    **kwargs: Any
) -> list[tuple[str, Any]]:
    """Merge query parameter sequences, keeping first-seen key order.

    Args:
        base: Base parameters
        override: Override parameters (takes precedence over base)
        **kwargs: Additional parameters (highest precedence)

    Returns:
        Merged list of (key, value) pairs
    """
    merged: dict[str, Any] = {}
    for key, value in [*(base or ()), *(override or ()), *kwargs.items()]:
        merged[key] = value
    return list(merged.items())
