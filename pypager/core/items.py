from __future__ import annotations

from typing import Iterable, Optional, TypeVar

T = TypeVar("T")

# One slot of a page's item list; None where the payload held null.
NullableItem = Optional[T]


def filter_present(items: Iterable[NullableItem[T]]) -> list[T]:
    """Return only the present values, keeping their relative order."""
    return [item for item in items if item is not None]
