"""Bulk collection of pages by repeated traversal.

The algorithm is written once against the Traversable protocol, which both
OffsetPage (link based) and CursorPage (token based) implement.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Protocol, Self

from pypager.utils.exceptions import NoRemainingPages
from pypager.utils.types import PAGE_MAX_LIMIT, PAGINATION_INTERVAL

if TYPE_CHECKING:
    from pypager.core.client import RequestCapability

logger = logging.getLogger(__name__)


class Traversable(Protocol):
    """A page that can step to its neighbours."""

    items: list[Any]

    def with_limit(self, limit: int) -> Self: ...

    async def step_forward(self, client: RequestCapability) -> Self: ...

    async def step_backward(self, client: RequestCapability) -> Self: ...


@dataclass(frozen=True)
class AggregationPolicy:
    """How aggregation paces and sizes its requests.

    Args:
        interval: Seconds awaited after every fetched page
        max_limit: Page size requested for every continuation fetch
    """

    interval: float = PAGINATION_INTERVAL
    max_limit: int = PAGE_MAX_LIMIT

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("interval must be >= 0")
        if self.max_limit < 1:
            raise ValueError("max_limit must be >= 1")


class Aggregator:
    """Collects the items of many pages into one list.

    Pages are fetched one at a time, each only after the previous one
    arrived, and `policy.interval` is awaited after every fetch. A
    NoRemainingPages from a step ends that direction; any other exception
    propagates and the items collected so far are dropped.
    """

    def __init__(
        self,
        policy: AggregationPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.policy = policy or AggregationPolicy()
        self._sleep = sleep

    async def get_remaining(self, page: Traversable, client: RequestCapability) -> list[Any]:
        """Return the items of `page` followed by those of every later page."""
        items = list(page.items)
        fetched = 0
        async for next_page in self._walk(page.with_limit(self.policy.max_limit), client, forward=True):
            items.extend(next_page.items)
            fetched += 1
        logger.debug(f"Collected {len(items)} items from {fetched} additional pages")
        return items

    async def get_all(self, page: Traversable, client: RequestCapability) -> list[Any]:
        """Return the items of every page before `page`, of `page`, and after it.

        Earlier pages are prepended as they arrive, so the result is in
        page order from the first page to the last.
        """
        working = page.with_limit(self.policy.max_limit)

        earlier: list[Any] = []
        fetched = 0
        async for previous_page in self._walk(working, client, forward=False):
            earlier[:0] = previous_page.items
            fetched += 1

        items = [*earlier, *page.items]
        async for next_page in self._walk(working, client, forward=True):
            items.extend(next_page.items)
            fetched += 1

        logger.debug(f"Collected {len(items)} items from {fetched} additional pages")
        return items

    async def iter_pages(self, page: Traversable, client: RequestCapability) -> AsyncIterator[Any]:
        """Yield `page`, then every later page as soon as it is fetched."""
        yield page
        async for next_page in self._walk(page.with_limit(self.policy.max_limit), client, forward=True):
            yield next_page

    async def _walk(
        self, page: Traversable, client: RequestCapability, *, forward: bool
    ) -> AsyncIterator[Any]:
        """Step from `page` in one direction until no page remains.

        Fetched pages are yielded as the server sent them; the next step is
        taken from a copy carrying `policy.max_limit`.
        """
        while True:
            try:
                if forward:
                    fetched = await page.step_forward(client)
                else:
                    fetched = await page.step_backward(client)
            except NoRemainingPages:
                return
            yield fetched
            page = fetched.with_limit(self.policy.max_limit)
            await self._sleep(self.policy.interval)


_default_aggregator = Aggregator()


def get_default_aggregator() -> Aggregator:
    """Return the aggregator pages use when none is passed."""
    return _default_aggregator


def set_default_aggregator(aggregator: Aggregator | None = None) -> None:
    """Replace the default aggregator; None restores the stock policy."""
    global _default_aggregator
    _default_aggregator = aggregator or Aggregator()
