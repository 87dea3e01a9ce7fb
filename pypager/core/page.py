from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, AsyncIterator, Generic, Optional, Self, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from pypager.core.aggregator import get_default_aggregator
from pypager.core.client import strip_base_url
from pypager.core.endpoint import EndpointDescriptor
from pypager.core.items import filter_present
from pypager.utils.exceptions import MissingEndpoint, NoRemainingPages

if TYPE_CHECKING:
    from pypager.core.aggregator import Aggregator
    from pypager.core.client import RequestCapability

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=EndpointDescriptor)


class _BasePage(BaseModel, Generic[T]):
    """Fields and aggregation entry points shared by both page kinds."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    href: str
    limit: int = Field(gt=0)
    items: list[Optional[T]] = Field(default_factory=list)

    def filtered_items(self) -> list[T]:
        """Return only the non-null items, in server order."""
        return filter_present(self.items)

    def with_limit(self, limit: int) -> Self:
        """Return a copy of this page that requests `limit` items per page."""
        return self.model_copy(update={"limit": limit})

    async def get_remaining(
        self, client: RequestCapability, *, aggregator: Aggregator | None = None
    ) -> list[Optional[T]]:
        """Collect this page's items and those of every page after it."""
        aggregator = aggregator or get_default_aggregator()
        return await aggregator.get_remaining(self, client)

    async def get_all(
        self, client: RequestCapability, *, aggregator: Aggregator | None = None
    ) -> list[Optional[T]]:
        """Collect the items of every page before and after this one, in order."""
        aggregator = aggregator or get_default_aggregator()
        return await aggregator.get_all(self, client)

    def iter_pages(
        self, client: RequestCapability, *, aggregator: Aggregator | None = None
    ) -> AsyncIterator[Self]:
        """Yield this page, then each following page as it is fetched."""
        aggregator = aggregator or get_default_aggregator()
        return aggregator.iter_pages(self, client)


class OffsetPage(_BasePage[T], Generic[T]):
    """A page addressed by offset/limit, with absolute links to its neighbours.

    `total` is the item count the server reported when this page was
    fetched. It may be stale by the time later pages are requested and is
    never used to decide whether more pages exist.
    """

    offset: int = Field(ge=0)
    total: int = Field(ge=0)
    next: Optional[str] = None
    previous: Optional[str] = None

    async def get_next(self, client: RequestCapability) -> Self:
        """Fetch the page after this one.

        Raises:
            NoRemainingPages: If the server reported no next page
        """
        if self.next is None:
            raise NoRemainingPages(f"No page after offset {self.offset} of {self.href}")
        return await self._follow(self.next, client)

    async def get_previous(self, client: RequestCapability) -> Self:
        """Fetch the page before this one.

        Raises:
            NoRemainingPages: If the server reported no previous page
        """
        if self.previous is None:
            raise NoRemainingPages(f"No page before offset {self.offset} of {self.href}")
        return await self._follow(self.previous, client)

    async def step_forward(self, client: RequestCapability) -> Self:
        return await self.get_next(client)

    async def step_backward(self, client: RequestCapability) -> Self:
        return await self.get_previous(client)

    async def _follow(self, link: str, client: RequestCapability) -> Self:
        # Links are absolute; the client prefixes its base URL itself.
        path = strip_base_url(link, client.base_url)
        logger.debug(f"Following page link {path} with limit {self.limit}")
        return await client.get(path, [("limit", self.limit)], type(self))


class Cursor(BaseModel):
    """Opaque tokens locating the pages around a CursorPage."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    after: Optional[str] = None
    before: Optional[str] = None


class CursorPage(_BasePage[T], Generic[T, E]):
    """A page addressed by cursor tokens instead of absolute links.

    The API gives no usable link for the adjacent pages, so the page keeps
    the endpoint descriptor it came from and re-requests its URL with the
    `before`/`after` token. The descriptor is never serialized. When none
    was attached, the `E` type argument is instantiated without arguments.
    """

    next: Optional[str] = None
    cursors: Optional[Cursor] = None
    total: Optional[int] = Field(default=None, ge=0)

    _endpoint: Optional[Any] = PrivateAttr(default=None)

    @property
    def endpoint(self) -> E:
        if self._endpoint is None:
            self._endpoint = self._default_endpoint()
        return self._endpoint

    def with_endpoint(self, endpoint: E) -> Self:
        """Return a copy of this page bound to `endpoint`."""
        page = self.model_copy()
        page._endpoint = endpoint
        return page

    async def get_after(self, client: RequestCapability) -> Self:
        """Fetch the page chronologically after this one.

        Raises:
            NoRemainingPages: If there is no `after` cursor
        """
        if self.cursors is None or self.cursors.after is None:
            raise NoRemainingPages(f"No page after {self.href}")
        return await self._fetch_adjacent("after", self.cursors.after, client)

    async def get_before(self, client: RequestCapability) -> Self:
        """Fetch the page chronologically before this one.

        Raises:
            NoRemainingPages: If there is no `before` cursor
        """
        if self.cursors is None or self.cursors.before is None:
            raise NoRemainingPages(f"No page before {self.href}")
        return await self._fetch_adjacent("before", self.cursors.before, client)

    async def step_forward(self, client: RequestCapability) -> Self:
        return await self.get_after(client)

    async def step_backward(self, client: RequestCapability) -> Self:
        return await self.get_before(client)

    async def _fetch_adjacent(self, direction: str, token: str, client: RequestCapability) -> Self:
        endpoint = self.endpoint
        url = endpoint.endpoint_url()
        logger.debug(f"Requesting {url} {direction}={token} with limit {self.limit}")
        page = await client.get(url, [(direction, token), ("limit", self.limit)], type(self))
        page._endpoint = endpoint
        return page

    def _default_endpoint(self) -> E:
        # Subclasses of a parametrized CursorPage carry the arguments on a base.
        for klass in type(self).__mro__:
            metadata = getattr(klass, "__pydantic_generic_metadata__", None)
            if not metadata or metadata["origin"] is not CursorPage:
                continue
            descriptor = metadata["args"][1] if len(metadata["args"]) == 2 else None
            if isinstance(descriptor, type):
                try:
                    return descriptor()
                except TypeError as e:
                    raise MissingEndpoint(
                        f"Cannot construct endpoint descriptor {descriptor.__name__}: {e}"
                    ) from e
            break
        raise MissingEndpoint(
            f"{type(self).__name__} has no endpoint descriptor. "
            "Parametrize it as CursorPage[Item, SomeEndpoint] or call with_endpoint()."
        )
