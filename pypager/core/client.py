from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar, overload

import httpx
from pydantic import BaseModel, ValidationError

from pypager.lifecycle.observability import track_fetch
from pypager.utils.exceptions import RequestFailed
from pypager.utils.types import QueryParams, merge_params

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class RequestCapability(Protocol):
    """What pages need from a client to fetch their neighbours."""

    @property
    def base_url(self) -> str: ...

    async def get(
        self, path: str, params: QueryParams = (), response_model: type[M] | None = None
    ) -> Any: ...


def strip_base_url(url: str, base_url: str) -> str:
    """Remove `base_url` once from the front of `url`.

    URLs on another origin are returned unchanged.

    Args:
        url: Absolute URL as returned by the API
        base_url: Base URL the client prefixes to every path

    Returns:
        Path (with query string) relative to base_url
    """
    base = base_url.rstrip("/")
    if not base or not url.startswith(base):
        return url
    rest = url[len(base):]
    # "https://api.example" must not match "https://api.example.org/..."
    if rest and rest[0] not in "/?":
        return url
    return rest or "/"


class Client:
    """Authenticated JSON client for the paginated API, built on httpx.

    Args:
        base_url: Origin (and optional path prefix) every request is sent to
        token: Bearer token sent with every request
        timeout: Request timeout in seconds
        headers: Extra headers for every request
        params: Query parameters added to every request
        transport: httpx transport override (e.g. httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        headers: dict[str, str] | None = None,
        params: QueryParams | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._default_params = list(params or ())
        request_headers = {"Accept": "application/json", **(headers or {})}
        if token is not None:
            request_headers["Authorization"] = f"Bearer {token}"
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout,
            headers=request_headers,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def relative_path(self, url: str) -> str:
        return strip_base_url(url, self._base_url)

    @overload
    async def get(self, path: str, params: QueryParams = (), response_model: None = None) -> Any: ...

    @overload
    async def get(self, path: str, params: QueryParams, response_model: type[M]) -> M: ...

    async def get(
        self, path: str, params: QueryParams = (), response_model: type[M] | None = None
    ) -> Any:
        """Issue a GET against base_url + path and decode the JSON body.

        Args:
            path: Path relative to base_url, may carry its own query string
            params: Query parameters; they override same-named ones in `path`
            response_model: Pydantic model to validate the body into

        Returns:
            The validated model, or the decoded JSON when no model is given

        Raises:
            RequestFailed: On transport errors, non-2xx responses, bodies that
                are not JSON, or bodies that do not validate
        """
        # httpx replaces a URL's query string when params= is given, so the
        # link's own parameters are merged here. Precedence: call > link > default.
        route, _, link_query = path.partition("?")
        link_params = httpx.QueryParams(link_query).multi_items()
        query = merge_params(self._default_params, [*link_params, *params])
        async with track_fetch("GET", route, query) as record:
            try:
                response = await self._http.get(route, params=query)
            except httpx.HTTPError as e:
                logger.error(f"GET {path} failed: {e}")
                raise RequestFailed(f"GET {path} failed: {e}") from e

            record.status_code = response.status_code
            if not response.is_success:
                logger.error(f"GET {path} returned status {response.status_code}")
                raise RequestFailed(
                    f"GET {path} returned status {response.status_code}",
                    status_code=response.status_code,
                )

            try:
                data = response.json()
            except ValueError as e:
                logger.error(f"GET {path} returned a body that is not JSON: {e}")
                raise RequestFailed(
                    f"GET {path} returned a body that is not JSON",
                    status_code=response.status_code,
                ) from e

            if isinstance(data, dict) and isinstance(data.get("items"), list):
                record.item_count = len(data["items"])

            if response_model is None:
                return data

            try:
                return response_model.model_validate(data)
            except ValidationError as e:
                logger.error(f"GET {path} returned an unexpected {response_model.__name__}: {e}")
                raise RequestFailed(
                    f"GET {path} returned a body that is not a valid {response_model.__name__}",
                    status_code=response.status_code,
                ) from e

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
