from __future__ import annotations

import logging
from typing import Any

import httpx

from pypager.core.client import Client
from pypager.utils.exceptions import NotConnected

logger = logging.getLogger(__name__)

_clients: dict[str, Client] = {}


async def connect(
    base_url: str, *, token: str | None = None, alias: str = "default", **client_kwargs: Any
) -> Client:
    """Create an API client and register it under an alias.

    Args:
        base_url: API base URL, e.g. https://api.example/v1
        token: Bearer token sent with every request
        alias: Connection alias for multi-API setups
        **client_kwargs: Passed through to Client (timeout, headers, params, transport)

    Returns:
        The registered Client

    Raises:
        ValueError: If the base URL is invalid
    """
    logger.info(f"Connecting to API with alias '{alias}'")

    _validate_base_url(base_url)
    previous = _clients.pop(alias, None)
    if previous is not None:
        await previous.aclose()

    client = Client(base_url, token=token, **client_kwargs)
    _clients[alias] = client
    logger.info(f"Connected to {client.base_url} with alias '{alias}'")
    return client


async def disconnect(alias: str = "default") -> None:
    """Close and remove a registered client.

    Args:
        alias: Connection alias to disconnect
    """
    client = _clients.pop(alias, None)
    if client is not None:
        await client.aclose()
        logger.info(f"Disconnected from API (alias: '{alias}')")


def get_client(alias: str = "default") -> Client:
    """Retrieve a registered client or raise NotConnected.

    Args:
        alias: Connection alias

    Returns:
        Client instance

    Raises:
        NotConnected: If no client exists for the alias
    """
    try:
        return _clients[alias]
    except KeyError:
        raise NotConnected(
            f"No client registered for alias '{alias}'. Call connect() first."
        )


def _validate_base_url(base_url: str) -> None:
    """Check that a base URL is an absolute http(s) URL.

    Args:
        base_url: URL to validate

    Raises:
        ValueError: If the URL is empty, relative, or not http(s)
    """
    if not base_url:
        raise ValueError("Base URL cannot be empty")

    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ValueError(f"Invalid base URL '{base_url}': {e}") from e

    if url.scheme not in ("http", "https"):
        raise ValueError(
            f"Invalid base URL '{base_url}'. "
            f"Expected format: https://host[:port][/prefix]"
        )
    if not url.host:
        raise ValueError(f"Base URL '{base_url}' has no host")

    logger.debug(f"Validated base URL: {base_url}")
