"""HTTP utilities for fetching upstream JSON with a shared connection pool."""

from __future__ import annotations

from typing import Final

import httpx

from scxdata.config import SCX_FETCH_TIMEOUT_S, SCX_USER_AGENT
from scxdata.exceptions import FetchError, NotFoundError

_MAX_REDIRECTS: Final[int] = 5


def create_client() -> httpx.AsyncClient:
    """Create the async client shared by every request of one build."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(SCX_FETCH_TIMEOUT_S),
        headers={"User-Agent": SCX_USER_AGENT, "Accept": "application/json"},
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    )


async def fetch_text(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Fetch the body of a URL in a single attempt.

    Failures are not retried; callers skip the resource and carry on.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The response body as text.

    Raises:
        NotFoundError: If the URL returns 404.
        FetchError: On any other HTTP error status or transport failure.
    """

    async def do_fetch(http_client: httpx.AsyncClient) -> str:
        try:
            response = await http_client.get(url)
        except httpx.RequestError as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

        if response.status_code == 404:
            raise NotFoundError(f"Resource not found at {url}")

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"HTTP {response.status_code} from {url}") from exc
        return response.text

    if client is not None:
        return await do_fetch(client)

    async with create_client() as new_client:
        return await do_fetch(new_client)
