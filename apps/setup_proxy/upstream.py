"""HTTP client to the upstream file host."""

from typing import Optional

import httpx


class UpstreamError(Exception):
    """The upstream host could not be reached or refused the request."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status_code = status_code


class UpstreamTimeout(UpstreamError):
    """The upstream host did not answer within the configured timeout."""


async def fetch_text(
    url: str,
    *,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bytes:
    """GET ``url`` and return the response body exactly as received."""

    try:
        async with httpx.AsyncClient(
            timeout=timeout, transport=transport, follow_redirects=True
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException as exc:
        raise UpstreamTimeout(url, f"timed out after {timeout}s") from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(url, str(exc) or type(exc).__name__) from exc

    if not response.is_success:
        raise UpstreamError(
            url, f"upstream answered {response.status_code}", response.status_code
        )
    return response.content
