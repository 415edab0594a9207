"""Setup proxy service.

Serves the system setup script and the two package lists of the setup
repository under short, stable paths so that a fresh machine can be
bootstrapped with ``curl <host> | sh``. Every request is answered from the
upstream file host at request time; nothing is cached locally.

The :class:`SetupProxy` class is transport neutral: it maps a request path to
a :class:`~lib.contracts.route_table.ProxyResponse`. The FastAPI layer in
:mod:`apps.setup_proxy.main` only converts that result into an HTTP response.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from lib.config.proxy_loader import DEFAULT_TIMEOUT_SECONDS, ProxyConfig
from lib.contracts.route_table import ProxyResponse, RouteTable
from lib.telemetry.logger import get_logger

from .upstream import UpstreamError, UpstreamTimeout, fetch_text

logger = get_logger(__name__)

PLAIN_TEXT_HEADERS = {
    "Content-Type": "text/plain",
    "Cache-Control": "no-store",
}
NOT_FOUND_BODY = b"Not Found"
BAD_GATEWAY_BODY = b"Bad Gateway"
GATEWAY_TIMEOUT_BODY = b"Gateway Timeout"


@dataclass
class SetupProxy:
    """Answer requests for the configured paths from the upstream host.

    Parameters
    ----------
    routes: the immutable path to upstream URL table.
    timeout: seconds to wait for the upstream host.
    transport: optional ``httpx`` transport, used by tests to stand in for the
        upstream host.
    """

    routes: RouteTable
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    @classmethod
    def from_config(
        cls,
        config: ProxyConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SetupProxy":
        return cls(
            routes=config.route_table(),
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def handle(self, path: str) -> ProxyResponse:
        """Return the response for a request whose URL path is ``path``.

        ``path`` must already be stripped of query and fragment. Unknown paths
        are answered with 404 without contacting the upstream host.
        """

        upstream_url = self.routes.lookup(path)
        if upstream_url is None:
            return ProxyResponse(status=404, body=NOT_FOUND_BODY)

        logger.debug("proxying %s -> %s", path, upstream_url)
        try:
            body = await fetch_text(
                upstream_url, timeout=self.timeout, transport=self.transport
            )
        except UpstreamTimeout as exc:
            logger.warning("upstream timeout for %s: %s", path, exc)
            return self._gateway_error(504, GATEWAY_TIMEOUT_BODY)
        except UpstreamError as exc:
            logger.warning("upstream failure for %s: %s", path, exc)
            return self._gateway_error(502, BAD_GATEWAY_BODY)

        return ProxyResponse(status=200, body=body, headers=dict(PLAIN_TEXT_HEADERS))

    @staticmethod
    def _gateway_error(status: int, body: bytes) -> ProxyResponse:
        return ProxyResponse(status=status, body=body, headers=dict(PLAIN_TEXT_HEADERS))


__all__ = ["SetupProxy", "UpstreamError", "UpstreamTimeout"]
