"""HTTP entry point for the setup proxy.

Run a deployment with ``uvicorn apps.setup_proxy.main:app``. The branch the
files are read from is chosen per deployment, either through
``SETUP_PROXY_CONFIG`` (for example ``config/deployments/master.yaml``) or
``SETUP_PROXY_BRANCH``.
"""

from typing import Optional

from fastapi import FastAPI, Request, Response

from apps.setup_proxy import SetupProxy
from lib.config.proxy_loader import load_proxy_config
from lib.telemetry.logger import configure_logging, get_logger

logger = get_logger(__name__)


def request_path(request: Request) -> str:
    """Return the path as sent by the client, percent-escapes intact.

    Starlette decodes ``url.path``; route matching is done on the literal
    path so that ``/%70ackages`` does not reach ``/packages``.
    """

    raw = request.scope.get("raw_path")
    if not raw:
        return request.url.path
    return raw.split(b"?", 1)[0].decode("latin-1")


def create_app(proxy: Optional[SetupProxy] = None) -> FastAPI:
    """Build the FastAPI application around ``proxy``.

    Without an explicit proxy the configuration is loaded from disk and the
    environment.
    """

    if proxy is None:
        config = load_proxy_config()
        configure_logging(config.log_level)
        proxy = SetupProxy.from_config(config)
        logger.info(
            "serving %d routes from %s@%s",
            len(proxy.routes),
            config.repository,
            config.branch,
        )

    # The docs and schema routes would shadow paths that must answer 404.
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)
    app.state.proxy = proxy

    @app.api_route("/{path:path}", methods=["GET", "HEAD"])
    async def proxy_request(request: Request) -> Response:
        """Serve the upstream file mapped to the request path."""

        result = await request.app.state.proxy.handle(request_path(request))
        if result.status == 404:
            return Response(result.body, status_code=404, media_type="text/plain")
        return Response(result.body, status_code=result.status, headers=result.headers)

    return app


app = create_app()
