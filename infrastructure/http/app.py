"""FastAPI query server for the taxonomy report."""

import logging
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse

from infrastructure.config.models import ServerConfig
from infrastructure.constants import REPORT_ROUTE
from infrastructure.observability.logging import clear_request_context, make_request_tag, set_log_context
from infrastructure.rendering import ReportRenderError

logger = logging.getLogger(__name__)

ERROR_BODY = "<!DOCTYPE html><html><body><h1>500 Internal Server Error</h1><p>Report rendering failed.</p></body></html>"


class ListenerStartupError(RuntimeError):
    """The HTTP listener could not be started (e.g. port already bound)."""


def create_app(render: Callable[[], str]) -> FastAPI:
    """
    Build the report application.

    Args:
        render: Zero-argument callable returning the full HTML report;
            raises ReportRenderError on failure

    Returns:
        FastAPI app exposing GET /messages
    """
    app = FastAPI(title="Loggregator Metrics", docs_url=None, redoc_url=None, openapi_url=None)

    # Sync handler: runs on the server threadpool, concurrently with ingestion
    @app.get(REPORT_ROUTE, response_class=HTMLResponse)
    def messages() -> HTMLResponse:
        set_log_context(request_tag=make_request_tag())
        try:
            body = render()
        except ReportRenderError:
            logger.exception("Report rendering failed")
            return HTMLResponse(ERROR_BODY, status_code=500)
        finally:
            clear_request_context()
        return HTMLResponse(body)

    return app


def serve(app: FastAPI, cfg: ServerConfig) -> None:
    """
    Run the HTTP server until it is shut down (blocking).

    Raises:
        ListenerStartupError: If the listener could not be started
    """
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=cfg.host,
            port=cfg.port,
            log_config=None,  # keep our root handlers
        )
    )
    logger.info("Serving report on http://%s:%d%s", cfg.host, cfg.port, REPORT_ROUTE)
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits the process when binding fails
        raise ListenerStartupError(f"Could not start HTTP listener on {cfg.host}:{cfg.port}") from e
    if not server.started:
        raise ListenerStartupError(f"Could not start HTTP listener on {cfg.host}:{cfg.port}")
