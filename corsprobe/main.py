"""corsprobe API: FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Fault switches resolved once here and handed to the middleware by value
    - Every response leaves through the CORS layer, whichever stage produced it
    - No trailing-slash redirects: /200/ is an unmatched route (404), not a 307
    - app.state.fault_switches is a read-only hook for tests and debugging;
      the pipeline itself only uses the copy passed to the middleware

Design Decisions:
    - create_app() factory over a module-level app: settings are validated by the
      CLI first, so a bad environment is reported as "Bad Env" instead of an
      import-time traceback (run directly with `uvicorn --factory corsprobe.main:create_app`)
    - Lifespan context manager for startup/shutdown logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from corsprobe import __version__
from corsprobe.api.error_handlers import register_error_handlers
from corsprobe.api.middleware import install_middleware
from corsprobe.api.routes import status_codes
from corsprobe.config import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    logger.info("corsprobe started")
    yield
    logger.info("corsprobe shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app with its middleware stack, routes and error handlers."""
    settings = settings or get_settings()
    switches = settings.fault_switches()

    app = FastAPI(
        title="corsprobe", version=__version__, lifespan=lifespan,
        docs_url=None, redoc_url=None, openapi_url=None,
        redirect_slashes=False,
    )
    app.state.fault_switches = switches

    install_middleware(app, switches)
    register_error_handlers(app)
    app.include_router(status_codes.router)
    return app
