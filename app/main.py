# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Blink Actions API.
# create_app() layers, in this order:
#
#   CORS -> Swagger docs -> /actions.json -> autoloaded routes
#        -> error handlers -> shared context (db, logger, env)
#
# and serve() binds the configured port.
#
# Usage:
#   poetry run python -m app.main
#   poetry run uvicorn app.main:create_app --factory --reload
# =============================================================================

import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from app.autoroutes import autoroutes
from app.config import Settings, get_settings
from app.dependencies import AppContext, ContextDep
from app.exceptions import RouteLoadError, install_error_handlers
from core.models.action import ActionsJson
from core.services.action_service import build_actions_json
from lib.database import Database
from lib.logger import Logger, configure_logging
from lib.logger import logger as default_logger

CORS_ALLOWED_HEADERS = ["Content-Type", "Authorization"]

# uvicorn reports its own startup at INFO; the bound address is logged once
# by BootstrapServer instead.
UVICORN_LOG_LEVEL = "warning"
UVICORN_DEBUG_LOG_LEVEL = "debug"


def create_app(
    settings: Settings | None = None,
    *,
    routes_dir: Path | None = None,
    db: Database | None = None,
    logger: Logger | None = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Resolved settings (defaults to get_settings())
        routes_dir: Directory of route files (defaults to settings.routes_dir)
        db: Database handle (defaults to one built from settings)
        logger: Logger (defaults to the process-wide logger)

    Returns:
        FastAPI: The composed application, not yet bound to a port

    Raises:
        pydantic.ValidationError: If settings are missing or invalid
        RouteLoadError: If a route file cannot be registered
    """
    settings = settings or get_settings()
    logger = logger or default_logger
    db = db or Database(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)

    # Swagger UI at /swagger, OpenAPI document at /swagger/json
    app = FastAPI(
        title="Blink Actions API",
        description="Solana Actions endpoints for sending USDC credits.",
        version="1.0.0",
        docs_url="/swagger",
        openapi_url="/swagger/json",
        redoc_url=None,
    )

    # -------------------------------------------------------------------------
    # Middleware
    # -------------------------------------------------------------------------

    # No credentials, so preflight responses carry Access-Control-Allow-Origin: *
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=CORS_ALLOWED_HEADERS,
    )

    # -------------------------------------------------------------------------
    # Routes
    # -------------------------------------------------------------------------

    if settings.ACTIONS_JSON_ENABLED:
        @app.get("/actions.json", response_model=ActionsJson, tags=["blink"])
        async def actions_json(ctx: ContextDep):
            """Map website paths to the action endpoints that serve them."""
            return build_actions_json(ctx.env.base_path)

    autoroutes(app, routes_dir or settings.routes_dir)

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    install_error_handlers(app)

    # -------------------------------------------------------------------------
    # Shared Context
    # -------------------------------------------------------------------------

    app.state.context = AppContext(db=db, logger=logger, env=settings)

    return app


class BootstrapServer(uvicorn.Server):
    """
    uvicorn server that reports the bound address once it is listening.

    uvicorn exits the process itself when the port cannot be bound.
    """

    def __init__(self, config: uvicorn.Config, logger: Logger):
        super().__init__(config)
        self.logger = logger

    def bound_address(self) -> tuple[str, int]:
        """Address of the first listening socket (resolves port 0)."""
        for server in getattr(self, "servers", []):
            for sock in server.sockets:
                host, port = sock.getsockname()[:2]
                return host, port
        return self.config.host, self.config.port

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if not self.started:
            return
        host, port = self.bound_address()
        self.logger.info(f"Server is running at {host}:{port}")


def serve(settings: Settings | None = None) -> None:
    """
    Build the application and serve it until interrupted.

    Raises:
        pydantic.ValidationError: If settings are missing or invalid
        RouteLoadError: If a route file cannot be registered
        SystemExit: If the port cannot be bound
    """
    settings = settings or get_settings()
    configure_logging(settings.DEBUG)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        log_config=None,
        log_level=UVICORN_DEBUG_LOG_LEVEL if settings.DEBUG else UVICORN_LOG_LEVEL,
    )
    BootstrapServer(config, default_logger).run()


def main() -> None:
    """Console entry point: any startup failure exits with status 1."""
    try:
        serve()
    except ValidationError as e:
        errors = e.errors(include_url=False, include_context=False, include_input=False)
        default_logger.fatal({"errors": errors}, "Invalid configuration")
        sys.exit(1)
    except RouteLoadError as e:
        default_logger.fatal(e.to_dict(), "Failed to load routes")
        sys.exit(1)


if __name__ == "__main__":
    main()
