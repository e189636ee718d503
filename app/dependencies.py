# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# The application context holds the values shared by every route handler:
# the database handle, the logger and the resolved settings. It is built
# once in create_app() and injected into handlers using Depends().
#
# Usage:
#   from app.dependencies import ContextDep
#
#   @router.get("/")
#   async def handler(ctx: ContextDep):
#       ctx.logger.info(f"base path is {ctx.env.base_path}")
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from lib.database import Database
from lib.logger import Logger


@dataclass(frozen=True)
class AppContext:
    """Read-only values decorated onto every request."""
    db: Database
    logger: Logger
    env: Settings


def get_app_context(request: Request) -> AppContext:
    """
    Get the application context.

    Returns the instance stored on app.state during bootstrap.
    """
    return request.app.state.context


# Type alias for dependency injection
ContextDep = Annotated[AppContext, Depends(get_app_context)]
