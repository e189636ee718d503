# =============================================================================
# app/exceptions.py - Custom Exceptions and Error Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failed request gets a JSON body of the same shape:
#
#   {"detail": "...", "code": "...", "suggestion": "...", "details": {...}}
#
# (suggestion/details only when present). Handlers are registered by
# install_error_handlers() during application bootstrap.
# =============================================================================

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class BlinkApiException(Exception):
    """
    Base exception for the Blink API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "BLINK_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Startup Exceptions
# =============================================================================

class RouteLoadError(BlinkApiException):
    """Raised when a route-definition file cannot be registered."""

    def __init__(self, path: str, error: str):
        super().__init__(
            message=f"Failed to load route file {path}: {error}",
            code="ROUTE_LOAD_ERROR",
            status_code=500,
            suggestion="Each route file must import cleanly and define `router = APIRouter()`",
            details={"path": path, "error": error}
        )


# =============================================================================
# Action Exceptions
# =============================================================================

class InvalidAmountError(BlinkApiException):
    """Raised when a donation amount is not a positive number."""

    def __init__(self, amount: str):
        super().__init__(
            message=f"Invalid amount: {amount}",
            code="INVALID_AMOUNT",
            status_code=400,
            suggestion="Use a positive USDC amount such as 5 or 12.50",
            details={"amount": amount}
        )


class InvalidAccountError(BlinkApiException):
    """Raised when the posted account is not a Solana public key."""

    def __init__(self, account: str):
        super().__init__(
            message=f"Invalid account: {account}",
            code="INVALID_ACCOUNT",
            status_code=400,
            suggestion="Post the base58 public key of the paying wallet",
            details={"account": account}
        )


class RpcUnavailableError(BlinkApiException):
    """Raised when the Solana RPC node cannot provide a recent blockhash."""

    def __init__(self, error: str):
        super().__init__(
            message="Could not reach the Solana RPC node",
            code="RPC_UNAVAILABLE",
            status_code=502,
            suggestion="Check RPC_URL and try again",
            details={"error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def blink_api_exception_handler(
    request: Request,
    exc: BlinkApiException
) -> JSONResponse:
    """Convert BlinkApiException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle HTTPException raised by routes or by routing itself (404, 405).

    Keeps the framework's status code and headers.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "code": f"HTTP_{exc.status_code}",
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Converts validation errors to user-friendly messages.
    """
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ],
        }
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    request.app.state.context.logger.error(
        {"method": request.method, "path": request.url.path, "error": repr(exc)},
        "Unhandled error",
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register every error handler on the application."""
    app.add_exception_handler(BlinkApiException, blink_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
