"""Error helpers for the v1 validator API."""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ura_validator.platform_api.observability import request_id_for
from ura_validator.validation.errors import (
    InactiveRuleSetError,
    RuleSetConflictError,
    RuleSetDomainMismatchError,
    UnknownRuleSetError,
    ValidationServiceError,
)


class PlatformAPIError(Exception):
    """Service error mapped to the canonical error envelope."""

    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        self.request_id = request_id


def status_for(exc: ValidationServiceError) -> int:
    if isinstance(exc, UnknownRuleSetError):
        return 404
    if isinstance(exc, RuleSetConflictError):
        return 409
    if isinstance(exc, (RuleSetDomainMismatchError, InactiveRuleSetError)):
        return 422
    return 400


def from_service_error(exc: ValidationServiceError, *, request_id: str) -> PlatformAPIError:
    return PlatformAPIError(
        status_code=status_for(exc),
        code=exc.code,
        message=exc.message,
        details=exc.details or None,
        request_id=request_id,
    )


def error_envelope(
    *,
    code: str,
    message: str,
    request_id: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the canonical ErrorResponse payload; ``details`` is omitted when absent."""
    error: dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"error": error, "requestId": request_id}


def _envelope_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_envelope(
            code=code,
            message=message,
            request_id=request_id or request_id_for(request),
            details=details,
        ),
    )


async def platform_api_error_handler(request: Request, exc: PlatformAPIError) -> JSONResponse:
    return _envelope_response(
        request,
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        request_id=exc.request_id,
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/query validation failures in the same envelope."""
    problems = [{"loc": list(error.get("loc", ())), "msg": error.get("msg")} for error in exc.errors()]
    return _envelope_response(
        request,
        status_code=422,
        code="REQUEST_INVALID",
        message="Request body or parameters failed validation.",
        details={"errors": problems},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _envelope_response(request, status_code=500, code="INTERNAL_ERROR", message="Internal server error")


__all__ = [
    "PlatformAPIError",
    "error_envelope",
    "from_service_error",
    "platform_api_error_handler",
    "request_validation_error_handler",
    "status_for",
    "unhandled_error_handler",
]
