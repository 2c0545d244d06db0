"""Structured log fields for validator API runtime logs.

Every record carries ``requestId``, ``component`` and ``operation``; callers
add camelCase detail fields as keyword arguments, and ``None`` details are
dropped so log processors never see placeholder values.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from fastapi import Request

from ura_validator.platform_api.schemas_v1 import RequestContext

UNKNOWN_REQUEST_ID = "req-unknown"


def request_id_for(request: Request) -> str:
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-Id") or UNKNOWN_REQUEST_ID


def _log_fields(request_id: str, component: str, operation: str, details: Mapping[str, object]) -> dict[str, object]:
    fields: dict[str, object] = {"requestId": request_id, "component": component, "operation": operation}
    fields.update({key: value for key, value in details.items() if value is not None})
    return fields


def context_log_fields(*, context: RequestContext, component: str, operation: str, **details: object) -> dict[str, object]:
    return _log_fields(context.request_id, component, operation, details)


def request_log_fields(*, request: Request, component: str, operation: str, **details: object) -> dict[str, object]:
    return _log_fields(
        request_id_for(request),
        component,
        operation,
        {"resourceType": "request", "resourceId": request.url.path, **details},
    )


def log_context_event(
    logger: logging.Logger,
    *,
    level: int,
    message: str,
    context: RequestContext,
    component: str,
    operation: str,
    **details: object,
) -> None:
    logger.log(level, message, extra=context_log_fields(context=context, component=component, operation=operation, **details))


def log_request_event(
    logger: logging.Logger,
    *,
    level: int,
    message: str,
    request: Request,
    component: str,
    operation: str,
    **details: object,
) -> None:
    logger.log(level, message, extra=request_log_fields(request=request, component=component, operation=operation, **details))


__all__ = [
    "context_log_fields",
    "log_context_event",
    "log_request_event",
    "request_id_for",
    "request_log_fields",
]
