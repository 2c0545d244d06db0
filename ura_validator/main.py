"""FastAPI application entry point."""

import logging
import os
import time
from uuid import uuid4

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from ura_validator.config import Settings, get_settings
from ura_validator.platform_api.errors import (
    PlatformAPIError,
    platform_api_error_handler,
    request_validation_error_handler,
    unhandled_error_handler,
)
from ura_validator.platform_api.observability import log_request_event
from ura_validator.platform_api.router_v1 import router as validator_v1_router

logger = logging.getLogger(__name__)

VALIDATOR_API_PREFIX = "/v1/"


def configure_tracing(settings: Settings) -> None:
    """Export LangSmith settings to the variables LangChain reads."""
    if not settings.langsmith_tracing:
        return
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGCHAIN_ENDPOINT"] = settings.langsmith_endpoint
    os.environ["LANGCHAIN_API_KEY"] = settings.langsmith_api_key
    os.environ["LANGCHAIN_PROJECT"] = settings.langsmith_project


load_dotenv()
settings = get_settings()
configure_tracing(settings)
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(
    title="URA Validator",
    description="Validation as a service: domain verdicts with content-addressed proofs",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def validator_request_middleware(request: Request, call_next):
    """Correlate /v1 requests, log their lifecycle, and envelope unhandled errors."""
    if not request.url.path.startswith(VALIDATOR_API_PREFIX):
        return await call_next(request)

    request.state.request_id = request.headers.get("X-Request-Id") or f"req-{uuid4()}"
    started_at = time.perf_counter()
    log_request_event(
        logger,
        level=logging.INFO,
        message="Validator API request started.",
        request=request,
        component="api",
        operation="request_started",
        method=request.method,
    )
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception(
            "Unhandled exception for validator API request %s",
            request.url.path,
            extra={
                "requestId": request.state.request_id,
                "component": "api",
                "operation": "request_failed_unhandled",
            },
        )
        response = await unhandled_error_handler(request, exc)

    response.headers["X-Request-Id"] = request.state.request_id
    log_request_event(
        logger,
        level=logging.INFO,
        message="Validator API request completed.",
        request=request,
        component="api",
        operation="request_completed",
        statusCode=response.status_code,
        method=request.method,
        durationMs=int((time.perf_counter() - started_at) * 1000),
    )
    return response


app.include_router(validator_v1_router)
app.add_exception_handler(PlatformAPIError, platform_api_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "URA Validator", "status": "running"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ura_validator.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
