from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from geoip_ws.logger import logger


def _get_endpoint_from_request(request: Request) -> str | None:
    """Best-effort extraction of the endpoint path parameter.

    For routes other than /v1/geoip/{endpoint} this will be None.
    """
    return request.path_params.get("endpoint")


def _normalize_pydantic_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Make sure Pydantic error dicts are JSON-serializable."""
    normalized: list[dict[str, Any]] = []
    for error in errors:
        e = dict(error)
        ctx = e.get("ctx")
        if isinstance(ctx, dict):
            e["ctx"] = {k: str(v) for k, v in ctx.items()}
        normalized.append(e)
    return normalized


def _build_validation_error_payload(exc: ValidationError | RequestValidationError) -> dict:
    """Normalize validation errors into a consistent error payload.

    The external shape is kept minimal:
    - `code`: short machine-readable error code.
    - `message`: stable human-readable message.
    """
    code = "invalid_request"
    message = "Invalid request parameters"

    errors = _normalize_pydantic_errors(list(exc.errors()))

    for error in errors:
        loc = error.get("loc", ())
        if len(loc) >= 1 and loc[-1] == "ip":
            code = "invalid_ip"
            message = "The supplied IP address is not a valid IPv4 or IPv6 address."
            break
        if len(loc) >= 1 and loc[-1] == "endpoint":
            code = "invalid_endpoint"
            message = "The endpoint must be one of: country, city, city_isp_org, omni."
            break

    return {
        "code": code,
        "message": message,
    }


async def pydantic_validation_exception_handler(
    request: Request, exc: ValidationError | RequestValidationError
) -> JSONResponse:
    """Handle validation errors raised for path/query parameters or request models."""
    endpoint = _get_endpoint_from_request(request)
    logger.info(
        "Validation error during request handling "
        f"path={request.url.path} method={request.method} endpoint={endpoint} errors={exc.errors()}"
    )
    payload = _build_validation_error_payload(exc)
    payload["endpoint"] = endpoint
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=payload)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    endpoint = _get_endpoint_from_request(request)
    logger.exception(
        "Unhandled exception while processing request: "
        f"{repr(exc)} path={request.url.path} method={request.method} endpoint={endpoint}"
    )
    content: dict[str, Any] = {
        "code": "internal_error",
        "message": "An unexpected error occurred while processing the request.",
        "endpoint": endpoint,
    }
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
