from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from geoip_ws.clients.webservice import GeoIP2Client
from geoip_ws.config import ClientSettings
from geoip_ws.errors import GeoIPError, InvalidIpError, WebServiceError
from geoip_ws.exception_handlers import (
    pydantic_validation_exception_handler,
    unhandled_exception_handler,
)
from geoip_ws.logger import logger
from geoip_ws.models.request_models import Endpoint
from geoip_ws.models.response_models import HealthResponse, LookupResponse

app = FastAPI(
    title="GeoIP2 Web Service Gateway",
    version="0.1.0",
    description="Thin HTTP gateway over the GeoIP2 web service client.",
)
logger.info("Started GeoIP2 Web Service Gateway")

# Web service error codes that describe a problem with the looked-up address.
INVALID_IP_CODES = frozenset({"IP_ADDRESS_INVALID", "IP_ADDRESS_REQUIRED"})
RESERVED_IP_CODES = frozenset({"IP_ADDRESS_RESERVED"})
NOT_FOUND_CODES = frozenset({"IP_ADDRESS_NOT_FOUND"})


@lru_cache
def get_settings() -> ClientSettings:
    """Dependency to provide the process-wide client settings."""
    try:
        return ClientSettings.from_env()
    except ValidationError as exc:
        raise RuntimeError(
            "GeoIP2 client is not configured: set GEOIP_ACCOUNT_ID and GEOIP_LICENSE_KEY"
        ) from exc


def get_geoip_client(settings: Annotated[ClientSettings, Depends(get_settings)]) -> GeoIP2Client:
    """Dependency to provide a GeoIP2Client instance."""
    return GeoIP2Client.from_settings(settings)


app.add_exception_handler(RequestValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
)
async def health() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="ok")


def _web_service_error_status(exc: WebServiceError) -> tuple[int, str]:
    if exc.code in INVALID_IP_CODES:
        return status.HTTP_400_BAD_REQUEST, "invalid_ip"
    if exc.code in RESERVED_IP_CODES:
        return status.HTTP_400_BAD_REQUEST, "reserved_ip"
    if exc.code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND, "ip_not_found"
    return status.HTTP_502_BAD_GATEWAY, "upstream_error"


@app.get(
    "/v1/geoip/{endpoint}",
    response_model=LookupResponse,
    status_code=status.HTTP_200_OK,
    tags=["geoip"],
    summary="Look up GeoIP2 data for an IP address.",
)
async def geoip_lookup(
    request: Request,
    endpoint: Endpoint,
    client: Annotated[GeoIP2Client, Depends(get_geoip_client)],
    ip: str | None = None,
) -> LookupResponse:
    """Look up GeoIP2 data on one of the web service endpoints.

    - If `ip` is provided, that IP is used.
    - Otherwise, the web service looks up the address the gateway calls from.
    """
    logger.info(
        "Performing GeoIP2 lookup "
        f"path={request.url.path} method={request.method} endpoint={endpoint.value} ip={ip}"
    )

    try:
        lookup_request = GeoIP2Client.build_request(endpoint, ip)
        data = await client.lookup(lookup_request)
    except InvalidIpError as exc:
        logger.error(
            "Invalid IP error during lookup "
            f"path={request.url.path} method={request.method} ip={ip} endpoint={endpoint.value} error={exc}"
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_ip", "message": str(exc), "endpoint": endpoint.value},
        ) from exc
    except WebServiceError as exc:
        status_code, code = _web_service_error_status(exc)
        logger.error(
            "Web service reported an error "
            f"path={request.url.path} method={request.method} ip={ip} endpoint={endpoint.value} "
            f"status={exc.status} code={exc.code} error={exc}"
        )
        raise HTTPException(
            status_code=status_code,
            detail={"code": code, "message": str(exc), "endpoint": endpoint.value},
        ) from exc
    except GeoIPError as exc:
        logger.exception(
            "Upstream GeoIP2 error during lookup "
            f"path={request.url.path} method={request.method} ip={ip} endpoint={endpoint.value} error={exc}"
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"code": "upstream_error", "message": str(exc), "endpoint": endpoint.value},
        ) from exc

    return LookupResponse(
        endpoint=endpoint,
        ip=data.traits.ip_address or lookup_request.ip,
        result=data.model_dump(mode="json"),
    )
