from typing import Annotated

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from ipgeo.errors import IpLookupError
from ipgeo.exception_handlers import (
    lookup_exception_handler,
    provider_names_from_request,
    unhandled_exception_handler,
    validation_exception_handler,
)
from ipgeo.logger import logger
from ipgeo.models.request_models import IPLookupRequest
from ipgeo.models.response_models import HealthResponse, IPLookupResponse
from ipgeo.orchestrator import LookupOrchestrator, get_orchestrator
from ipgeo.registry import parse_provider

app = FastAPI(
    title="Public IP Geolocation Service",
    version="0.1.0",
    description="Public IP and geolocation lookups with provider fallback and caching.",
)
logger.info("Started Public IP Geolocation Service")


app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IpLookupError, lookup_exception_handler)
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


@app.get(
    "/v1/ip/lookup",
    response_model=IPLookupResponse,
    status_code=status.HTTP_200_OK,
    tags=["ip"],
    summary="Look up the public IP of this service, or geolocation for an explicit IP.",
)
def ip_lookup(
    request: Request,
    query: Annotated[IPLookupRequest, Depends()],
    orchestrator: Annotated[LookupOrchestrator, Depends(get_orchestrator)],
) -> IPLookupResponse:
    """Look up geolocation information for either a specific IP or this service's public IP.

    - If `query.ip` is provided, that IP is looked up.
    - Otherwise, the service's own public IP is looked up (and cached).
    - `query.providers` selects and orders the upstream providers; later ones are
      only tried when earlier ones fail.

    Declared as a plain function: the lookup blocks, so FastAPI runs it in its
    thread pool. Lookup errors are turned into responses by
    `lookup_exception_handler`.
    """
    kinds = [parse_provider(value) for value in query.provider_strings()] or None
    logger.info(
        f"Performing {'explicit' if query.ip else 'public'} IP lookup "
        f"path={request.url.path} ip={query.ip} provider={provider_names_from_request(request)} "
        f"retries={query.retries} cache={query.cache} require_target={query.require_target}"
    )

    if query.ip:
        data = orchestrator.lookup_target(kinds, query.ip, query.retries, query.cache, query.require_target)
    else:
        data = orchestrator.lookup(kinds, query.retries, query.cache)
    return IPLookupResponse.from_lookup(data)


@app.delete(
    "/v1/ip/cache",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["ip"],
    summary="Drop the cached public IP lookup.",
)
def clear_cache(
    orchestrator: Annotated[LookupOrchestrator, Depends(get_orchestrator)],
) -> None:
    """Forget the cached lookup so the next request goes to the providers."""
    orchestrator.clear_cache()
    logger.info("Cleared cached lookup")
