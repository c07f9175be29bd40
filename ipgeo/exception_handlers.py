from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ipgeo.errors import (
    ExhaustedError,
    InvalidIpError,
    IpLookupError,
    NoProviderError,
    UnknownProviderError,
    UnsupportedTargetLookupError,
    UpstreamServiceError,
)
from ipgeo.logger import logger

# First match wins, so subclasses must precede their bases.
LOOKUP_ERROR_RESPONSES: tuple[tuple[type[IpLookupError], int, str], ...] = (
    (UnknownProviderError, status.HTTP_400_BAD_REQUEST, "invalid_provider"),
    (NoProviderError, status.HTTP_400_BAD_REQUEST, "invalid_provider"),
    (InvalidIpError, status.HTTP_400_BAD_REQUEST, "invalid_ip"),
    (UnsupportedTargetLookupError, status.HTTP_400_BAD_REQUEST, "unsupported_target"),
    (ExhaustedError, status.HTTP_502_BAD_GATEWAY, "upstream_error"),
    (UpstreamServiceError, status.HTTP_502_BAD_GATEWAY, "upstream_error"),
)


def provider_names_from_request(request: Request) -> str | None:
    """Provider names from the `providers` query parameter, with any API keys removed.

    This is the only form in which providers appear in logs and error bodies.
    """
    raw = request.query_params.get("providers")
    if not raw:
        return None
    names = [part.split()[0] for part in raw.split(",") if part.strip()]
    return ",".join(names) or None


def _error_response(request: Request, status_code: int, code: str, message: str, **extra: Any) -> JSONResponse:
    content = {"code": code, "message": message, "provider": provider_names_from_request(request), **extra}
    return JSONResponse(status_code=status_code, content=content)


def _validation_error_body(errors: list[dict[str, Any]]) -> tuple[str, str]:
    """Reduce validation errors to a stable (code, message) pair.

    Raw pydantic messages are not exposed; only the names of the offending
    parameters are.
    """
    fields = [str(error["loc"][-1]) for error in errors if error.get("loc")]
    if "ip" in fields:
        return "invalid_ip", "The supplied IP address is not a valid IPv4 or IPv6 address."
    if not fields:
        return "invalid_request", "Invalid request parameters"
    return "invalid_request", f"Invalid request parameters: {', '.join(sorted(set(fields)))}"


async def validation_exception_handler(
    request: Request, exc: ValidationError | RequestValidationError
) -> JSONResponse:
    """Turn query validation failures, from FastAPI or from IPLookupRequest itself, into 400s."""
    errors = list(exc.errors())
    code, message = _validation_error_body(errors)
    logger.info(
        "Rejected invalid request "
        f"path={request.url.path} method={request.method} "
        f"provider={provider_names_from_request(request)} code={code} "
        f"fields={[error.get('loc') for error in errors]}"
    )
    return _error_response(request, status.HTTP_400_BAD_REQUEST, code, message)


async def lookup_exception_handler(request: Request, exc: IpLookupError) -> JSONResponse:
    """Map lookup errors to their HTTP status and error code."""
    status_code, code = status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"
    for error_type, mapped_status, mapped_code in LOOKUP_ERROR_RESPONSES:
        if isinstance(exc, error_type):
            status_code, code = mapped_status, mapped_code
            break

    summary = (
        f"path={request.url.path} method={request.method} ip={request.query_params.get('ip')} "
        f"provider={provider_names_from_request(request)} code={code} error={exc}"
    )
    extra: dict[str, Any] = {}
    if isinstance(exc, ExhaustedError):
        extra["attempts"] = exc.attempts
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Lookup failed upstream {summary}", exc_info=exc)
    else:
        logger.error(f"Lookup rejected {summary}")
    return _error_response(request, status_code, code, str(exc), **extra)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors to return a structured 500 response."""
    logger.exception(
        "Unhandled exception while processing request: "
        f"{exc!r} path={request.url.path} method={request.method} "
        f"provider={provider_names_from_request(request)}"
    )
    return _error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred while processing the request.",
    )
