class AppError(Exception):
    """Base application error for the IP geolocation service."""


class IpLookupError(AppError):
    """Base error for public IP lookup failures."""


class UnknownProviderError(IpLookupError):
    """Raised when a provider name does not match any known provider."""


class NoProviderError(IpLookupError):
    """Raised when a lookup is requested with an empty provider list."""


class InvalidIpError(IpLookupError):
    """Raised when the supplied target IP address is syntactically invalid."""


class UnsupportedTargetLookupError(IpLookupError):
    """Raised when target-aware results are required but no provider supports them."""


class UpstreamServiceError(IpLookupError):
    """Base error for a single failed provider round-trip."""


class TooManyRequestsError(UpstreamServiceError):
    """Raised when the provider answers HTTP 429."""


class RequestStatusError(UpstreamServiceError):
    """Raised when the provider answers with any other non-200 status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(UpstreamServiceError):
    """Raised when the request never completed (DNS, connect, timeout)."""


class ParseError(UpstreamServiceError):
    """Raised when the provider body is not the JSON shape we expect."""


class ExhaustedError(IpLookupError):
    """Raised when every allowed provider attempt failed.

    Carries the last underlying provider error and the number of attempts made.
    """

    def __init__(self, last_error: UpstreamServiceError | None, attempts: int) -> None:
        super().__init__(f"All lookup attempts failed after {attempts} attempt(s): {last_error}")
        self.last_error = last_error
        self.attempts = attempts


class CacheIoError(AppError):
    """Raised when the response cache cannot be written."""
