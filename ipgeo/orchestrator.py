from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from ipaddress import ip_address

from ipgeo.cache import CacheEntry, ResponseCache, utc_now
from ipgeo.clients.base import BaseIPLookupClient
from ipgeo.config import Settings, get_settings
from ipgeo.errors import (
    CacheIoError,
    ExhaustedError,
    InvalidIpError,
    NoProviderError,
    UnsupportedTargetLookupError,
    UpstreamServiceError,
)
from ipgeo.logger import logger
from ipgeo.lookup_service import LookupService
from ipgeo.models.common import LookupResponse
from ipgeo.models.request_models import ProviderKind
from ipgeo.registry import DEFAULT_PROVIDERS, IpLookupProviderFactory


class LookupOrchestrator:
    """Drives cached, fallback lookups across an ordered list of providers.

    A fresh cache entry short-circuits everything. Otherwise providers are tried
    strictly in the given order, one at a time, wrapping around the list while
    the retry budget allows, and the first success wins. Only successes are
    written to the cache.
    """

    def __init__(
        self,
        cache: ResponseCache,
        provider_factory: Callable[[ProviderKind], BaseIPLookupClient] | None = None,
        ttl: timedelta = timedelta(seconds=300),
        timeout_seconds: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
        default_retry_budget: int | None = None,
    ) -> None:
        self._cache = cache
        self._provider_factory = provider_factory or IpLookupProviderFactory()
        self._ttl = ttl
        self._timeout_seconds = timeout_seconds
        self._clock = clock
        self._default_retry_budget = default_retry_budget

    @classmethod
    def from_settings(cls, settings: Settings) -> "LookupOrchestrator":
        return cls(
            cache=ResponseCache(settings.cache_path),
            ttl=timedelta(seconds=settings.cache_ttl_seconds),
            timeout_seconds=settings.http_timeout_seconds,
            default_retry_budget=settings.default_retry_budget,
        )

    def lookup(
        self,
        providers: Sequence[ProviderKind] | None = None,
        retry_budget: int | None = None,
        use_cache: bool = True,
    ) -> LookupResponse:
        """Look up the caller's own public IP."""
        if providers is None:
            providers = DEFAULT_PROVIDERS
        return self._run(list(providers), None, retry_budget, use_cache)

    def lookup_target(
        self,
        providers: Sequence[ProviderKind] | None,
        target_ip: str,
        retry_budget: int | None = None,
        use_cache: bool = False,
        require_target: bool = False,
    ) -> LookupResponse:
        """Look up a third-party IP.

        Providers that cannot look up targets perform a self lookup instead,
        unless `require_target` is set, in which case they are skipped.
        """
        try:
            target = str(ip_address(target_ip.strip()))
        except ValueError as exc:
            raise InvalidIpError(f"Not a valid IPv4 or IPv6 address: {target_ip!r}") from exc

        if providers is None:
            providers = DEFAULT_PROVIDERS
        providers = list(providers)
        if require_target and providers:
            providers = [kind for kind in providers if self._provider_factory(kind).supports_target()]
            if not providers:
                raise UnsupportedTargetLookupError("None of the given providers support target lookups")
        return self._run(providers, target, retry_budget, use_cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _run(
        self,
        providers: list[ProviderKind],
        target: str | None,
        retry_budget: int | None,
        use_cache: bool,
    ) -> LookupResponse:
        if not providers:
            raise NoProviderError("At least one provider is required")
        if retry_budget is None:
            retry_budget = self._default_retry_budget
        if retry_budget is not None and retry_budget < 0:
            raise ValueError("retry_budget must be a non-negative integer")

        if use_cache:
            cached = self._read_fresh(target)
            if cached is not None:
                return cached

        max_attempts = len(providers) + (retry_budget or 0)
        last_error: UpstreamServiceError | None = None

        for attempt in range(max_attempts):
            kind = providers[attempt % len(providers)]
            service = LookupService(self._provider_factory(kind), timeout_seconds=self._timeout_seconds)
            logger.info(f"Performing lookup provider={kind} ip={target} attempt={attempt + 1}/{max_attempts}")
            try:
                response = service.make_request(target)
            except UpstreamServiceError as exc:
                logger.warning(f"Lookup failed provider={kind} attempt={attempt + 1}/{max_attempts} error={exc!r}")
                last_error = exc
                continue

            if use_cache:
                self._store(response, target)
            return response

        raise ExhaustedError(last_error, max_attempts) from last_error

    def _read_fresh(self, target: str | None) -> LookupResponse | None:
        entry = self._cache.read()
        if entry is None or entry.target != target:
            return None
        if not self._cache.is_fresh(entry, self._clock(), self._ttl):
            logger.debug(f"Cached lookup expired retrieved_at={entry.retrieved_at.isoformat()}")
            return None
        logger.info(f"Serving cached lookup ip={entry.response.ip} provider={entry.response.provider}")
        return entry.response

    def _store(self, response: LookupResponse, target: str | None) -> None:
        entry = CacheEntry(response=response, retrieved_at=self._clock(), target=target)
        try:
            self._cache.write(entry)
        except CacheIoError as exc:
            logger.warning(f"Lookup succeeded but could not be cached error={exc}")


def get_orchestrator() -> LookupOrchestrator:
    """Dependency to provide a LookupOrchestrator configured from settings."""
    return LookupOrchestrator.from_settings(get_settings())


def lookup(
    providers: Sequence[ProviderKind] | None = None,
    retry_budget: int | None = None,
    use_cache: bool = True,
) -> LookupResponse:
    """Look up this machine's public IP with the configured cache and timeout."""
    return get_orchestrator().lookup(providers, retry_budget, use_cache)


def lookup_target(
    providers: Sequence[ProviderKind] | None,
    target_ip: str,
    retry_budget: int | None = None,
    use_cache: bool = False,
    require_target: bool = False,
) -> LookupResponse:
    """Look up a third-party IP with the configured cache and timeout."""
    return get_orchestrator().lookup_target(providers, target_ip, retry_budget, use_cache, require_target)
