"""
Shared plumbing for external REST sources.

Every outgoing call is rate limited, bounded by a timeout and logged with its
source and method. Failures that the caller may want to tolerate come back as
an incomplete ``PartialResult``; hard client errors (4xx) raise.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from spacebio.constants import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT
from spacebio.exceptions import ExternalServiceError

logger = logging.getLogger("spacebio.data_sources")

_BODY_PREVIEW = 200


class RetryConfig(BaseModel):
    """How a failed attempt is repeated.

    ``max_retries`` defaults to zero: a failed call is reported to the caller,
    who may re-invoke it.
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = 1.0  # seconds
    max_delay: float = 30.0  # seconds
    backoff_factor: float = 2.0
    retryable_status_codes: set[int] = {429, 500, 502, 503, 504}


class RateLimitConfig(BaseModel):
    requests_per_second: float = 5.0
    burst: int = 10


class ClientConfig(BaseModel):
    retry: RetryConfig = RetryConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
    timeout_seconds: float = DEFAULT_TIMEOUT


class TokenBucketRateLimiter:
    """Async token bucket: ``burst`` calls pass at once, then one per 1/rate s."""

    def __init__(self, config: RateLimitConfig):
        self.rate = config.requests_per_second
        self.capacity = config.burst
        self.tokens = float(config.burst)
        self.updated_at = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self.tokens = min(self.capacity, self.tokens + (now - self.updated_at) * self.rate)
        self.updated_at = now

    async def acquire(self) -> None:
        async with self._lock:
            self._refill()
            if self.tokens >= 1.0:
                self.tokens -= 1.0
                return
            delay = (1.0 - self.tokens) / self.rate
            logger.debug("Rate limit reached, waiting %.2fs", delay)
            await asyncio.sleep(delay)
            self.tokens = 0.0
            self.updated_at = time.monotonic()


class RequestContext(BaseModel):
    """Labels attached to a request for log lines."""

    source: str  # e.g. "nasa"
    method: str  # e.g. "search_publications"
    params: dict[str, Any] = {}

    @property
    def label(self) -> str:
        return f"{self.source}.{self.method}"


class DataSourceError(ExternalServiceError):
    """An external source failed or rejected the request."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(source, message)


class PartialResult(BaseModel):
    """A payload that may be missing because the call did not complete.

    Callers check ``is_complete`` before trusting ``data``.
    """

    data: Any
    is_complete: bool = True
    errors: list[str] = []
    elapsed_seconds: float = 0.0


class BaseClient(ABC):
    """
    Base for async REST clients.

    Subclasses name themselves via ``_source_name`` and build their typed
    methods on ``_rest_get``. Use as an async context manager, or call
    ``close()`` when done.
    """

    def __init__(
        self, config: ClientConfig | None = None, max_retries: int | None = None
    ):
        config = config or ClientConfig()
        if max_retries is not None:
            retry = config.retry.model_copy(update={"max_retries": max_retries})
            config = config.model_copy(update={"retry": retry})
        self.config = config
        self.rate_limiter = TokenBucketRateLimiter(config.rate_limit)
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str: ...

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            )
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    def _backoff(self, attempt: int) -> float:
        retry = self.config.retry
        return min(retry.base_delay * retry.backoff_factor**attempt, retry.max_delay)

    async def _attempt(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
        ctx: RequestContext,
    ) -> Any:
        """Send one request and decode its JSON body.

        Raises DataSourceError; ``status_code`` tells the caller whether the
        status is worth retrying.
        """
        await self.rate_limiter.acquire()
        session = await self._get_session()
        send = session.get if method.upper() == "GET" else session.post
        resp = await send(url, params=params, headers=headers)

        if resp.status >= 400:
            body = await resp.text()
            raise DataSourceError(
                ctx.source,
                f"HTTP {resp.status}: {body[:_BODY_PREVIEW]}",
                status_code=resp.status,
            )
        return await resp.json()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> PartialResult:
        """
        Make a rate-limited request, retrying within the configured budget.

        Non-retryable 4xx responses raise DataSourceError. Timeouts,
        connection errors and retryable statuses that outlast the budget
        return an incomplete PartialResult carrying the last error.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")
        retry = self.config.retry
        start = time.monotonic()
        failure = ""

        for attempt in range(retry.max_retries + 1):
            if attempt:
                await asyncio.sleep(self._backoff(attempt - 1))
            logger.info(
                "%s %s [%s] attempt %d", method.upper(), url, ctx.label, attempt + 1
            )

            try:
                data = await self._attempt(method, url, params, headers, ctx)
            except DataSourceError as e:
                if e.status_code not in retry.retryable_status_codes:
                    raise
                failure = str(e)
                logger.warning("%s answered %s", ctx.label, e.message)
            except asyncio.TimeoutError:
                failure = f"Timeout after {time.monotonic() - start:.1f}s"
                logger.warning("%s timed out on attempt %d", ctx.label, attempt + 1)
            except aiohttp.ClientError as e:
                failure = f"Connection error: {e}"
                logger.warning("%s connection error: %s", ctx.label, e)
            else:
                elapsed = time.monotonic() - start
                logger.info("%s succeeded in %.2fs", ctx.label, elapsed)
                return PartialResult(data=data, elapsed_seconds=elapsed)

        elapsed = time.monotonic() - start
        logger.error("%s gave up after %.1fs: %s", ctx.label, elapsed, failure)
        return PartialResult(
            data=None, is_complete=False, errors=[failure], elapsed_seconds=elapsed
        )

    async def _rest_get(
        self,
        url: str,
        params: dict[str, Any],
        *,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> PartialResult:
        return await self._request(
            "GET", url, params=params, headers=headers, context=context
        )
