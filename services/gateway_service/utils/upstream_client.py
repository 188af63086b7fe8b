"""
Upstream HTTP Client
Forwards gateway requests to the backend services

Connection pooling follows the usual httpx pattern:
- Single shared AsyncClient initialized at app startup
- Explicit limits so a stalled backend cannot exhaust the gateway
- Every forward bounded by a total deadline, retry included
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Dict, Optional

import httpx
import structlog

from services.gateway_service.upstreams import UpstreamTable, UpstreamTarget

logger = structlog.get_logger(__name__)


class UpstreamError(Exception):
    """Transport-level failure talking to a backend"""

    status_code = 502

    def __init__(self, target: UpstreamTarget, message: str):
        super().__init__(message)
        self.target = target
        self.message = message

    @property
    def resource(self) -> str:
        return self.target.resource.value


class UpstreamUnavailableError(UpstreamError):
    """Backend refused, reset or garbled the connection"""
    status_code = 502


class UpstreamTimeoutError(UpstreamError):
    """Backend did not answer within the deadline, or no pooled connection was free"""
    status_code = 503


@dataclass(frozen=True)
class UpstreamResponse:
    """Backend answer, relayed verbatim"""
    status_code: int
    content: bytes
    content_type: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class UpstreamClient:
    """
    HTTP client for the gateway's backends.

    Lifecycle:
        - Call start() during app startup (FastAPI lifespan)
        - Call stop() during app shutdown
        - forward() before start() lazily starts the client
    """

    RETRY_DELAY = 0.1             # Pause before the single retry
    MAX_CONNECTIONS = 100
    MAX_KEEPALIVE = 20
    KEEPALIVE_EXPIRY = 5.0

    def __init__(
        self,
        upstreams: UpstreamTable,
        timeout: float = 5.0,
        connect_timeout: float = 2.0,
        retries: int = 1,
        max_connections: int = MAX_CONNECTIONS,
        max_keepalive: int = MAX_KEEPALIVE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if retries not in (0, 1):
            raise ValueError("retries must be 0 or 1")
        self.upstreams = upstreams
        self.timeout = timeout
        self.connect_timeout = min(connect_timeout, timeout)
        self.retries = retries
        self.max_connections = max_connections
        self.max_keepalive = max_keepalive
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "UpstreamClient":
        return cls(
            settings.upstream_table(),
            timeout=settings.upstream_timeout,
            connect_timeout=settings.upstream_connect_timeout,
            retries=settings.upstream_retries,
            max_connections=settings.upstream_max_connections,
            max_keepalive=settings.upstream_max_keepalive,
            transport=transport,
        )

    @property
    def started(self) -> bool:
        return self._client is not None

    async def start(self):
        """
        Initialize the shared HTTP client.
        Call this during FastAPI app startup via lifespan.
        """
        if self._client is not None:
            logger.warning("UpstreamClient already started")
            return

        limits = httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive,
            keepalive_expiry=self.KEEPALIVE_EXPIRY,
        )
        # Pool waits count against the same deadline as the request itself
        timeout = httpx.Timeout(self.timeout, connect=self.connect_timeout)

        self._client = httpx.AsyncClient(limits=limits, timeout=timeout, transport=self._transport)

        logger.info(
            "UpstreamClient started",
            upstreams={name: target.url for name, target in self.upstreams.items()},
            timeout=self.timeout,
            retries=self.retries,
            max_connections=self.max_connections,
        )

    async def stop(self):
        """
        Close the HTTP client and release resources.
        Call this during FastAPI app shutdown via lifespan.
        """
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("UpstreamClient stopped")

    async def forward(self, target: UpstreamTarget) -> UpstreamResponse:
        """
        GET the target's resource path and return whatever the backend said.

        Non-2xx answers are returned, not raised. Only transport failures
        raise, as UpstreamError subclasses.
        """
        if self._client is None:
            await self.start()

        started = time.perf_counter()
        try:
            return await asyncio.wait_for(self._forward_with_retry(target), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Upstream deadline exceeded",
                resource=target.resource.value,
                url=target.url,
                timeout=self.timeout,
                duration=round(time.perf_counter() - started, 4),
            )
            raise UpstreamTimeoutError(
                target, f"{target.resource.value} service did not respond within {self.timeout}s"
            )

    async def _forward_with_retry(self, target: UpstreamTarget) -> UpstreamResponse:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._send(target, attempt)
            except UpstreamUnavailableError as e:
                # Only refused/reset connections are retried: nothing reached the backend
                if attempt > self.retries or not isinstance(e.__cause__, httpx.ConnectError):
                    raise
                logger.info(
                    "Retrying upstream request",
                    resource=target.resource.value,
                    url=target.url,
                    attempt=attempt + 1,
                )
                await asyncio.sleep(self.RETRY_DELAY)

    async def _send(self, target: UpstreamTarget, attempt: int) -> UpstreamResponse:
        started = time.perf_counter()
        try:
            response = await self._client.get(target.url)
        except httpx.PoolTimeout as e:
            logger.error("Connection pool exhausted", resource=target.resource.value, url=target.url)
            raise UpstreamTimeoutError(
                target, f"{target.resource.value} service temporarily unavailable - connection pool exhausted"
            ) from e
        except httpx.TimeoutException as e:
            logger.warning("Upstream timed out", resource=target.resource.value, url=target.url, attempt=attempt)
            raise UpstreamTimeoutError(
                target, f"{target.resource.value} service did not respond within {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            logger.warning(
                "Upstream request failed",
                resource=target.resource.value,
                url=target.url,
                attempt=attempt,
                error=str(e) or type(e).__name__,
            )
            raise UpstreamUnavailableError(
                target, f"Failed to connect to {target.resource.value} service"
            ) from e

        logger.info(
            "Upstream responded",
            resource=target.resource.value,
            url=target.url,
            status_code=response.status_code,
            attempt=attempt,
            duration=round(time.perf_counter() - started, 4),
        )
        return UpstreamResponse(
            status_code=response.status_code,
            content=response.content,
            content_type=response.headers.get("content-type"),
        )

    async def probe(self, target: UpstreamTarget, timeout: float) -> str:
        """Check one backend's /health: healthy, unhealthy or unreachable"""
        if self._client is None:
            await self.start()
        try:
            response = await self._client.get(target.health_url, timeout=timeout)
        except httpx.HTTPError:
            return "unreachable"
        return "healthy" if response.status_code == 200 else "unhealthy"

    async def probe_all(self, timeout: float) -> Dict[str, str]:
        """Probe every backend concurrently"""
        names = list(self.upstreams)
        results = await asyncio.gather(*(self.probe(self.upstreams[name], timeout) for name in names))
        return dict(zip(names, results))
