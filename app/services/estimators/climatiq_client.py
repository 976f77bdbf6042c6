"""
Thin async client for the Climatiq estimation API.

Each request is classified into the estimator's error taxonomy so callers never
see an httpx exception.
"""

import logging
from typing import Any

import httpx

from app.services.estimators.exceptions import (
    EstimationError,
    ExternalAuthError,
    ExternalServiceError,
    RateLimited,
    Timeout,
)
from app.utils.constants import CLIMATIQ_BASE_URL, CLIMATIQ_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class ClimatiqClient:
    """HTTP client for the Climatiq ``/estimate`` and factor search endpoints."""

    def __init__(
        self,
        api_key: str,
        base_url: str = CLIMATIQ_BASE_URL,
        timeout: float = CLIMATIQ_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_key: Climatiq bearer credential
            base_url: API root, e.g. https://api.climatiq.io/data/v1
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=self.transport,
        )

    async def estimate(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        POST a payload to ``/estimate``.

        Returns:
            Decoded JSON body of a 2xx response

        Raises:
            EstimationError: classified failure of this single attempt
        """
        logger.debug(f"Climatiq estimate request: {payload}")
        return await self._send("POST", "/estimate", json=payload)

    async def search_factors(self, query: str, limit: int = 10) -> list[dict[str, Any]]:
        """Search emission factors by free-text query."""
        body = await self._send(
            "GET", "/emission_factors", params={"query": query, "limit": limit}
        )
        return body.get("results", [])

    async def _send(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.warning(f"Climatiq request to {path} timed out: {e}")
            raise Timeout() from e
        except httpx.HTTPError as e:
            logger.error(f"Climatiq transport error on {path}: {e}")
            raise ExternalServiceError(f"External API error: {e}") from e

        if response.is_success:
            try:
                return response.json()
            except ValueError as e:
                raise ExternalServiceError(
                    "External API error: malformed response body",
                    upstream_status=response.status_code,
                ) from e

        logger.info(
            f"Climatiq API error response ({response.status_code}): {response.text}"
        )
        raise classify_error_response(response)


def classify_error_response(response: httpx.Response) -> EstimationError:
    """Map a non-2xx Climatiq response onto the estimator's error taxonomy."""
    status_code = response.status_code

    if status_code in (401, 403):
        return ExternalAuthError()

    if status_code == 429:
        return RateLimited(retry_after=_parse_retry_after(response))

    try:
        message = response.json().get("message") or "External API error"
    except (ValueError, AttributeError):
        message = "External API error"
    return ExternalServiceError(
        f"External API error: {message}", upstream_status=status_code
    )


def _parse_retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        # HTTP-date form is not interpreted
        return None
