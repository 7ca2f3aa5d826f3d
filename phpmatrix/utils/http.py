"""
Async HTTP access for phpmatrix.

:class:`HTTPClient` wraps an ``httpx.AsyncClient`` (HTTP/2 enabled) and
adds the retry policy used when fetching the release catalog:

- transport failures (timeouts, refused connections) and 5xx responses
  are retried with exponential backoff and jitter;
- ``429 Too Many Requests`` waits for ``Retry-After`` and is retried a
  bounded number of times, without consuming a regular attempt;
- any other 4xx response fails at once.

Every failure surfaces as :class:`~phpmatrix.exceptions.NetworkError`.
"""

from __future__ import annotations

import httpx
import random
import asyncio
from typing import Any, Optional

from phpmatrix.utils.logger import get_logger
from phpmatrix.__version__ import __version__
from phpmatrix.exceptions import NetworkError
from phpmatrix.constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_MAX_RETRIES,
    USER_AGENT_TEMPLATE,
)

logger = get_logger("http")

#: Longest ``Retry-After`` wait honoured, in seconds.
MAX_RETRY_AFTER = 60


def _retry_after(response: httpx.Response) -> float:
    """Seconds to wait before retrying a 429 response (defaults to 1)."""
    raw = response.headers.get("Retry-After", "")
    try:
        delay = float(raw)
    except ValueError:
        # HTTP-date values are not worth parsing for a single catalog request
        return 1.0
    return min(max(delay, 0.0), MAX_RETRY_AFTER)


def _backoff(attempt: int) -> float:
    """Delay before retry number ``attempt + 1``."""
    return (2**attempt) + random.uniform(0.0, 0.3)


class HTTPClient:
    """Asynchronous JSON-over-HTTP client with retries.

    Use it as an async context manager so the connection pool is closed.

    Args:
        timeout: Per-request timeout in seconds.
        max_retries: Extra attempts after the first one fails.
        verify_ssl: Verify TLS certificates.
        user_agent: ``User-Agent`` header; defaults to ``phpmatrix/<version>``.

    Example:
        >>> async with HTTPClient(timeout=10) as client:
        ...     payload = await client.get_json("https://php.watch/api/v1/versions")
    """

    def __init__(
        self,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        user_agent: Optional[str] = None,
    ) -> None:
        self.timeout = timeout
        self.max_retries = max_retries
        self.verify_ssl = verify_ssl
        self.user_agent = user_agent or USER_AGENT_TEMPLATE.format(version=__version__)

        self._client: Optional[httpx.AsyncClient] = None
        self._max_429_retries: int = 5

    async def __aenter__(self) -> "HTTPClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> None:
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(
            http2=True,
            timeout=httpx.Timeout(self.timeout),
            verify=self.verify_ssl,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the connection pool; safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            await client.aclose()

    async def _request_with_retry(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        await self._ensure_client()
        assert self._client is not None

        url = url.strip().strip("\"'")
        attempts = self.max_retries + 1
        attempt = 0
        rate_limited = 0
        cause: Optional[BaseException] = None
        last_status: Optional[int] = None

        while attempt < attempts:
            try:
                response = await self._client.request(method, url, **kwargs)
            except httpx.TransportError as exc:
                cause = exc
                last_status = None
                kind = "timeout" if isinstance(exc, httpx.TimeoutException) else "network error"
                logger.warning("Request %s (%d/%d): %s", kind, attempt + 1, attempts, url)
            else:
                status = response.status_code

                if status == 429:
                    rate_limited += 1
                    if rate_limited > self._max_429_retries:
                        raise NetworkError(
                            f"Rate limit exceeded after {self._max_429_retries} retries",
                            url=url,
                            status_code=429,
                        )
                    delay = _retry_after(response)
                    logger.warning(
                        "Rate limited by %s, waiting %gs (%d/%d)",
                        url,
                        delay,
                        rate_limited,
                        self._max_429_retries,
                    )
                    await asyncio.sleep(delay)
                    continue

                if status == 404:
                    raise NetworkError(f"Resource not found: {url}", url=url, status_code=404)

                if 400 <= status < 500:
                    raise NetworkError(
                        f"HTTP {status} error for {url}",
                        url=url,
                        status_code=status,
                        response_body=response.text,
                    )

                if status < 500:
                    return response

                cause = None
                last_status = status
                logger.warning("HTTP %d (%d/%d): %s", status, attempt + 1, attempts, url)

            attempt += 1
            if attempt < attempts:
                delay = _backoff(attempt - 1)
                logger.debug("Retrying %s in %.2fs", url, delay)
                await asyncio.sleep(delay)

        raise NetworkError(
            f"Request failed after {attempts} attempts: {url}",
            url=url,
            status_code=last_status,
        ) from cause

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET ``url`` with the retry policy."""
        return await self._request_with_retry("GET", url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """GET ``url`` and decode a JSON object or array.

        Raises:
            NetworkError: The request failed, or the body is not a JSON
                object or array.
        """
        response = await self.get(url, **kwargs)

        try:
            data = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"Invalid JSON response from {url}",
                url=url,
                response_body=response.text,
            ) from exc

        if not isinstance(data, (dict, list)):
            raise NetworkError(
                f"Expected JSON object or array from {url}",
                url=url,
                response_body=response.text,
            )
        return data
