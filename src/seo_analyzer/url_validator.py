"""
URL Validator

Live reachability checks for links found in content. Each check is a
single HEAD request bounded by a deadline; any failure is folded into an
"invalid" result instead of raising.

Usage:
    async with URLValidator() as validator:
        result = await validator.validate("https://docs.defang.io")
        results = await validator.validate_many(urls)
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional, Sequence

import httpx

from .approved_urls import is_approved_url, is_brand_domain, is_valid_url
from .exceptions import InvalidRequestError
from .models import URLStatus, URLValidationResult
from src.utils.config import get_settings

logger = logging.getLogger(__name__)


def require_valid_url(url: Optional[str]) -> str:
    """
    Check that url is present and parses as an absolute URL.

    Raises:
        InvalidRequestError: url is missing or malformed
    """
    if not url or not isinstance(url, str):
        raise InvalidRequestError("URL is required", field="url")
    url = url.strip()
    if not is_valid_url(url):
        raise InvalidRequestError("Invalid URL format", field="url")
    return url


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class URLValidator:
    """
    HEAD-request validator sharing one httpx client.

    Args:
        timeout: Per-URL deadline in seconds
        concurrency: Max in-flight requests for validate_many()
        follow_redirects: Follow 3xx responses to their target
        user_agent: User-Agent header sent with each request
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        concurrency: Optional[int] = None,
        follow_redirects: Optional[bool] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.URL_VALIDATION_TIMEOUT
        self.concurrency = max(1, concurrency or settings.URL_VALIDATION_CONCURRENCY)
        if follow_redirects is None:
            follow_redirects = settings.URL_VALIDATION_FOLLOW_REDIRECTS

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=follow_redirects,
            headers={"User-Agent": user_agent or settings.URL_VALIDATION_USER_AGENT},
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _result(self, url: str, status: URLStatus, **kwargs) -> URLValidationResult:
        return URLValidationResult(
            url=url,
            status=status,
            is_approved_defang_url=is_approved_url(url),
            is_external=not is_brand_domain(url),
            **kwargs,
        )

    async def validate(self, url: str) -> URLValidationResult:
        """
        Validate a single URL with a HEAD request.

        2xx -> valid, 3xx -> redirect (with Location), anything else -> invalid.
        Network errors and the deadline produce an invalid result.
        """
        start = time.perf_counter()
        try:
            response = await asyncio.wait_for(self.client.head(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"URL validation timed out: {url}")
            return self._result(
                url,
                URLStatus.INVALID,
                response_time=_elapsed_ms(start),
                error=f"Request timed out after {self.timeout:g}s",
            )
        except httpx.TimeoutException as e:
            logger.warning(f"URL validation timed out: {url}: {e}")
            return self._result(
                url,
                URLStatus.INVALID,
                response_time=_elapsed_ms(start),
                error=str(e) or f"Request timed out after {self.timeout:g}s",
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"URL validation failed for {url}: {e}")
            return self._result(
                url,
                URLStatus.INVALID,
                response_time=_elapsed_ms(start),
                error=str(e) or "Unknown error",
            )
        except Exception as e:
            logger.error(f"Unexpected error validating {url}: {e}")
            return self._result(
                url,
                URLStatus.INVALID,
                response_time=_elapsed_ms(start),
                error=str(e) or "Unknown error",
            )

        elapsed = _elapsed_ms(start)
        code = response.status_code

        if 200 <= code < 300:
            return self._result(url, URLStatus.VALID, status_code=code, response_time=elapsed)

        if 300 <= code < 400:
            return self._result(
                url,
                URLStatus.REDIRECT,
                status_code=code,
                redirect_to=response.headers.get("location"),
                response_time=elapsed,
            )

        logger.debug(f"URL {url} returned HTTP {code}")
        return self._result(
            url,
            URLStatus.INVALID,
            status_code=code,
            response_time=elapsed,
            error=f"HTTP {code}",
        )

    async def validate_many(self, urls: Sequence[str]) -> List[URLValidationResult]:
        """
        Validate many URLs concurrently, bounded by the concurrency cap.

        Duplicate URLs are requested once. Results follow input order.
        """
        unique = list(dict.fromkeys(urls))
        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(url: str) -> URLValidationResult:
            async with semaphore:
                return await self.validate(url)

        results = await asyncio.gather(*(bounded(u) for u in unique))
        by_url: Dict[str, URLValidationResult] = dict(zip(unique, results))

        invalid = sum(1 for r in results if r.status == URLStatus.INVALID)
        logger.info(f"Validated {len(unique)} URLs ({invalid} invalid)")

        return [by_url[u] for u in urls]


async def validate_url(url: str) -> URLValidationResult:
    """Validate one URL with a short-lived validator."""
    async with URLValidator() as validator:
        return await validator.validate(url)


async def validate_urls(urls: Sequence[str]) -> List[URLValidationResult]:
    """Validate a batch of URLs with a short-lived validator."""
    async with URLValidator() as validator:
        return await validator.validate_many(urls)
