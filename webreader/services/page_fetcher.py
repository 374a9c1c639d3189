"""Single-page HTTP fetching."""

import asyncio
import time

import httpx
import logfire

from webreader.constants import (
    DEFAULT_FETCH_MAX_BYTES,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_FETCH_USER_AGENT,
)


class PageFetchError(Exception):
    """Raised when the target page cannot be fetched."""

    pass


async def _download(
    client: httpx.AsyncClient, url: str, max_bytes: int
) -> tuple[httpx.Response, bytes]:
    """Stream the body of url, stopping after max_bytes."""
    body = bytearray()
    async with client.stream("GET", url) as response:
        response.raise_for_status()
        async for chunk in response.aiter_bytes():
            body.extend(chunk)
            if len(body) >= max_bytes:
                if len(body) > max_bytes:
                    logfire.warn(
                        "Page body exceeds size limit, keeping the start",
                        url=url,
                        max_bytes=max_bytes,
                    )
                break
    return response, bytes(body[:max_bytes])


def _decode(response: httpx.Response, body: bytes) -> str | bytes:
    """Decode with the charset from Content-Type, if the server sent one.

    Without one the raw bytes are returned so the HTML parser can pick the
    encoding from the document itself (BOM or <meta charset>).
    """
    charset = response.charset_encoding
    if not charset:
        return body
    try:
        return body.decode(charset, errors="replace")
    except LookupError:
        return body


def _log_failure(url: str, error: Exception, start_time: float) -> None:
    logfire.warn(
        "Page fetch failed",
        url=url,
        error=str(error),
        error_type=type(error).__name__,
        response_time_ms=(time.time() - start_time) * 1000,
    )


async def fetch_page(
    url: str,
    *,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_FETCH_USER_AGENT,
    max_bytes: int = DEFAULT_FETCH_MAX_BYTES,
) -> str | bytes:
    """
    Fetch one URL and return its body.

    Redirects are followed. The whole exchange (connect, redirects, headers
    and body) must finish within timeout_seconds. Bodies longer than
    max_bytes are cut. Network failures, timeouts, invalid URLs and
    non-success statuses all raise PageFetchError; nothing is retried.

    Args:
        url: Page URL
        timeout_seconds: Deadline for the whole request
        user_agent: User-Agent header value
        max_bytes: Largest body read

    Returns:
        The body as text when the response declares a charset, otherwise
        the raw bytes
    """
    start_time = time.time()
    try:
        async with httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        ) as client:
            response, body = await asyncio.wait_for(
                _download(client, url, max_bytes), timeout=timeout_seconds
            )
    except asyncio.TimeoutError as e:
        _log_failure(url, e, start_time)
        raise PageFetchError(
            f"Failed to fetch {url}: timed out after {timeout_seconds:g}s"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        _log_failure(url, e, start_time)
        raise PageFetchError(f"Failed to fetch {url}: {e}") from e

    logfire.info(
        "Page fetched",
        url=url,
        status_code=response.status_code,
        content_length=len(body),
        response_time_ms=(time.time() - start_time) * 1000,
    )
    return _decode(response, body)
