import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
TIMEOUT = 10  # seconds
ALLOWED_SCHEMES = {"http", "https"}

# Many blogs sit behind bot filters that reject script-like user agents.
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class FetchError(RuntimeError):
    """The page could not be retrieved (HTTP error status or transport failure)."""


def validate_url(url: str) -> None:
    """Raise ValueError unless *url* is an absolute http(s) URL."""
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise ValueError(f"Invalid URL: {exc}") from exc

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError("Invalid URL protocol. Only HTTP and HTTPS are supported.")
    if not hostname:
        raise ValueError("URL must have a valid hostname.")

    # httpx is stricter than urlparse (IDNA hosts, control characters)
    try:
        httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ValueError(f"Invalid URL: {exc}") from exc


async def fetch_url(url: str, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> str:
    """Fetch *url* with a single GET and return the response body as text.

    Redirects are followed by the client; no request is retried.

    Raises:
        ValueError: if the URL is not an absolute http/https URL.
        FetchError: on a non-success status, a transport failure, or a body
            larger than MAX_CONTENT_SIZE.
    """
    validate_url(url)

    headers = {"User-Agent": USER_AGENT}
    try:
        async with httpx.AsyncClient(
            follow_redirects=True, timeout=TIMEOUT, headers=headers, transport=transport
        ) as client:
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    raise FetchError(
                        f"Failed to fetch URL: {response.status_code} {response.reason_phrase}"
                    )

                content_length = response.headers.get("content-length")
                if content_length and content_length.isdigit() and int(content_length) > MAX_CONTENT_SIZE:
                    raise FetchError("Response body exceeds the maximum allowed size.")

                chunks = []
                total = 0
                async for chunk in response.aiter_bytes():
                    total += len(chunk)
                    if total > MAX_CONTENT_SIZE:
                        raise FetchError("Response body exceeds the maximum allowed size.")
                    chunks.append(chunk)

                encoding = response.encoding or "utf-8"
                return b"".join(chunks).decode(encoding, errors="replace")
    except httpx.InvalidURL as exc:
        raise ValueError(f"Invalid URL: {exc}") from exc
    except httpx.HTTPError as exc:
        logger.debug("Transport error fetching %s: %r", url, exc)
        raise FetchError(str(exc) or exc.__class__.__name__) from exc
