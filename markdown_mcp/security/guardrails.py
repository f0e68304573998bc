"""Input validation for page extraction requests."""

from typing import Optional, Tuple
from urllib.parse import urlparse

from markdown_mcp.utils.config import settings

ALLOWED_SCHEMES = ("http", "https")


def validate_url(url: str) -> Tuple[bool, Optional[str]]:
    """Return (is_valid, reason).  Only absolute http(s) URLs are accepted."""
    if not url or not url.strip():
        return False, "URL is empty."
    if len(url) > settings.max_url_length:
        return False, f"URL exceeds max length ({settings.max_url_length} chars)."
    parsed = urlparse(url.strip())
    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return False, f"Unsupported URL scheme: {parsed.scheme or '(none)'}"
    if not parsed.netloc:
        return False, "URL has no host."
    return True, None


def validate_options(timeout: int, wait_for_selector: Optional[str] = None) -> Tuple[bool, Optional[str]]:
    """Validate the rendering options that accompany a URL."""
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
        return False, f"Timeout must be a positive number of milliseconds, got {timeout!r}."
    if wait_for_selector is not None and not wait_for_selector.strip():
        return False, "waitForSelector must not be blank."
    return True, None
