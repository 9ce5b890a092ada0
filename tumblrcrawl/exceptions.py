"""Custom exceptions for tumblrcrawl."""
from typing import Optional


class TumblrCrawlError(Exception):
    """Base class for every error raised by the crawl engine."""


class ConfigurationError(TumblrCrawlError):
    """Raised before any network activity when a crawl is misconfigured."""


class TransportError(TumblrCrawlError):
    """Raised when an HTTP fetch fails due to network/transport errors or a non-2xx status."""

    def __init__(self, url: str, original: Optional[Exception] = None, status_code: Optional[int] = None):
        self.url = url
        self.original = original
        self.status_code = status_code
        if original is not None:
            detail = str(original)
        else:
            detail = f"HTTP status {status_code}"
        super().__init__(f"HTTP fetch failed for {url}: {detail}")


class ExtractionError(TumblrCrawlError):
    """Raised when a fetched document does not have the expected structure."""

    def __init__(self, reason: str, url: Optional[str] = None):
        self.reason = reason
        self.url = url
        if url:
            super().__init__(f"{reason} ({url})")
        else:
            super().__init__(reason)


class LoginError(TumblrCrawlError):
    """Raised when the login form is rejected by the remote site."""
