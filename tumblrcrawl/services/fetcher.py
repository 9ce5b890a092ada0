from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Union

from bs4 import BeautifulSoup

from tumblrcrawl.services.http_service import HttpService

logger = logging.getLogger(__name__)

Document = BeautifulSoup


class DocumentFetcher(Protocol):
    """Fetch a URL and return either a parsed document or the raw body.

    This is intentionally small so the crawl engine can be driven by fakes
    in tests and by other transports later.
    """

    def fetch(
        self,
        url: str,
        *,
        headers: Optional[dict] = None,
        method: str = "GET",
        data: Optional[dict] = None,
        raw: bool = False,
        tolerate_status: bool = False,
    ) -> Union[Document, bytes]: ...


class HttpDocumentFetcher:
    def __init__(
        self,
        http_service: HttpService,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._http_service = http_service
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def fetch(
        self,
        url: str,
        *,
        headers: Optional[dict] = None,
        method: str = "GET",
        data: Optional[dict] = None,
        raw: bool = False,
        tolerate_status: bool = False,
    ) -> Union[Document, bytes]:
        response = self._http_service.fetch(
            url,
            method=method,
            headers=headers,
            data=data,
            tolerate_status=tolerate_status,
            decode_text=not raw,
        )
        logger.debug("Fetched %s -> status %s (%s)", url, response.status_code, response.content_type)
        if raw:
            return response.content
        return self._soup_factory(response.text)
