import requests
from typing import Callable, Optional

from tumblrcrawl.domain.http_response import HttpResponse
from tumblrcrawl.exceptions import TransportError


class HttpService:
    """
    HTTP client wrapper for fetching pages and images.

    Requires an http_client callable with the signature of
    ``requests.Session.request`` so tests can inject a fake and the
    session (cookies, proxy) stays outside this class.
    """

    def __init__(self, http_client: Callable, timeout: float = 30.0):
        self.http_client = http_client
        self.timeout = timeout

    def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[dict] = None,
        data: Optional[dict] = None,
        tolerate_status: bool = False,
        decode_text: bool = True,
    ) -> HttpResponse:
        """Issue a request and return status, text, Content-Type and raw bytes.

        Non-2xx responses raise TransportError unless `tolerate_status` is set.
        With `decode_text=False` the body is only kept as bytes and `text` is "".
        """
        try:
            resp = self.http_client(
                method,
                url,
                headers=headers,
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(url, e) from e

        # Extract Content-Type if response has headers; let real exceptions bubble up.
        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        response = HttpResponse(
            status_code=resp.status_code,
            text=resp.text if decode_text else "",
            content_type=ct,
            content=resp.content,
            url=getattr(resp, 'url', None) or url,
        )
        if not tolerate_status and not response.ok:
            raise TransportError(url, status_code=response.status_code)
        return response
