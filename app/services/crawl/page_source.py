from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import httpx

from .base import FetchResult
from .settings import CrawlSettings, load_settings

logger = logging.getLogger(__name__)

# Any callable with this shape can stand in for the HTTP source (tests inject fakes).
FetchFn = Callable[[str], Optional[FetchResult]]


class HttpPageSource:
    """httpx-backed page source.

    Returns a FetchResult for every response the server sends (any status),
    or None when the request itself fails (DNS, timeout, connection reset...).
    """

    def __init__(
        self,
        settings: Optional[CrawlSettings] = None,
        *,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.headers = headers or {"User-Agent": self.settings.user_agent}
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.settings.timeout,
            headers=self.headers,
            follow_redirects=True,
            transport=self.transport,
        )

    def fetch(self, url: str) -> Optional[FetchResult]:
        try:
            with self._client() as client:
                r = client.get(url)
                return FetchResult(status_code=r.status_code, body=r.text)
        except httpx.HTTPError as exc:
            logger.warning("GET %s failed: %s", url, exc)
            return None

    __call__ = fetch
