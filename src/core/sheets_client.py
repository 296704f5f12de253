from __future__ import annotations

from threading import Lock
from typing import Optional

import httpx

from src.core.config import get_settings


class SheetsClient:
    """Plain-text GET access to spreadsheet CSV endpoints.

    The underlying ``httpx.Client`` is shared process-wide unless one is
    injected (tests pass a client built on ``httpx.MockTransport``).
    """

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self, client: Optional[httpx.Client] = None) -> None:
        self._client = client or self._get_shared_client()

    @classmethod
    def _get_shared_client(cls) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                settings = get_settings()
                cls._shared_client = httpx.Client(
                    timeout=settings.sales_http_timeout_seconds,
                    follow_redirects=True,
                    default_encoding="utf-8",
                    limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
                )
        return cls._shared_client

    def get_text(self, url: str) -> str:
        response = self._client.get(url, headers={"Accept": "text/csv, text/plain;q=0.9, */*;q=0.5"})
        response.raise_for_status()
        return response.text
