from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import httpx

from src.core.config import get_settings
from src.core.errors import SourceFetchFailure
from src.core.sheets_client import SheetsClient
from src.models.sales_sheets import SheetSourceConfig, SourceFetchResult

logger = logging.getLogger(__name__)


class SalesSheetsRepository:
    def __init__(self, client: Optional[SheetsClient] = None, proxy_url_template: Optional[str] = None) -> None:
        self.client = client or SheetsClient()
        if proxy_url_template is None:
            proxy_url_template = get_settings().sales_proxy_url_template
        self.proxy_url_template = proxy_url_template

    def candidate_urls(self, source: SheetSourceConfig) -> List[str]:
        urls: List[str] = []
        if self.proxy_url_template:
            urls.append(self.proxy_url_template.format(sheet_id=source.sheet_id, gid=source.gid))
        urls.extend(source.endpoint_urls())
        return urls

    def fetch_source(self, source: SheetSourceConfig) -> SourceFetchResult:
        reasons: List[str] = []
        for url in self.candidate_urls(source):
            logger.info("Fetching %s from %s", source.label, url)
            try:
                text = self.client.get_text(url)
            except httpx.HTTPStatusError as exc:
                reasons.append(f"{url} returned {exc.response.status_code}")
                logger.warning("Fetch for %s returned %s", source.label, exc.response.status_code)
                continue
            except httpx.HTTPError as exc:
                reasons.append(f"{url} failed: {exc}")
                logger.warning("Fetch error for %s: %s", source.label, exc)
                continue
            if not text.strip():
                reasons.append(f"{url} returned an empty body")
                logger.warning("Empty body for %s from %s", source.label, url)
                continue
            logger.info("Received %d characters for %s", len(text), source.label)
            return SourceFetchResult(label=source.label, text=text, endpoint=url)
        raise SourceFetchFailure(source.label, reasons or ["no endpoints configured"])

    def fetch_sources(self, sources: Sequence[SheetSourceConfig]) -> List[SourceFetchResult]:
        results: List[SourceFetchResult] = []
        for source in sources:
            try:
                results.append(self.fetch_source(source))
            except SourceFetchFailure as exc:
                logger.error("All endpoints failed for %s: %s", exc.label, "; ".join(exc.reasons))
                results.append(SourceFetchResult(label=source.label, failure_reason="; ".join(exc.reasons)))
        return results
