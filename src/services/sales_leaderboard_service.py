from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence

from src.analytics.csv_tokenizer import split_lines, tokenize_line
from src.analytics.sales_aggregation import aggregate_sales
from src.analytics.schema_resolver import resolve_schema
from src.core.errors import EmptyResultError, NoDataAvailableError
from src.models.sales_sheets import ParsedSource, SaleFormulaConfig, SheetSourceConfig
from src.repositories.sales_sheets_repository import SalesSheetsRepository
from src.schemas.sales_leaderboard import SalesAggregationResult, SalesRunSummary

logger = logging.getLogger(__name__)


class SalesLeaderboardService:
    def __init__(
        self,
        repository: SalesSheetsRepository,
        sources: Sequence[SheetSourceConfig],
        default_formula: Optional[SaleFormulaConfig] = None,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.repository = repository
        self.sources = list(sources)
        self.default_formula = default_formula or SaleFormulaConfig()
        self._today = today_provider

    @staticmethod
    def _now_utc() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_source(source: SheetSourceConfig, text: str) -> Optional[ParsedSource]:
        lines = split_lines(text)
        header_index = source.header_row_index
        if len(lines) < header_index + 2:
            logger.warning(
                "Not enough lines in CSV for %s: %d (need a header on line %d and at least one data line)",
                source.label,
                len(lines),
                header_index + 1,
            )
            return None
        headers = tokenize_line(lines[header_index])
        mapping = resolve_schema(
            headers,
            source.resolution_aliases(),
            source.branch_name_columns,
            source_label=source.label,
        )
        return ParsedSource(source=source, mapping=mapping, data_lines=lines[header_index + 1 :])

    def build_aggregates(self) -> SalesAggregationResult:
        """Fetch every source and aggregate it. Raises when nothing usable comes back."""
        anchor = self._today()
        results = self.repository.fetch_sources(self.sources)

        failures: Dict[str, str] = {}
        fetched: List[str] = []
        unresolved: Dict[str, List[str]] = {}
        parsed_sources: List[ParsedSource] = []
        for source, result in zip(self.sources, results):
            if not result.ok:
                failures[source.label] = result.failure_reason or "unknown error"
                continue
            parsed = self.parse_source(source, result.text or "")
            if parsed is None:
                failures[source.label] = "no parsable data (missing header or data lines)"
                continue
            fetched.append(source.label)
            parsed_sources.append(parsed)
            if parsed.mapping.unresolved_fields:
                unresolved[source.label] = parsed.mapping.unresolved_fields

        if not parsed_sources:
            raise NoDataAvailableError(failures)

        outcome = aggregate_sales(parsed_sources, anchor, self.default_formula)
        summary = SalesRunSummary(
            as_of_date=anchor,
            generated_at=self._now_utc(),
            sources_fetched=fetched,
            source_failures=failures,
            unresolved_fields=unresolved,
            rows_seen=outcome.rows_seen,
            rows_accepted=outcome.rows_accepted,
            rows_rejected=dict(outcome.rows_rejected),
            record_count=len(outcome.records),
        )
        logger.info(
            "Aggregated %d records from %d/%d sources (%d rows accepted, rejected: %s)",
            summary.record_count,
            len(fetched),
            len(self.sources),
            summary.rows_accepted,
            summary.rows_rejected,
        )
        if not outcome.records:
            raise EmptyResultError(details=summary.model_dump(mode="json", by_alias=True))
        return SalesAggregationResult(records=outcome.records, summary=summary)
