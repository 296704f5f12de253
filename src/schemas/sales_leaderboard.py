from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import Field

from src.shared.base import BaseSchema


class SalesAggregate(BaseSchema):
    id: str
    name: str
    branch: str
    today: int = 0
    week: int = 0
    month: int = 0
    six_months: int = 0
    year: int = 0
    lifetime_breakdown: Dict[str, int] = Field(default_factory=dict)
    window_breakdown: Optional[Dict[str, Dict[str, int]]] = None


class SalesRunSummary(BaseSchema):
    as_of_date: date
    generated_at: datetime
    sources_fetched: List[str] = Field(default_factory=list)
    source_failures: Dict[str, str] = Field(default_factory=dict)
    unresolved_fields: Dict[str, List[str]] = Field(default_factory=dict)
    rows_seen: int = 0
    rows_accepted: int = 0
    rows_rejected: Dict[str, int] = Field(default_factory=dict)
    record_count: int = 0


class SalesAggregationResult(BaseSchema):
    records: List[SalesAggregate]
    summary: SalesRunSummary
