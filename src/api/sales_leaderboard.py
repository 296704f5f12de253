from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from src.api.dependencies import get_sales_result_cache
from src.core.result_cache import ResultCache
from src.schemas.sales_leaderboard import SalesAggregate, SalesAggregationResult, SalesRunSummary
from src.shared.response import Meta, ResponseEnvelope

router = APIRouter(prefix="/sales", tags=["sales"])


def _build_meta(result: SalesAggregationResult) -> Meta:
    return Meta(
        as_of_date=result.summary.as_of_date.isoformat(),
        source="google_sheets:" + ",".join(result.summary.sources_fetched),
        time_window="today,week,month,sixMonths,year",
        calculation_version="v1",
        degraded=bool(result.summary.source_failures),
        generated_at=result.summary.generated_at.isoformat(),
    )


@router.get("/aggregates")
def sales_aggregates(
    cache: ResultCache[SalesAggregationResult] = Depends(get_sales_result_cache),
) -> ResponseEnvelope[List[SalesAggregate]]:
    result = cache.get()
    return ResponseEnvelope(data=result.records, meta=_build_meta(result))


@router.get("/run-summary")
def sales_run_summary(
    cache: ResultCache[SalesAggregationResult] = Depends(get_sales_result_cache),
) -> ResponseEnvelope[SalesRunSummary]:
    result = cache.get()
    return ResponseEnvelope(data=result.summary, meta=_build_meta(result))


@router.post("/refresh")
def refresh_sales_aggregates(
    cache: ResultCache[SalesAggregationResult] = Depends(get_sales_result_cache),
) -> ResponseEnvelope[SalesRunSummary]:
    result = cache.refresh()
    return ResponseEnvelope(data=result.summary, meta=_build_meta(result))
