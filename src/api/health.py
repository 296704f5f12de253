from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from src.api.dependencies import get_sales_result_cache
from src.core.result_cache import ResultCache
from src.schemas.sales_leaderboard import SalesAggregationResult
from src.shared.response import Meta, ResponseEnvelope


router = APIRouter(tags=["health"])


def _system_meta() -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source="system",
        time_window="now",
        calculation_version="v1",
    )


@router.get("/health")
def health_check(
    cache: ResultCache[SalesAggregationResult] = Depends(get_sales_result_cache),
) -> ResponseEnvelope[dict]:
    data = {"status": "ok", "salesCacheFresh": cache.is_fresh()}
    return ResponseEnvelope(data=data, meta=_system_meta())


@router.get("/healthz")
def health_check_liveness() -> ResponseEnvelope[dict]:
    return ResponseEnvelope(data={"status": "ok"}, meta=_system_meta())
