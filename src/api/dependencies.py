from __future__ import annotations

from functools import lru_cache

from src.core.config import get_settings
from src.core.result_cache import ResultCache
from src.core.sales_sources import load_sales_sources
from src.models.sales_sheets import SaleFormulaConfig
from src.repositories.sales_sheets_repository import SalesSheetsRepository
from src.schemas.sales_leaderboard import SalesAggregationResult
from src.services.sales_leaderboard_service import SalesLeaderboardService


@lru_cache
def get_sales_sheets_repository() -> SalesSheetsRepository:
    return SalesSheetsRepository()


def get_sales_leaderboard_service() -> SalesLeaderboardService:
    settings = get_settings()
    return SalesLeaderboardService(
        repository=get_sales_sheets_repository(),
        sources=load_sales_sources(settings),
        default_formula=SaleFormulaConfig(name=settings.sales_default_formula),
    )


@lru_cache
def get_sales_result_cache() -> ResultCache[SalesAggregationResult]:
    settings = get_settings()
    return ResultCache(
        loader=get_sales_leaderboard_service().build_aggregates,
        ttl_seconds=settings.sales_cache_ttl_seconds,
    )
