from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_sales_result_cache
from src.core.result_cache import ResultCache
from src.main import create_app
from src.schemas.sales_leaderboard import SalesAggregate, SalesAggregationResult, SalesRunSummary


def build_sample_result() -> SalesAggregationResult:
    return SalesAggregationResult(
        records=[
            SalesAggregate(
                id="ali-valiyev-andijon",
                name="Ali Valiyev",
                branch="Andijon",
                today=1200,
                week=6501200,
                month=6501200,
                six_months=6501200,
                year=6501200,
                lifetime_breakdown={"contract_amount": 6500000, "invoice": 1200, "premium_tier": 1},
            )
        ],
        summary=SalesRunSummary(
            as_of_date=date(2026, 2, 10),
            generated_at=datetime(2026, 2, 10, 9, 30, tzinfo=timezone.utc),
            sources_fetched=["Andijon"],
            source_failures={"Qarshi": "https://example.test returned 403"},
            rows_seen=3,
            rows_accepted=2,
            rows_rejected={"footer": 1},
            record_count=1,
        ),
    )


class CountingLoader:
    def __init__(self, result: SalesAggregationResult) -> None:
        self.result = result
        self.calls = 0

    def __call__(self) -> SalesAggregationResult:
        self.calls += 1
        return self.result


@pytest.fixture()
def sales_loader() -> CountingLoader:
    return CountingLoader(build_sample_result())


@pytest.fixture()
def client(sales_loader: CountingLoader) -> TestClient:
    cache = ResultCache(loader=sales_loader, ttl_seconds=300)
    app = create_app()
    app.dependency_overrides[get_sales_result_cache] = lambda: cache
    return TestClient(app)
