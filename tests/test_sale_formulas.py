from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.analytics.sale_formulas import compute_sale_amount
from src.models.sales_sheets import SaleFormulaConfig

METRICS = {"contract_amount": 7_000_000, "invoice": 250}


def test_metric_sum() -> None:
    assert compute_sale_amount(METRICS, SaleFormulaConfig()) == 7_000_250


def test_threshold_flag_plus_invoice() -> None:
    formula = SaleFormulaConfig(name="threshold_flag_plus_invoice")
    assert compute_sale_amount(METRICS, formula) == 6_000_250
    assert compute_sale_amount({"contract_amount": 10, "invoice": 250}, formula) == 250


def test_count_times_amount_plus_invoice() -> None:
    formula = SaleFormulaConfig(name="count_times_amount_plus_invoice", unit_amount=500)
    assert compute_sale_amount({"contract_amount": 3, "invoice": 20}, formula) == 1520


def test_missing_metrics_count_as_zero() -> None:
    formula = SaleFormulaConfig(name="count_times_amount_plus_invoice")
    assert compute_sale_amount({}, formula) == 0


def test_unknown_formula_rejected() -> None:
    with pytest.raises(ValidationError):
        SaleFormulaConfig(name="best_guess")
