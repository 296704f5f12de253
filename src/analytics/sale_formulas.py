from __future__ import annotations

from typing import Callable, Dict

from src.models.sales_sheets import SaleFormulaConfig

SaleFormula = Callable[[Dict[str, int], SaleFormulaConfig], int]


def metric_sum(metrics: Dict[str, int], _: SaleFormulaConfig) -> int:
    return sum(metrics.values())


def threshold_flag_plus_invoice(metrics: Dict[str, int], formula: SaleFormulaConfig) -> int:
    flag = 1 if metrics.get(formula.primary_metric, 0) >= formula.threshold else 0
    return flag * formula.unit_amount + metrics.get(formula.invoice_metric, 0)


def count_times_amount_plus_invoice(metrics: Dict[str, int], formula: SaleFormulaConfig) -> int:
    return metrics.get(formula.primary_metric, 0) * formula.unit_amount + metrics.get(formula.invoice_metric, 0)


SALE_FORMULAS: Dict[str, SaleFormula] = {
    "metric_sum": metric_sum,
    "threshold_flag_plus_invoice": threshold_flag_plus_invoice,
    "count_times_amount_plus_invoice": count_times_amount_plus_invoice,
}


def compute_sale_amount(metrics: Dict[str, int], formula: SaleFormulaConfig) -> int:
    return SALE_FORMULAS[formula.name](metrics, formula)
