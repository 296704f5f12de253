from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from src.analytics.csv_tokenizer import tokenize_line
from src.analytics.sale_formulas import compute_sale_amount
from src.analytics.value_normalizer import parse_sheet_date, safe_parse_int
from src.models.sales_sheets import (
    BRANCH_FIELD,
    DATE_FIELD,
    PERSON_NAME_FIELD,
    PREMIUM_TIER_KEY,
    ParsedSource,
    SaleFormulaConfig,
    SchemaMapping,
)
from src.schemas.sales_leaderboard import SalesAggregate
from src.shared.time import WINDOW_KEYS, rolling_window_starts, windows_containing

FOOTER_MARKER = "total"

REJECT_BLANK = "blank"
REJECT_FOOTER = "footer"
REJECT_MISSING_BRANCH = "missing_branch"
REJECT_INVALID_NAME = "invalid_name"
REJECT_NON_POSITIVE_AMOUNT = "non_positive_amount"
REJECT_INVALID_DATE = "invalid_date"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class AggregationOutcome:
    records: List[SalesAggregate] = field(default_factory=list)
    rows_seen: int = 0
    rows_accepted: int = 0
    rows_rejected: Counter = field(default_factory=Counter)


def aggregate_sales(
    sources: Iterable[ParsedSource],
    today: date,
    default_formula: Optional[SaleFormulaConfig] = None,
) -> AggregationOutcome:
    """Fold every data line of every source into per-(person, branch) rolling totals.

    Window starts are computed once from ``today``. A row lands in every
    window whose start is on or before its date, so the windows nest.
    Rejected rows are only counted; records come back in first-seen order.
    """
    starts = rolling_window_starts(today)
    accumulators: Dict[Tuple[str, str], Dict[str, Any]] = {}
    outcome = AggregationOutcome()

    for parsed in sources:
        formula = parsed.source.formula or default_formula or SaleFormulaConfig()
        for line in parsed.data_lines:
            outcome.rows_seen += 1
            reason = _accumulate_line(line, parsed, formula, starts, accumulators)
            if reason:
                outcome.rows_rejected[reason] += 1
            else:
                outcome.rows_accepted += 1

    outcome.records = [SalesAggregate(**values) for values in accumulators.values()]
    return outcome


def _accumulate_line(
    line: str,
    parsed: ParsedSource,
    formula: SaleFormulaConfig,
    starts: Dict[str, date],
    accumulators: Dict[Tuple[str, str], Dict[str, Any]],
) -> Optional[str]:
    if not line.strip():
        return REJECT_BLANK
    if FOOTER_MARKER in line.lower():
        return REJECT_FOOTER

    source = parsed.source
    mapping = parsed.mapping
    fields = tokenize_line(line)

    branch = source.branch or _field_at(fields, mapping.index_of(BRANCH_FIELD))
    if not branch:
        return REJECT_MISSING_BRANCH

    name = _resolve_name(fields, mapping, branch)
    if name is None:
        return REJECT_INVALID_NAME

    metrics = {
        metric: safe_parse_int(_field_at(fields, mapping.index_of(metric)))
        for metric in source.metric_fields
    }
    sale_amount = compute_sale_amount(metrics, formula)
    if sale_amount <= 0:
        return REJECT_NON_POSITIVE_AMOUNT

    row_date = parse_sheet_date(_field_at(fields, mapping.index_of(DATE_FIELD)))
    if row_date is None:
        return REJECT_INVALID_DATE

    key = (name.lower(), branch)
    record = accumulators.get(key)
    if record is None:
        record = _new_record(name, branch)
        accumulators[key] = record

    contributions = dict(metrics)
    tier_metric = source.premium_tier_metric
    if tier_metric and tier_metric in metrics:
        contributions[PREMIUM_TIER_KEY] = 1 if metrics[tier_metric] >= source.premium_tier_threshold else 0

    windows = windows_containing(row_date, starts)
    for window in windows:
        record[window] += sale_amount

    lifetime = record["lifetime_breakdown"]
    for metric, value in contributions.items():
        lifetime[metric] = lifetime.get(metric, 0) + value

    if source.window_breakdowns:
        if record["window_breakdown"] is None:
            record["window_breakdown"] = {window: {} for window in WINDOW_KEYS}
        for window in windows:
            bucket = record["window_breakdown"][window]
            for metric, value in contributions.items():
                bucket[metric] = bucket.get(metric, 0) + value
    return None


def _new_record(name: str, branch: str) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": _WHITESPACE_RE.sub("-", f"{name}-{branch}").lower(),
        "name": name,
        "branch": branch,
        "lifetime_breakdown": {},
        "window_breakdown": None,
    }
    record.update({window: 0 for window in WINDOW_KEYS})
    return record


def _field_at(fields: Sequence[str], index: Optional[int]) -> str:
    if index is None or index >= len(fields):
        return ""
    return fields[index]


def is_valid_name(value: str) -> bool:
    if not value or value == "0" or len(value) < 2:
        return False
    return value.lower() != FOOTER_MARKER


def _resolve_name(fields: Sequence[str], mapping: SchemaMapping, branch: str) -> Optional[str]:
    preferred = [mapping.branch_name_index(branch), mapping.index_of(PERSON_NAME_FIELD)]
    for index in preferred + list(mapping.name_candidate_indices):
        value = _field_at(fields, index)
        if is_valid_name(value):
            return value
    return None
