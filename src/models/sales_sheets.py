from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

EXPORT_ENDPOINT = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"
PUBLISHED_ENDPOINT = "https://docs.google.com/spreadsheets/d/{sheet_id}/pub?output=csv"

PERSON_NAME_FIELD = "person_name"
BRANCH_FIELD = "branch"
DATE_FIELD = "date"
CONTRACT_AMOUNT_FIELD = "contract_amount"
INVOICE_FIELD = "invoice"
PREMIUM_TIER_KEY = "premium_tier"

DEFAULT_FIELD_ALIASES: Dict[str, List[str]] = {
    PERSON_NAME_FIELD: [
        "Menejerining ismi",
        "Manager name",
        "Ism /familiya",
        "Ism / familiya",
        "Ism/familiya",
        "Name",
        "FISh",
    ],
    BRANCH_FIELD: ["Filial", "Branch", "Region"],
    DATE_FIELD: ["Shartnoma sanasi", "Date", "Timestamp", "Bugungi kunni"],
    CONTRACT_AMOUNT_FIELD: ["Sharnoma turi", "Shartnoma turi", "Contract type", "Shartnoma"],
    INVOICE_FIELD: ["Invoice $", "Invoice"],
}


class SaleFormulaConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(
        default="metric_sum",
        pattern="^(metric_sum|threshold_flag_plus_invoice|count_times_amount_plus_invoice)$",
    )
    primary_metric: str = CONTRACT_AMOUNT_FIELD
    invoice_metric: str = INVOICE_FIELD
    threshold: int = 6_000_000
    unit_amount: int = 6_000_000


class SheetSourceConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    sheet_id: str
    gid: str = "0"
    # Fixed branch label for one-sheet-per-branch layouts; None reads the branch column.
    branch: Optional[str] = None
    header_row_index: int = Field(default=1, ge=0)
    endpoints: List[str] = Field(default_factory=lambda: [EXPORT_ENDPOINT, PUBLISHED_ENDPOINT])
    field_aliases: Dict[str, List[str]] = Field(default_factory=lambda: dict(DEFAULT_FIELD_ALIASES))
    branch_name_columns: Dict[str, List[str]] = Field(default_factory=dict)
    metric_fields: List[str] = Field(default_factory=lambda: [CONTRACT_AMOUNT_FIELD, INVOICE_FIELD])
    # None falls back to SALES_DEFAULT_FORMULA.
    formula: Optional[SaleFormulaConfig] = None
    window_breakdowns: bool = False
    premium_tier_metric: Optional[str] = CONTRACT_AMOUNT_FIELD
    premium_tier_threshold: int = 6_000_000

    def endpoint_urls(self) -> List[str]:
        return [template.format(sheet_id=self.sheet_id, gid=self.gid) for template in self.endpoints]

    def resolution_aliases(self) -> Dict[str, List[str]]:
        """Aliases of the columns this source actually reads, in resolution order.

        A fixed branch needs no branch column. Every metric gets an entry so one
        without aliases shows up as unresolved instead of silently reading zero.
        """
        aliases = {field: list(candidates) for field, candidates in self.field_aliases.items()}
        if self.branch is not None:
            aliases.pop(BRANCH_FIELD, None)
        for metric in self.metric_fields:
            aliases.setdefault(metric, [])
        return aliases


class SchemaMapping(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: Dict[str, Optional[int]]
    branch_name_columns: Dict[str, Optional[int]] = Field(default_factory=dict)
    name_candidate_indices: List[int] = Field(default_factory=list)

    def index_of(self, field_name: str) -> Optional[int]:
        return self.columns.get(field_name)

    def branch_name_index(self, branch: str) -> Optional[int]:
        return self.branch_name_columns.get(branch)

    @property
    def unresolved_fields(self) -> List[str]:
        unresolved = [name for name, index in self.columns.items() if index is None]
        unresolved.extend(
            f"{PERSON_NAME_FIELD}[{branch}]" for branch, index in self.branch_name_columns.items() if index is None
        )
        return unresolved


class SourceFetchResult(BaseModel):
    label: str
    text: Optional[str] = None
    endpoint: Optional[str] = None
    failure_reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.text is not None


class ParsedSource(BaseModel):
    source: SheetSourceConfig
    mapping: SchemaMapping
    data_lines: List[str]
