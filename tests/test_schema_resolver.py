from __future__ import annotations

import logging

from src.analytics.schema_resolver import find_column_index, resolve_schema
from src.models.sales_sheets import DEFAULT_FIELD_ALIASES

HEADERS = ["№", "Menejerining ismi", "Shartnoma sanasi", "Sharnoma turi (6млн)", "Invoice $ (Инвоис)", "Andijon menejer"]


def test_find_column_index_is_case_insensitive_substring() -> None:
    assert find_column_index(HEADERS, ["invoice"]) == 4


def test_find_column_index_respects_candidate_priority() -> None:
    # "Shartnoma" alone would hit the date column first; the more specific alias wins.
    assert find_column_index(HEADERS, ["Sharnoma turi", "Shartnoma"]) == 3
    assert find_column_index(HEADERS, ["Shartnoma", "Sharnoma turi"]) == 2


def test_find_column_index_unresolved() -> None:
    assert find_column_index(HEADERS, ["Branch", "Filial"]) is None
    assert find_column_index([], ["name"]) is None


def test_resolve_schema_builds_mapping(caplog) -> None:
    aliases = {
        "person_name": ["Menejerining ismi", "Name"],
        "date": ["Shartnoma sanasi"],
        "invoice": ["Invoice $"],
        "branch": ["Filial"],
    }
    with caplog.at_level(logging.WARNING):
        mapping = resolve_schema(
            HEADERS,
            aliases,
            {"Andijon": ["andijon menejer"], "Qarshi": ["qarshi menejer"]},
            source_label="Andijon",
        )

    assert mapping.index_of("person_name") == 1
    assert mapping.index_of("date") == 2
    assert mapping.index_of("invoice") == 4
    assert mapping.index_of("branch") is None
    assert mapping.branch_name_index("Andijon") == 5
    assert mapping.branch_name_index("Qarshi") is None
    assert mapping.name_candidate_indices == [1, 5]
    assert mapping.unresolved_fields == ["branch", "person_name[Qarshi]"]
    assert "Column for branch not found in Andijon" in caplog.text


def test_find_column_index_skips_claimed_columns() -> None:
    assert find_column_index(HEADERS, ["Shartnoma"], claimed={2}) == 3
    assert find_column_index(HEADERS, ["Shartnoma sanasi"], claimed={2}) is None


def test_bare_contract_alias_does_not_take_the_date_column() -> None:
    headers = ["Menejerining ismi", "Shartnoma sanasi", "Invoice $"]
    mapping = resolve_schema(headers, dict(DEFAULT_FIELD_ALIASES))

    assert mapping.index_of("date") == 1
    assert mapping.index_of("contract_amount") is None
    assert mapping.index_of("invoice") == 2
    assert "contract_amount" in mapping.unresolved_fields
