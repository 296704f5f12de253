from __future__ import annotations

import logging
from typing import AbstractSet, Dict, List, Optional, Set, Sequence

from src.models.sales_sheets import PERSON_NAME_FIELD, SchemaMapping

logger = logging.getLogger(__name__)


def find_column_index(
    headers: Sequence[str],
    candidates: Sequence[str],
    claimed: AbstractSet[int] = frozenset(),
) -> Optional[int]:
    """Index of the first header containing a candidate, candidates tried in priority order.

    Indices in ``claimed`` already belong to another field and are never matched.
    """
    lowered = [header.lower() for header in headers]
    for candidate in candidates:
        needle = candidate.lower()
        if not needle:
            continue
        for index, header in enumerate(lowered):
            if index not in claimed and needle in header:
                return index
    return None


def _matching_indices(headers: Sequence[str], candidates: Sequence[str]) -> List[int]:
    needles = [candidate.lower() for candidate in candidates if candidate]
    return [
        index
        for index, header in enumerate(headers)
        if any(needle in header.lower() for needle in needles)
    ]


def resolve_schema(
    headers: Sequence[str],
    field_aliases: Dict[str, List[str]],
    branch_name_columns: Optional[Dict[str, List[str]]] = None,
    source_label: str = "",
) -> SchemaMapping:
    # Fields resolve in table order; a column taken by one field is not offered to the next.
    columns: Dict[str, Optional[int]] = {}
    claimed: Set[int] = set()
    for field, candidates in field_aliases.items():
        index = find_column_index(headers, candidates, claimed)
        columns[field] = index
        if index is not None:
            claimed.add(index)
    branch_columns = {
        branch: find_column_index(headers, candidates)
        for branch, candidates in (branch_name_columns or {}).items()
    }

    name_candidates = set(_matching_indices(headers, field_aliases.get(PERSON_NAME_FIELD, [])))
    name_candidates.update(index for index in branch_columns.values() if index is not None)

    mapping = SchemaMapping(
        columns=columns,
        branch_name_columns=branch_columns,
        name_candidate_indices=sorted(name_candidates),
    )
    for field in mapping.unresolved_fields:
        logger.warning(
            "Column for %s not found in %s. Available headers: %s",
            field,
            source_label or "source",
            list(headers),
        )
    return mapping
