from __future__ import annotations

import json
from pathlib import Path
from typing import List

from pydantic import TypeAdapter

from src.core.config import Settings
from src.models.sales_sheets import SheetSourceConfig

# One published sheet per regional branch; the header sits on the second line.
DEFAULT_SALES_SOURCES: List[SheetSourceConfig] = [
    SheetSourceConfig(label="Andijon", sheet_id="15nrHKcxhYVThPxWJA7voKiy19DLphha-J6pOTj3pjm0", branch="Andijon"),
    SheetSourceConfig(label="Samarqand", sheet_id="1xnmpOF6SiPFvvFIT5tzQ1NmbJ_qIdqtqpPjYLfu8UQ0", branch="Samarqand"),
    SheetSourceConfig(label="Namangan", sheet_id="1Qb1n2EJVMBVp2oY5pTCB46sUz73CnilFJCRElMlekow", branch="Namangan"),
    SheetSourceConfig(label="Farg'ona", sheet_id="1lh58pWmpqk3V85yeOSLCSwbr6KNoGu1rSkjuER97UTA", branch="Farg'ona"),
    SheetSourceConfig(label="Qarshi", sheet_id="1w9KGElIf5lMnH3SuyjTZMEzxAgcxhVcZziNiHygfkWI", branch="Qarshi"),
]

_SOURCES_ADAPTER = TypeAdapter(List[SheetSourceConfig])


def load_sales_sources(settings: Settings) -> List[SheetSourceConfig]:
    if not settings.sales_sources_file:
        return list(DEFAULT_SALES_SOURCES)
    raw = Path(settings.sales_sources_file).read_text(encoding="utf-8")
    return _SOURCES_ADAPTER.validate_python(json.loads(raw))
