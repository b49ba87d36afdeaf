from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict

import pandas as pd

from explorer.filters import ProgramFilters
from explorer.records import RECOGNIZED_COLUMNS, text_column, tuition_column


def compute_debug(filters: ProgramFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    programs: pd.DataFrame = ctx.get("programs", pd.DataFrame())
    view: pd.DataFrame = ctx.get("filtered_programs", pd.DataFrame())
    facets: Dict[str, Any] = ctx.get("facets", {}) or {}

    present = [c for c in RECOGNIZED_COLUMNS if c in programs.columns]
    payload = {
        "filters": asdict(filters),
        "row_counts": {
            "program_rows": int(len(programs)),
            "filtered_rows": int(len(view)),
        },
        "columns": {
            "recognized_present": present,
            "recognized_missing": [c for c in RECOGNIZED_COLUMNS if c not in programs.columns],
            "extra": [str(c) for c in programs.columns if c not in RECOGNIZED_COLUMNS],
        },
        "facet_sizes": {name: len(values) for name, values in facets.items()},
        "missing_values": {},
    }

    if not programs.empty:
        missing = {}
        for col in present:
            series = tuition_column(programs) if col == "tuition_value" else text_column(programs, col)
            missing[col] = int(series.isna().sum())
        payload["missing_values"] = missing
    return payload
