from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from explorer.filters import ProgramFilters
from explorer.formatting import format_currency, format_currency_columns
from explorer.records import RECOGNIZED_COLUMNS, records_from_frame, text_column, tuition_column


# Results table: canonical column -> header shown to the user.
DISPLAY_COLUMNS: Dict[str, str] = {
    "program_code": "Código SNIES",
    "program_name": "Programa",
    "institution_name": "Universidad",
    "institution_code": "Código IES",
    "locality": "Municipio",
    "region": "Departamento",
    "coverage_type": "Tipo Cubrimiento",
    "tuition_label": "Valor Matrícula",
}


def program_rows(view: pd.DataFrame) -> List[Dict[str, Any]]:
    rows = []
    for record in records_from_frame(view):
        row = asdict(record)
        row["tuition_label"] = format_currency(record.tuition_value)
        rows.append(row)
    return rows


def display_frame(view: pd.DataFrame) -> pd.DataFrame:
    table = pd.DataFrame(index=view.index)
    for col in RECOGNIZED_COLUMNS:
        if col == "tuition_value":
            continue
        table[col] = text_column(view, col)
    table["tuition_label"] = tuition_column(view)
    table = format_currency_columns(table, ["tuition_label"])
    return table[list(DISPLAY_COLUMNS)].rename(columns=DISPLAY_COLUMNS).reset_index(drop=True)


def compute_programs(filters: ProgramFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    view: pd.DataFrame = ctx.get("filtered_programs", pd.DataFrame())
    return {
        "filters": asdict(filters),
        "total": int(len(view)),
        "rows": program_rows(view),
    }
