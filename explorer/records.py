"""Program record shape and the missing-value policy shared by every component.

Every read of a record field goes through the helpers here: an absent column,
an empty cell, ``None`` and ``NaN``/``NA`` are all "missing". Missing text never
matches a filter and is excluded from facet lists; missing tuition is ``None``
for display and ``0`` when summed.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd


PROGRAM_COLUMNS: Dict[str, str] = {
    "NOMBRE_IES": "institution_name",
    "institutionName": "institution_name",
    "NOMBRE_DEL_PROGRAMA": "program_name",
    "programName": "program_name",
    "DEPARTAMENTO": "region",
    "MUNICIPIO": "locality",
    "TIPO_CUBRIMIENTO": "coverage_type",
    "coverageType": "coverage_type",
    "VALOR_MATRICULA": "tuition_value",
    "tuitionValue": "tuition_value",
    "CÓDIGO_SNIES_DEL_PROGRAMA": "program_code",
    "CODIGO_SNIES_DEL_PROGRAMA": "program_code",
    "programCode": "program_code",
    "CODIGO_IES": "institution_code",
    "CÓDIGO_IES": "institution_code",
    "institutionCode": "institution_code",
}

RECOGNIZED_COLUMNS: List[str] = [
    "institution_name",
    "program_name",
    "region",
    "locality",
    "coverage_type",
    "tuition_value",
    "program_code",
    "institution_code",
]


def is_missing(value: object) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def optional_text(value: object) -> Optional[str]:
    if is_missing(value):
        return None
    if isinstance(value, float) and value.is_integer():
        # Integer codes read from a column with blanks come back as floats.
        return str(int(value))
    return str(value)


def optional_number(value: object) -> Optional[float]:
    if is_missing(value) or isinstance(value, bool):
        return None
    try:
        out = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(out):
        return None
    return out


def column_as_series(df: pd.DataFrame, col: str, dtype: object = object) -> pd.Series:
    if col not in df.columns:
        return pd.Series(index=df.index, dtype=dtype)
    val = df[col]
    if isinstance(val, pd.DataFrame):
        return val.iloc[:, 0]
    return val


def text_column(df: pd.DataFrame, col: str) -> pd.Series:
    """Column as pandas ``string`` dtype, ``<NA>`` wherever the value is missing."""
    series = column_as_series(df, col)
    return series.map(optional_text).astype("string")


def tuition_column(df: pd.DataFrame) -> pd.Series:
    """Tuition as floats, ``NaN`` for missing or unparseable cells."""
    series = column_as_series(df, "tuition_value", dtype="float64")
    return pd.to_numeric(series.map(optional_number), errors="coerce").astype("float64")


@dataclass(frozen=True)
class ProgramRecord:
    institution_name: Optional[str] = None
    program_name: Optional[str] = None
    region: Optional[str] = None
    locality: Optional[str] = None
    coverage_type: Optional[str] = None
    tuition_value: Optional[float] = None
    program_code: Optional[str] = None
    institution_code: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ProgramRecord":
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = row.get(f.name)
            values[f.name] = optional_number(raw) if f.name == "tuition_value" else optional_text(raw)
        return cls(**values)


def records_from_frame(df: pd.DataFrame) -> List[ProgramRecord]:
    return [ProgramRecord.from_row(row) for row in df.to_dict(orient="records")]
