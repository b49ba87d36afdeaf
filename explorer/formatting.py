from __future__ import annotations

import html
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List, Optional

import pandas as pd

from explorer.filters import ProgramFilters
from explorer.records import optional_number


NOT_AVAILABLE_LABEL = "No disponible"
CURRENCY_SYMBOL = "$"
THOUSANDS_SEPARATOR = "."
# es-CO puts a no-break space between the symbol and the amount.
SYMBOL_SPACER = "\u00a0"


def round_half_up(value: object, ndigits: int = 0) -> Optional[float]:
    number = optional_number(value)
    if number is None or number in (float("inf"), float("-inf")):
        return None
    q = Decimal(10) ** -ndigits
    return float(Decimal(str(number)).quantize(q, rounding=ROUND_HALF_UP))


def format_currency(value: object) -> str:
    """Colombian peso amount with no decimals, e.g. ``$ 50.000``.

    Missing and zero both read as "not available"; a real tuition of 0 cannot be
    told apart from an empty cell.
    """
    rounded = round_half_up(value)
    if not optional_number(value) or rounded is None:
        return NOT_AVAILABLE_LABEL
    sign = "-" if rounded < 0 else ""
    digits = f"{abs(rounded):,.0f}".replace(",", THOUSANDS_SEPARATOR)
    return f"{sign}{CURRENCY_SYMBOL}{SYMBOL_SPACER}{digits}"


def format_currency_columns(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    formatted = df.copy()
    for c in cols:
        if c in formatted.columns:
            formatted[c] = formatted[c].apply(format_currency)
    return formatted


def format_filter_summary(filters: ProgramFilters) -> str:
    """Active filters as HTML chips; values are escaped before rendering."""
    chips: List[str] = []
    if filters.search_term:
        chips.append(f"Búsqueda: {filters.search_term}")
    chips.append(f"Universidad: {filters.institution or 'Todas'}")
    chips.append(f"Departamento: {filters.region or 'Todos'}")
    chips.append(f"Programa: {filters.program or 'Todos'}")
    return "".join([f"<span class='chip'>{html.escape(txt)}</span>" for txt in chips])
