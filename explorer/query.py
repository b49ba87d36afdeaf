from __future__ import annotations

import pandas as pd

from explorer.filters import FACET_FIELDS, SEARCH_FIELDS, ProgramFilters
from explorer.records import text_column


def match_mask(programs: pd.DataFrame, filters: ProgramFilters) -> pd.Series:
    mask = pd.Series(True, index=programs.index, dtype=bool)

    if filters.search_term:
        q = filters.search_term.lower()
        hit = pd.Series(False, index=programs.index, dtype=bool)
        for col in SEARCH_FIELDS:
            values = text_column(programs, col).str.lower()
            hit |= values.str.contains(q, regex=False, na=False).astype(bool)
        mask &= hit

    for facet, col in FACET_FIELDS.items():
        selected = getattr(filters, facet)
        if selected:
            mask &= text_column(programs, col).eq(selected).fillna(False).astype(bool)

    return mask


def filter_programs(programs: pd.DataFrame, filters: ProgramFilters) -> pd.DataFrame:
    """Rows matching every active filter, in dataset order (index preserved)."""
    if not filters.is_active:
        return programs
    return programs[match_mask(programs, filters)]
