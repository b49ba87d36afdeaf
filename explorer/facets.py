from __future__ import annotations

from typing import Dict, List

import pandas as pd

from explorer.filters import FACET_FIELDS
from explorer.records import text_column


def facet_values(programs: pd.DataFrame, facet: str) -> List[str]:
    """Distinct non-missing values of one facet, sorted by code point.

    Always computed from the full dataset, so picking one facet never narrows
    the options offered by another.
    """
    if facet not in FACET_FIELDS:
        raise KeyError(f"Unknown facet: {facet!r}")
    values = text_column(programs, FACET_FIELDS[facet]).dropna()
    return sorted({str(v) for v in values})


def compute_facet_options(programs: pd.DataFrame) -> Dict[str, List[str]]:
    return {facet: facet_values(programs, facet) for facet in FACET_FIELDS}
