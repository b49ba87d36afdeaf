from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

import pandas as pd

from explorer.charts import region_bar_chart, to_vega_spec
from explorer.filters import ProgramFilters
from explorer.formatting import format_currency
from explorer.records import text_column, tuition_column


@dataclass(frozen=True)
class ProgramStats:
    count: int = 0
    distinct_institutions: int = 0
    distinct_regions: int = 0
    mean_tuition: float = 0.0


def summarize(view: pd.DataFrame) -> ProgramStats:
    count = int(len(view))
    if count == 0:
        return ProgramStats()
    # Missing names collapse into a single "unknown" member of the set.
    institutions = int(text_column(view, "institution_name").nunique(dropna=False))
    regions = int(text_column(view, "region").nunique(dropna=False))
    total_tuition = float(tuition_column(view).fillna(0).sum())
    return ProgramStats(
        count=count,
        distinct_institutions=institutions,
        distinct_regions=regions,
        mean_tuition=total_tuition / count,
    )


def programs_by_region(view: pd.DataFrame) -> pd.DataFrame:
    regions = text_column(view, "region").dropna()
    if regions.empty:
        return pd.DataFrame(columns=["region", "programs"])
    return (
        regions.value_counts()
        .rename_axis("region")
        .reset_index(name="programs")
        .sort_values(["programs", "region"], ascending=[False, True])
        .reset_index(drop=True)
    )


def compute_summary(filters: ProgramFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    view: pd.DataFrame = ctx.get("filtered_programs", pd.DataFrame())
    stats = ctx.get("stats") or summarize(view)

    charts = {}
    by_region = programs_by_region(view)
    if not by_region.empty:
        charts["programs_by_region"] = to_vega_spec(region_bar_chart(by_region))

    return {
        "filters": asdict(filters),
        "stats": asdict(stats),
        "mean_tuition_label": format_currency(stats.mean_tuition),
        "programs_by_region": by_region.to_dict(orient="records"),
        "charts": charts,
    }
