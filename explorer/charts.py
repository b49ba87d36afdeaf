from __future__ import annotations

from typing import Any, Dict

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def region_bar_chart(by_region: pd.DataFrame) -> alt.Chart:
    """Horizontal bars of program counts per department, largest first."""
    return (
        alt.Chart(by_region)
        .mark_bar()
        .encode(
            x=alt.X("programs:Q", title="Programas"),
            y=alt.Y("region:N", title="Departamento", sort="-x"),
            tooltip=[alt.Tooltip("region:N", title="Departamento"), alt.Tooltip("programs:Q", title="Programas", format=",")],
        )
    )
