import streamlit as st
from contextlib import contextmanager
from typing import Dict, List, Optional

from explorer import data as dc
from explorer.charts import region_bar_chart
from explorer.data import LoadError
from explorer.filters import filters_from_state
from explorer.formatting import format_currency, format_filter_summary
from explorer.metrics_programs import display_frame
from explorer.metrics_summary import programs_by_region

FILTER_KEYS = ["search_term", "institution", "region", "program"]
FACET_PLACEHOLDERS = {
    "institution": "Todas las universidades",
    "region": "Todos los departamentos",
    "program": "Todos los programas",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: space-between;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;}
        .card-actions {font-size: 0.9rem;color: #2563eb;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str, actions: Optional[str] = None):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header">
            <div class="card-title">{title}</div>
            <div class="card-actions">{actions or ""}</div>
          </div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def clear_filters():
    cleared = filters_from_state(st.session_state).cleared()
    for key, value in cleared.as_state().items():
        st.session_state[key] = value


def load_session_data() -> Dict[str, object]:
    # One load per session; a failure is remembered, not retried.
    if "_load_outcome" not in st.session_state:
        with st.spinner("Cargando datos..."):
            try:
                st.session_state["_load_outcome"] = dc.load_program_data()
            except LoadError as exc:
                st.session_state["_load_outcome"] = exc
    return st.session_state["_load_outcome"]


# ---------- UI setup ----------
st.set_page_config(page_title="Visualizador ESP TOC", layout="wide")
inject_base_styles()
st.title("Visualizador ESP TOC - Especialidades Médicas")

outcome = load_session_data()
if isinstance(outcome, LoadError):
    st.error(f"Error al cargar datos: {outcome.detail}")
    st.caption(f"Asegúrate de que el archivo {dc.DATASET_FILENAME} esté en {dc.DATA_DIR}.")
    st.stop()

data_ctx = outcome
facets: Dict[str, List[str]] = data_ctx.get("facets", {}) or {}

for key in FILTER_KEYS:
    st.session_state.setdefault(key, "")

# ----- Filters -----
st.text_input(
    "Buscar",
    key="search_term",
    placeholder="Buscar por universidad, programa, departamento o municipio...",
)
facet_cols = st.columns(3)
for col, facet in zip(facet_cols, ["institution", "region", "program"]):
    options = [""] + facets.get(facet, [])
    if st.session_state[facet] not in options:
        st.session_state[facet] = ""
    col.selectbox(
        FACET_PLACEHOLDERS[facet],
        options=options,
        key=facet,
        format_func=lambda v, placeholder=FACET_PLACEHOLDERS[facet]: v or placeholder,
        label_visibility="collapsed",
    )

filters = filters_from_state(st.session_state)
if filters.is_active:
    st.button("Limpiar filtros", on_click=clear_filters)

ctx = dc.prepare_context(filters, data_ctx)
filtered_programs = ctx["filtered_programs"]
stats = ctx["stats"]

st.markdown(f"<div class='chip-row'>{format_filter_summary(filters)}</div>", unsafe_allow_html=True)

# ----- Statistics -----
metric_cols = st.columns(4)
metric_cols[0].metric("Programas", f"{stats.count:,}")
metric_cols[1].metric("Universidades", f"{stats.distinct_institutions:,}")
metric_cols[2].metric("Departamentos", f"{stats.distinct_regions:,}")
metric_cols[3].metric("Matrícula Promedio", format_currency(stats.mean_tuition))

# ----- Results -----
with card(f"Resultados ({stats.count} programas encontrados)"):
    if filtered_programs.empty:
        st.info("No se encontraron programas con los filtros aplicados")
    else:
        table = display_frame(filtered_programs)
        st.dataframe(table, use_container_width=True, hide_index=True)
        st.download_button(
            "Exportar CSV",
            data=filtered_programs.to_csv(index=False).encode("utf-8"),
            file_name="programas.csv",
            mime="text/csv",
        )

by_region = programs_by_region(filtered_programs)
if not by_region.empty:
    with card("Programas por departamento"):
        st.altair_chart(region_bar_chart(by_region), use_container_width=True)
