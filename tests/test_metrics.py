from explorer.data import prepare_context
from explorer.filters import ProgramFilters
from explorer.metrics_debug import compute_debug
from explorer.metrics_programs import DISPLAY_COLUMNS, compute_programs, display_frame


def test_compute_programs_rows_in_dataset_order(programs):
    ctx = prepare_context(ProgramFilters(search_term="universidad"), {"programs": programs})
    payload = compute_programs(ctx["filters"], ctx)
    assert payload["total"] == 4
    assert [row["program_code"] for row in payload["rows"]] == ["101", "102", "103", "105"]
    assert payload["rows"][0]["tuition_label"] == "$\u00a012.000.000"
    # 0 and missing tuition share the label
    assert payload["rows"][2]["tuition_label"] == "No disponible"
    assert payload["rows"][3]["tuition_label"] == "No disponible"
    assert payload["rows"][3]["tuition_value"] == 0.0
    assert payload["rows"][2]["tuition_value"] is None


def test_display_frame_headers(programs):
    table = display_frame(programs)
    assert list(table.columns) == list(DISPLAY_COLUMNS.values())
    assert len(table) == len(programs)
    assert table["Municipio"].iloc[0] == "Medellín"


def test_compute_debug_reports_columns_and_missing(programs):
    frame = programs.drop(columns=["coverage_type"])
    ctx = prepare_context(ProgramFilters(region="Antioquia"), {"programs": frame})
    payload = compute_debug(ctx["filters"], ctx)
    assert payload["row_counts"] == {"program_rows": 5, "filtered_rows": 2}
    assert payload["columns"]["recognized_missing"] == ["coverage_type"]
    assert payload["columns"]["extra"] == ["notes"]
    assert payload["missing_values"]["tuition_value"] == 2
    assert payload["missing_values"]["institution_name"] == 1
    assert payload["facet_sizes"] == {"institution": 3, "region": 3, "program": 3}


def test_display_frame_formats_tuition_labels(programs):
    table = display_frame(programs)
    assert table["Valor Matrícula"].tolist() == [
        "$\u00a012.000.000",
        "$\u00a08.500.000",
        "No disponible",
        "No disponible",
        "No disponible",
    ]
