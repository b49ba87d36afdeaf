import numpy as np
import pandas as pd
import pytest

from explorer.filters import ProgramFilters
from explorer.formatting import (
    NOT_AVAILABLE_LABEL,
    format_currency,
    format_currency_columns,
    format_filter_summary,
    round_half_up,
)

NBSP = "\u00a0"


@pytest.mark.parametrize("value", [None, 0, 0.0, "", np.nan, pd.NA, "sin dato", False])
def test_missing_and_zero_read_not_available(value):
    assert format_currency(value) == NOT_AVAILABLE_LABEL


def test_zero_is_indistinguishable_from_missing():
    # Known ambiguity: a real tuition of 0 shows the same label as an empty cell.
    assert format_currency(0) == format_currency(None) == "No disponible"


def test_grouped_peso_amount_without_decimals():
    assert format_currency(50000) == f"${NBSP}50.000"
    assert format_currency(12345678) == f"${NBSP}12.345.678"
    assert format_currency(950) == f"${NBSP}950"


def test_rounds_half_up():
    assert format_currency(1499.5) == f"${NBSP}1.500"
    assert format_currency(1499.49) == f"${NBSP}1.499"
    assert round_half_up(2.5) == 3.0


def test_negative_amount():
    assert format_currency(-2500) == f"-${NBSP}2.500"


def test_numeric_strings_are_formatted():
    assert format_currency("7000000") == f"${NBSP}7.000.000"


def test_format_currency_columns_leaves_other_columns():
    frame = pd.DataFrame({"tuition_value": [1000, None], "program_name": ["a", "b"]})
    out = format_currency_columns(frame, ["tuition_value", "missing"])
    assert out["tuition_value"].tolist() == [f"${NBSP}1.000", NOT_AVAILABLE_LABEL]
    assert out["program_name"].tolist() == ["a", "b"]
    assert frame["tuition_value"].iloc[0] == 1000


def test_filter_summary_escapes_user_text():
    summary = format_filter_summary(ProgramFilters(search_term="<script>x</script>", region="A & B"))
    assert "<script>" not in summary
    assert "&lt;script&gt;x&lt;/script&gt;" in summary
    assert "Departamento: A &amp; B" in summary
    assert "Universidad: Todas" in summary


def test_filter_summary_omits_empty_search():
    assert "Búsqueda" not in format_filter_summary(ProgramFilters())
