from __future__ import annotations

import logging
from functools import lru_cache
from io import BytesIO
from pathlib import Path
from typing import Dict, Union

import pandas as pd
import requests

from explorer.facets import compute_facet_options
from explorer.filters import ProgramFilters, normalize_filters
from explorer.metrics_summary import summarize
from explorer.query import filter_programs
from explorer.records import PROGRAM_COLUMNS


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1]
DATASET_FILENAME = "ESP_TOC.xlsx"
DATASET_SOURCE = DATA_DIR / DATASET_FILENAME
FETCH_TIMEOUT_SECONDS = 30

FETCH_FAILED = "fetch failed"
DECODE_FAILED = "decode failed"

Source = Union[str, Path]


class LoadError(Exception):
    """The dataset could not be fetched or decoded. Fatal for the session."""

    def __init__(self, reason: str, detail: str) -> None:
        super().__init__(f"{reason}: {detail}")
        self.reason = reason
        self.detail = detail


def is_remote(source: Source) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def fetch_bytes(source: Source) -> bytes:
    if is_remote(source):
        try:
            response = requests.get(str(source), timeout=FETCH_TIMEOUT_SECONDS)
            response.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise LoadError(FETCH_FAILED, f"No se pudo cargar {source}: {exc}") from exc
        return response.content
    path = Path(source)
    try:
        return path.read_bytes()
    except OSError as exc:
        raise LoadError(FETCH_FAILED, f"No se pudo cargar el archivo {path.name}: {exc}") from exc


def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    return df.loc[:, ~df.columns.duplicated()]


def decode_workbook(payload: bytes) -> pd.DataFrame:
    """First worksheet, first row as header, known headers mapped to canonical names."""
    try:
        df = pd.read_excel(BytesIO(payload), sheet_name=0)
    except Exception as exc:
        raise LoadError(DECODE_FAILED, f"{type(exc).__name__}: {exc}") from exc
    df = df.rename(columns=PROGRAM_COLUMNS)
    return drop_duplicate_columns(df)


def load_programs(source: Source = DATASET_SOURCE) -> pd.DataFrame:
    logger.info("Loading programs from %s", source)
    try:
        programs = decode_workbook(fetch_bytes(source))
    except LoadError as exc:
        logger.warning("Program load failed (%s): %s", exc.reason, exc.detail)
        raise
    logger.info("Loaded %d programs (%d columns)", len(programs), len(programs.columns))
    return programs


# ---------------- Public API (Streamlit parity + FastAPI use) ----------------
@lru_cache(maxsize=4)
def _load_program_data_cached(source: str) -> Union[Dict[str, object], LoadError]:
    # The first outcome per source is kept, failures included: no retry, no refresh.
    try:
        programs = load_programs(source)
    except LoadError as exc:
        return exc
    return {
        "source": source,
        "programs": programs,
        "facets": compute_facet_options(programs),
    }


def load_program_data(source: Source = DATASET_SOURCE) -> Dict[str, object]:
    """Load the dataset once per source and derive its facet lists.

    A failed load raises the same `LoadError` on every later call.
    """
    outcome = _load_program_data_cached(str(source))
    if isinstance(outcome, LoadError):
        raise outcome
    return outcome


def prepare_context(filters: Union[dict, ProgramFilters], data_ctx: Dict[str, object]) -> Dict[str, object]:
    programs: pd.DataFrame = data_ctx.get("programs", pd.DataFrame())
    facets = data_ctx.get("facets")
    if facets is None:
        facets = compute_facet_options(programs)

    filt = filters if isinstance(filters, ProgramFilters) else normalize_filters(filters)
    filtered_programs = filter_programs(programs, filt)

    return {
        "filters": filt,
        "programs": programs,
        "filtered_programs": filtered_programs,
        "facets": facets,
        "stats": summarize(filtered_programs),
    }
