from __future__ import annotations

import logging
import math
from typing import Any, Dict

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import FacetOptionsResponse, MetaListResponse, ProgramFiltersModel, ProgramsResponse
from explorer.data import LoadError, load_program_data, prepare_context
from explorer.filters import FACET_FIELDS, ProgramFilters, normalize_filters
from explorer.metrics_debug import compute_debug
from explorer.metrics_programs import compute_programs
from explorer.metrics_summary import compute_summary


app = FastAPI(title="ESP TOC Program Explorer API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _filters_from_model(model: ProgramFiltersModel) -> ProgramFilters:
    return normalize_filters(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
            },
        )
    )


def _load_error(exc: LoadError) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content={"error": exc.detail, "reason": exc.reason, "type": type(exc).__name__},
    )


def _server_error(name: str, exc: Exception) -> JSONResponse:
    logger.exception("%s failed", name)
    return JSONResponse(status_code=500, content={"error": str(exc), "type": type(exc).__name__})


def _context(filters: ProgramFiltersModel) -> Dict[str, Any]:
    data_ctx = load_program_data()
    return prepare_context(_filters_from_model(filters), data_ctx)


@app.get("/meta/facets", response_model=FacetOptionsResponse)
def meta_facets():
    try:
        facets = load_program_data().get("facets", {}) or {}
        return FacetOptionsResponse(
            institutions=facets.get("institution", []),
            regions=facets.get("region", []),
            programs=facets.get("program", []),
        )
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("meta_facets", exc)


@app.get("/meta/facets/{facet}", response_model=MetaListResponse)
def meta_facet(facet: str):
    if facet not in FACET_FIELDS:
        return JSONResponse(status_code=404, content={"error": f"Unknown facet: {facet}", "facets": list(FACET_FIELDS)})
    try:
        facets = load_program_data().get("facets", {}) or {}
        return MetaListResponse(values=facets.get(facet, []))
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("meta_facet", exc)


@app.post("/programs", response_model=ProgramsResponse)
def programs(filters: ProgramFiltersModel):
    try:
        ctx = _context(filters)
        return _json(compute_programs(ctx["filters"], ctx))
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("programs", exc)


@app.post("/summary")
def summary(filters: ProgramFiltersModel):
    try:
        ctx = _context(filters)
        return _json(compute_summary(ctx["filters"], ctx))
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("summary", exc)


@app.post("/debug")
def debug(filters: ProgramFiltersModel):
    try:
        ctx = _context(filters)
        return _json(compute_debug(ctx["filters"], ctx))
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("debug", exc)


@app.post("/export")
def export_programs(filters: ProgramFiltersModel):
    try:
        ctx = _context(filters)
        export_df = ctx.get("filtered_programs")
        if export_df is None or not hasattr(export_df, "to_csv"):
            export_df = pd.DataFrame()
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except LoadError as exc:
        return _load_error(exc)
    except Exception as exc:
        return _server_error("export", exc)
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=programas.csv"},
    )
