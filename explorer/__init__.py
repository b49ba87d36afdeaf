"""Core (UI-agnostic) program explorer logic.

This package contains:
- data loading (XLSX bytes -> pandas)
- filter state and normalization
- facet option lists, filtering and summary statistics
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
