from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Dict, Mapping, Optional


# Facet name -> canonical dataset column.
FACET_FIELDS: Dict[str, str] = {
    "institution": "institution_name",
    "region": "region",
    "program": "program_name",
}

# Columns scanned by the free-text search.
SEARCH_FIELDS = ("institution_name", "program_name", "region", "locality")


@dataclass(frozen=True)
class ProgramFilters:
    search_term: str = ""
    institution: str = ""
    region: str = ""
    program: str = ""

    @property
    def is_active(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))

    def with_value(self, name: str, value: Optional[str]) -> "ProgramFilters":
        """Return a copy with one field updated (one user action = one field)."""
        if name not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown filter field: {name!r}")
        return replace(self, **{name: _as_text(value)})

    def cleared(self) -> "ProgramFilters":
        return ProgramFilters()

    def as_state(self) -> Dict[str, str]:
        return asdict(self)


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_filters(raw: Optional[dict]) -> ProgramFilters:
    # Values are kept verbatim: a whitespace-only search is still a constraint.
    raw = raw or {}
    return ProgramFilters(
        search_term=_as_text(raw.get("search_term")),
        institution=_as_text(raw.get("institution")),
        region=_as_text(raw.get("region")),
        program=_as_text(raw.get("program")),
    )


def filters_from_state(state: Mapping[str, object]) -> ProgramFilters:
    """Build filters from widget state, one field at a time; absent keys stay empty."""
    filt = ProgramFilters()
    for f in fields(ProgramFilters):
        if f.name in state:
            filt = filt.with_value(f.name, state[f.name])  # type: ignore[arg-type]
    return filt
