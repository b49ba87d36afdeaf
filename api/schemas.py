from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProgramFiltersModel(BaseModel):
    search_term: str = ""
    institution: str = ""
    region: str = ""
    program: str = ""


class FacetOptionsResponse(BaseModel):
    institutions: List[str] = Field(default_factory=list)
    regions: List[str] = Field(default_factory=list)
    programs: List[str] = Field(default_factory=list)


class MetaListResponse(BaseModel):
    values: List[str]


class ProgramModel(BaseModel):
    institution_name: Optional[str] = None
    program_name: Optional[str] = None
    region: Optional[str] = None
    locality: Optional[str] = None
    coverage_type: Optional[str] = None
    tuition_value: Optional[float] = None
    program_code: Optional[str] = None
    institution_code: Optional[str] = None
    tuition_label: str


class ProgramsResponse(BaseModel):
    filters: ProgramFiltersModel
    total: int
    rows: List[ProgramModel]
