"""Pydantic request/response models for the API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


# ── Request Models ────────────────────────────────────────────


class BeamConfigurationInput(BaseModel):
    rated_capacity: float  # lbs
    hoist_trolley_weight: float  # lbs
    girder_weight: float  # lbs
    panel_weight: float  # lbs
    end_truck_weight: float  # lbs
    num_columns: int
    rail_height: float  # ft
    wheelbase: float  # ft
    support_centers: float  # ft
    bridge_span: float  # ft
    freestanding: bool = False
    capped: bool = True
    hoist_speed: float = 0.0  # ft/min, 0 = default impact


class AlternativesRequest(BaseModel):
    configuration: BeamConfigurationInput
    max_options: int = Field(10, gt=0, le=50)


class ReportRequest(BaseModel):
    configuration: BeamConfigurationInput
    project_title: str = ""
    job_no: str = ""
    calcs_by: str = ""
    include_chart: bool = True


class SaveAnalysisRequest(BaseModel):
    user_id: int
    project_name: str = Field(min_length=1)
    configuration: BeamConfigurationInput
    notes: str = ""


# ── Response Models ───────────────────────────────────────────


class SectionInfo(BaseModel):
    designation: str
    system: Literal["uncapped", "capped"]
    weight: float  # lbs/ft
    depth: float  # in
    area: float  # in²
    Ix: float  # in⁴
    Sx: float  # in³
    lower_flange_load: int | None = None  # lbs, uncapped only


class KFactorOutput(BaseModel):
    ratio: float
    k1: float
    k2: float
    clamped: bool
    closest_ratio: float
    guidance: str


class CapacityOutput(BaseModel):
    designation: str
    span: float
    capped: bool
    capacity: float
    kind: str
    lower_span: int | None = None
    upper_span: int | None = None
    description: str


class CandidateOutput(BaseModel):
    rank: int
    designation: str
    weight: float
    depth: float
    capacity: float
    utilisation: float  # %
    margin: float  # lbs


class BeamSearchOutput(BaseModel):
    required_load: float
    span: float
    capped: bool
    candidates: list[CandidateOutput]


class AlternativeOutput(BaseModel):
    designation: str
    capped: bool
    weight: float
    capacity: float | None = None


class ValidationOutput(BaseModel):
    is_valid: bool
    summary: str
    derived: dict[str, float]


class CheckOutput(BaseModel):
    check: str
    demand: float
    limit: float
    units: str
    utilisation: float
    ok: bool


class AnalysisOutput(BaseModel):
    k1: float
    k2: float
    wheelbase_span_ratio: float
    impact_factor: float
    ecl: float
    span: float
    capped: bool
    selected_beam: dict[str, Any]
    candidates: list[CandidateOutput]
    girder_weight: float
    panel_weight: float
    end_truck_weight: float
    total_beam_weight: float
    max_wheel_load: float
    runway_beam_weight: float
    lateral_load: float
    longitudinal_load: float
    column_moment: float
    foundation_moment: float
    lateral_otm: float
    longitudinal_otm: float
    max_vertical_load: float
    column_load_foundation: float
    checks: list[CheckOutput]
    lateral_deflection_ok: bool
    longitudinal_deflection_ok: bool
    stress_ok: bool
    axial_ok: bool
    overall_pass: bool
    governing_check: str
    configuration_summary: str


class SavedAnalysisSummary(BaseModel):
    id: int
    user_id: int
    project_name: str
    notes: str = ""
    created_at: str
    updated_at: str


class SavedAnalysisOutput(SavedAnalysisSummary):
    configuration: dict[str, Any]
    results: dict[str, Any]
