"""FastAPI application: crane runway beam sizing API."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from runway import (
    AnalysisResult,
    BeamConfiguration,
    RunwayDesigner,
    SelectionError,
    render_report,
    validate,
)
from runway.capacity import clear_capacity_cache

from .schemas import (
    AlternativeOutput,
    AlternativesRequest,
    AnalysisOutput,
    BeamConfigurationInput,
    BeamSearchOutput,
    CandidateOutput,
    CapacityOutput,
    KFactorOutput,
    ReportRequest,
    SaveAnalysisRequest,
    SavedAnalysisOutput,
    SavedAnalysisSummary,
    SectionInfo,
    ValidationOutput,
)
from .store import DEFAULT_DB_PATH, AnalysisStore

logging.basicConfig(
    level=os.getenv("RUNWAY_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Runway Beam API", version="0.1.0")

REFERENCE_CONFIGURATION = dict(
    rated_capacity=10_000,
    hoist_trolley_weight=1_700,
    girder_weight=3_000,
    panel_weight=2_000,
    end_truck_weight=1_000,
    num_columns=2,
    rail_height=20,
    wheelbase=7,
    support_centers=45,
    bridge_span=44,
    freestanding=False,
    capped=True,
)


def _cors_origins() -> list[str]:
    raw_origins = os.getenv("CORS_ORIGINS", "")
    parsed = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed == ["*"]:
        return ["*"]

    defaults = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    return [*defaults, *parsed]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Dependencies ──────────────────────────────────────────────


@lru_cache(maxsize=None)
def get_designer() -> RunwayDesigner:
    return RunwayDesigner()


@lru_cache(maxsize=None)
def get_store() -> AnalysisStore:
    return AnalysisStore(os.getenv("RUNWAY_DB_PATH", DEFAULT_DB_PATH))


# ── Helpers ───────────────────────────────────────────────────


def _configuration(data: BeamConfigurationInput) -> BeamConfiguration:
    result = validate(data.model_dump())
    if not result.ok:
        raise HTTPException(
            status_code=422,
            detail={"field": result.error.field, "error": result.error.message},
        )
    return result.value


def _analyze(designer: RunwayDesigner, config: BeamConfiguration) -> AnalysisResult:
    try:
        return designer.analyze(config)
    except SelectionError as e:
        logger.warning("Beam selection failed for %s: %s", config, e)
        raise HTTPException(status_code=422, detail=str(e))


def _analysis_output(result: AnalysisResult, config: BeamConfiguration) -> AnalysisOutput:
    return AnalysisOutput(
        **result.to_dict(),
        governing_check=result.governing_check.name,
        configuration_summary=config.summary(),
    )


# ── Health ────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    """Lightweight healthcheck for deployment platforms."""
    return {"status": "ok"}


@app.get("/api/beam-sizing/health")
def engine_health(designer: RunwayDesigner = Depends(get_designer)) -> dict:
    """Run the reference configuration end to end."""
    try:
        config = BeamConfiguration.create(**REFERENCE_CONFIGURATION)
        result = designer.analyze(config)
    except Exception as e:
        logger.exception("Engine self-test failed")
        raise HTTPException(status_code=500, detail=f"Engine self-test failed: {e}")
    return {
        "status": "healthy",
        "test_result": {
            "selected_beam": result.selected_beam.designation,
            "ecl": round(result.ecl, 1),
            "overall_pass": result.overall_pass,
        },
    }


@app.post("/api/clear-cache")
def clear_cache() -> dict[str, str]:
    clear_capacity_cache()
    logger.info("Capacity cache cleared")
    return {"status": "cleared"}


# ── Catalog lookups ───────────────────────────────────────────


@app.get("/api/sections", response_model=list[SectionInfo])
def get_sections(
    system: str = Query("uncapped", pattern="^(uncapped|capped)$"),
    series: str | None = None,
    designer: RunwayDesigner = Depends(get_designer),
) -> list[SectionInfo]:
    """List catalog sections of one beam system, lightest first."""
    capped = system == "capped"
    catalog = designer.catalog
    results: list[SectionInfo] = []
    for designation in catalog.list_sections(capped, series):
        s = catalog.section(designation, capped)
        results.append(
            SectionInfo(
                designation=designation,
                system=system,
                weight=s.weight,
                depth=s.depth,
                area=s.area,
                Ix=s.Ix,
                Sx=s.Sx,
                lower_flange_load=None if capped else catalog.lower_flange_loading(designation),
            )
        )
    return results


@app.get("/api/k-factors", response_model=KFactorOutput)
def get_k_factors(
    ratio: float, designer: RunwayDesigner = Depends(get_designer)
) -> KFactorOutput:
    table = designer.factor_table
    k1, k2 = table.lookup(ratio)
    return KFactorOutput(
        ratio=ratio,
        k1=k1,
        k2=k2,
        clamped=not table.is_supported(ratio),
        closest_ratio=table.closest_row(ratio).ratio,
        guidance=table.guidance(ratio),
    )


@app.get("/api/capacity", response_model=CapacityOutput)
def get_capacity(
    designation: str,
    span: float = Query(..., gt=0),
    capped: bool = False,
    designer: RunwayDesigner = Depends(get_designer),
) -> CapacityOutput:
    trace = designer.trace_capacity(designation, span, capped)
    if not trace.found:
        raise HTTPException(status_code=404, detail=trace.describe())
    return CapacityOutput(
        designation=designation,
        span=span,
        capped=capped,
        capacity=trace.capacity,
        kind=trace.kind.value,
        lower_span=trace.lower_span,
        upper_span=trace.upper_span,
        description=trace.describe(),
    )


@app.get("/api/beams", response_model=BeamSearchOutput)
def get_beams(
    ecl: float = Query(..., gt=0),
    span: float = Query(..., gt=0),
    capped: bool = False,
    limit: int = Query(5, gt=0, le=50),
    designer: RunwayDesigner = Depends(get_designer),
) -> BeamSearchOutput:
    """Adequate beams for a required load, lightest first."""
    candidates = designer.rank_beams(ecl, span, capped, limit)
    return BeamSearchOutput(
        required_load=ecl,
        span=span,
        capped=capped,
        candidates=[
            CandidateOutput(
                rank=c.rank,
                designation=c.designation,
                weight=c.weight,
                depth=c.section.depth,
                capacity=c.capacity,
                utilisation=c.utilisation,
                margin=c.margin,
            )
            for c in candidates
        ],
    )


# ── Configuration & analysis ──────────────────────────────────


@app.post("/api/validate", response_model=ValidationOutput)
def validate_configuration(data: BeamConfigurationInput) -> ValidationOutput:
    config = _configuration(data)
    return ValidationOutput(
        is_valid=True,
        summary=config.summary(),
        derived={
            "total_beam_weight": config.total_beam_weight,
            "impact_factor": config.impact_factor,
            "max_wheel_load": config.max_wheel_load,
            "wheelbase_span_ratio": config.wheelbase_span_ratio,
            "lateral_load": config.lateral_load,
            "longitudinal_load": config.longitudinal_load,
            "effective_length": config.effective_length,
        },
    )


@app.post("/api/analyze", response_model=AnalysisOutput)
def analyze(
    data: BeamConfigurationInput, designer: RunwayDesigner = Depends(get_designer)
) -> AnalysisOutput:
    config = _configuration(data)
    result = _analyze(designer, config)
    return _analysis_output(result, config)


@app.post("/api/alternatives", response_model=list[AlternativeOutput])
def alternatives(
    data: AlternativesRequest, designer: RunwayDesigner = Depends(get_designer)
) -> list[AlternativeOutput]:
    """Lightest options from the requested system, topped up from the other one."""
    config = _configuration(data.configuration)
    return [
        AlternativeOutput(
            designation=beam.designation,
            capped=beam.capped,
            weight=beam.weight,
            capacity=designer.lookup_capacity(beam.designation, config.bridge_span, beam.capped),
        )
        for beam in designer.find_alternatives(config, data.max_options)
    ]


# ── HTML report ───────────────────────────────────────────────


@app.post("/api/report", response_class=HTMLResponse)
def report(data: ReportRequest, designer: RunwayDesigner = Depends(get_designer)) -> HTMLResponse:
    """Render the calculation report as a standalone HTML page."""
    config = _configuration(data.configuration)
    result = _analyze(designer, config)
    html = render_report(
        result,
        config,
        designer.catalog,
        project_title=data.project_title,
        job_no=data.job_no,
        calcs_by=data.calcs_by,
        include_chart=data.include_chart,
    )
    return HTMLResponse(content=html)


# ── Saved analyses ────────────────────────────────────────────


@app.post("/api/analyses", response_model=SavedAnalysisOutput, status_code=201)
def save_analysis(
    data: SaveAnalysisRequest,
    designer: RunwayDesigner = Depends(get_designer),
    store: AnalysisStore = Depends(get_store),
) -> SavedAnalysisOutput:
    config = _configuration(data.configuration)
    result = _analyze(designer, config)
    saved = store.save(
        user_id=data.user_id,
        project_name=data.project_name,
        configuration=config.inputs(),
        results=result.to_dict(),
        notes=data.notes,
    )
    logger.info("Saved analysis %s for user %s", saved["id"], data.user_id)
    return SavedAnalysisOutput(**saved)


@app.get("/api/analyses", response_model=list[SavedAnalysisSummary])
def list_analyses(
    user_id: int, store: AnalysisStore = Depends(get_store)
) -> list[SavedAnalysisSummary]:
    return [SavedAnalysisSummary(**row) for row in store.list_for_user(user_id)]


@app.get("/api/analyses/{analysis_id}", response_model=SavedAnalysisOutput)
def load_analysis(
    analysis_id: int, user_id: int, store: AnalysisStore = Depends(get_store)
) -> SavedAnalysisOutput:
    saved = store.get(analysis_id, user_id)
    if saved is None:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return SavedAnalysisOutput(**saved)


@app.delete("/api/analyses/{analysis_id}")
def delete_analysis(
    analysis_id: int, user_id: int, store: AnalysisStore = Depends(get_store)
) -> dict[str, bool]:
    if not store.delete(analysis_id, user_id):
        raise HTTPException(status_code=404, detail="Analysis not found")
    logger.info("Deleted analysis %s for user %s", analysis_id, user_id)
    return {"success": True}
