"""runway: crane runway beam selection and structural checks."""

from .capacity import CapacityTrace, LookupKind, interpolate_capacity, lookup_capacity, trace_capacity
from .catalog import BeamCatalog, CapacityTable, default_catalog, load_catalog
from .checks import CheckResult
from .config import BeamConfiguration, Err, Ok, validate
from .designer import AnalysisResult, RunwayDesigner, analyze, search_beams
from .errors import RunwayError, SelectionError, ValidationError
from .k_factors import LoadFactorRow, LoadFactorTable, default_factor_table, lookup_factors
from .report import generate_report, render_report
from .search import BeamCandidate, find_alternatives, find_top_adequate, rank_candidates
from .section_data import BeamSection, CappedSection, WideFlangeSection

__all__ = [
    "AnalysisResult",
    "BeamCandidate",
    "BeamCatalog",
    "BeamConfiguration",
    "BeamSection",
    "CapacityTable",
    "CapacityTrace",
    "CappedSection",
    "CheckResult",
    "Err",
    "LoadFactorRow",
    "LoadFactorTable",
    "LookupKind",
    "Ok",
    "RunwayDesigner",
    "RunwayError",
    "SelectionError",
    "ValidationError",
    "WideFlangeSection",
    "analyze",
    "default_catalog",
    "default_factor_table",
    "find_alternatives",
    "find_top_adequate",
    "generate_report",
    "interpolate_capacity",
    "load_catalog",
    "lookup_capacity",
    "lookup_factors",
    "rank_candidates",
    "render_report",
    "search_beams",
    "trace_capacity",
    "validate",
]
