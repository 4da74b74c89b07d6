"""RunwayDesigner: beam selection + structural checks for one crane runway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .capacity import CapacityTrace, interpolate_capacity, trace_capacity
from .catalog import BeamCatalog, default_catalog
from .checks import (
    CheckResult,
    check_axial_unity,
    check_bending_stress,
    check_lateral_deflection,
    check_longitudinal_deflection,
)
from .config import BeamConfiguration
from .errors import SelectionError
from .k_factors import LoadFactorTable, default_factor_table
from .search import BeamCandidate, find_alternatives, find_top_adequate, rank_candidates
from .section_data import BeamSection

CANDIDATE_LIMIT = 5
FOUNDATION_ALLOWANCE = 2_500.0  # lbs added to the column load on the foundation


def overturning_moment(moment_lb_in: float) -> float:
    """lb·in → kip·ft."""
    return moment_lb_in / (1000.0 * 12.0)


@dataclass(frozen=True)
class AnalysisResult:
    """Everything computed for one configuration. Immutable, safe to serialise."""

    # Load distribution
    k1: float
    k2: float
    wheelbase_span_ratio: float
    impact_factor: float
    ecl: float                      # lbs, k1 · max wheel load

    # Beam selection
    span: float                     # ft
    capped: bool
    selected_beam: BeamSection
    candidates: tuple[BeamCandidate, ...]

    # Crane weights
    girder_weight: float
    panel_weight: float
    end_truck_weight: float
    total_beam_weight: float

    # Loads (lbs)
    max_wheel_load: float
    runway_beam_weight: float
    lateral_load: float
    longitudinal_load: float

    # Moments
    column_moment: float            # lb·in
    foundation_moment: float        # lb·in
    lateral_otm: float              # kip·ft
    longitudinal_otm: float         # kip·ft

    # Foundation loads
    max_vertical_load: float        # lbs
    column_load_foundation: float   # kips

    # Checks
    lateral_deflection: CheckResult
    longitudinal_deflection: CheckResult
    bending_stress: CheckResult
    axial_unity: CheckResult

    @property
    def lateral_deflection_ok(self) -> bool:
        return self.lateral_deflection.ok

    @property
    def longitudinal_deflection_ok(self) -> bool:
        return self.longitudinal_deflection.ok

    @property
    def stress_ok(self) -> bool:
        return self.bending_stress.ok

    @property
    def axial_ok(self) -> bool:
        return self.axial_unity.ok

    @property
    def checks(self) -> tuple[CheckResult, ...]:
        return (
            self.lateral_deflection,
            self.longitudinal_deflection,
            self.bending_stress,
            self.axial_unity,
        )

    @property
    def overall_pass(self) -> bool:
        return all(c.ok for c in self.checks)

    @property
    def governing_check(self) -> CheckResult:
        return max(self.checks, key=lambda c: c.utilisation)

    @property
    def selected_capacity(self) -> float:
        return self.candidates[0].capacity

    def summary_table(self) -> list[dict[str, Any]]:
        return [
            {
                "check": c.name,
                "demand": round(c.demand, 4),
                "limit": round(c.limit, 4),
                "units": c.units,
                "utilisation": round(c.utilisation, 3),
                "ok": c.ok,
            }
            for c in self.checks
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "k1": self.k1,
            "k2": self.k2,
            "wheelbase_span_ratio": self.wheelbase_span_ratio,
            "impact_factor": self.impact_factor,
            "ecl": self.ecl,
            "span": self.span,
            "capped": self.capped,
            "selected_beam": _section_dict(self.selected_beam),
            "candidates": [
                {
                    "rank": c.rank,
                    "designation": c.designation,
                    "weight": c.weight,
                    "depth": c.section.depth,
                    "capacity": c.capacity,
                    "utilisation": c.utilisation,
                    "margin": c.margin,
                }
                for c in self.candidates
            ],
            "girder_weight": self.girder_weight,
            "panel_weight": self.panel_weight,
            "end_truck_weight": self.end_truck_weight,
            "total_beam_weight": self.total_beam_weight,
            "max_wheel_load": self.max_wheel_load,
            "runway_beam_weight": self.runway_beam_weight,
            "lateral_load": self.lateral_load,
            "longitudinal_load": self.longitudinal_load,
            "column_moment": self.column_moment,
            "foundation_moment": self.foundation_moment,
            "lateral_otm": self.lateral_otm,
            "longitudinal_otm": self.longitudinal_otm,
            "max_vertical_load": self.max_vertical_load,
            "column_load_foundation": self.column_load_foundation,
            "checks": self.summary_table(),
            "lateral_deflection_ok": self.lateral_deflection_ok,
            "longitudinal_deflection_ok": self.longitudinal_deflection_ok,
            "stress_ok": self.stress_ok,
            "axial_ok": self.axial_ok,
            "overall_pass": self.overall_pass,
        }

    def print_summary(self) -> None:
        beam = self.selected_beam
        print(f"\n{'=' * 72}")
        print(f"  Runway Beam Analysis: {'Capped' if self.capped else 'Uncapped'} system, span {self.span:.1f} ft")
        print(f"{'=' * 72}")
        print(f"  k1 = {self.k1:.3f}, k2 = {self.k2:.3f}, ECL = {self.ecl:,.0f} lbs")
        print(f"  Selected: {beam.designation} ({beam.weight:g} lbs/ft, I = {beam.Ix:g} in⁴, S = {beam.Sx:g} in³)")
        print("-" * 72)
        print(f"  {'Rank':<5} {'Designation':<20} {'lbs/ft':>8} {'Capacity':>10} {'Util %':>8}")
        for c in self.candidates:
            print(f"  {c.rank:<5} {c.designation:<20} {c.weight:>8.1f} {c.capacity:>10,.0f} {c.utilisation:>8.1f}")
        print("-" * 72)
        print(f"  Lateral OTM: {self.lateral_otm:.2f} kip-ft   Longitudinal OTM: {self.longitudinal_otm:.2f} kip-ft")
        print(f"  Column load on foundation: {self.column_load_foundation:.2f} kips")
        print("-" * 72)
        print(f"  {'Check':<26} {'Demand':>12} {'Limit':>12} {'Util':>7} {'Status':>7}")
        for row in self.summary_table():
            status = "PASS" if row["ok"] else "FAIL"
            print(
                f"  {row['check']:<26} {row['demand']:>12.4f} {row['limit']:>12.4f} "
                f"{row['utilisation']:>7.3f} {status:>7}"
            )
        print("-" * 72)
        print(f"  Overall: {'PASS' if self.overall_pass else 'FAIL'}")
        print(f"{'=' * 72}\n")


def _section_dict(section: BeamSection) -> dict[str, Any]:
    data = {
        "designation": section.designation,
        "capped": section.capped,
        "weight": section.weight,
        "depth": section.depth,
        "area": section.area,
        "Ix": section.Ix,
        "Sx": section.Sx,
    }
    if section.capped:
        data.update(
            w_shape=section.w_shape,
            channel=section.channel,
            width=section.width,
            yc=section.yc,
            yt=section.yt,
            Sc=section.Sc,
            Sl=section.Sl,
            torsional_constant=section.torsional_constant,
        )
    else:
        data.update(
            web_thickness=section.web_thickness,
            flange_width=section.flange_width,
            flange_thickness=section.flange_thickness,
            flange_area=section.flange_area,
            rx=section.rx,
            flange_gage=section.flange_gage,
        )
    return data


class RunwayDesigner:
    """High-level API: catalog + K-factor table injected once, reused per analysis."""

    def __init__(
        self,
        catalog: BeamCatalog | None = None,
        factor_table: LoadFactorTable | None = None,
    ) -> None:
        self.catalog = catalog or default_catalog()
        self.factor_table = factor_table or default_factor_table()

    # ── Lookups ──────────────────────────────────────────────────

    def lookup_factors(self, ratio: float) -> tuple[float, float]:
        return self.factor_table.lookup(ratio)

    def lookup_capacity(self, designation: str, span: float, capped: bool = False) -> float | None:
        return interpolate_capacity(self.catalog, designation, span, capped)

    def trace_capacity(self, designation: str, span: float, capped: bool = False) -> CapacityTrace:
        return trace_capacity(self.catalog, designation, span, capped)

    def search_beams(
        self, required_load: float, span: float, capped: bool = False, limit: int = CANDIDATE_LIMIT
    ) -> list[BeamSection]:
        return find_top_adequate(self.catalog, required_load, span, capped, limit)

    def rank_beams(
        self, required_load: float, span: float, capped: bool = False, limit: int = CANDIDATE_LIMIT
    ) -> list[BeamCandidate]:
        return rank_candidates(self.catalog, required_load, span, capped, limit)

    # ── Configuration-level helpers ──────────────────────────────

    def required_capacity(self, config: BeamConfiguration) -> float:
        k1, _ = self.lookup_factors(config.wheelbase_span_ratio)
        return k1 * config.max_wheel_load

    def is_beam_adequate(self, config: BeamConfiguration, beam: BeamSection) -> bool:
        capacity = self.lookup_capacity(beam.designation, config.bridge_span, beam.capped)
        return capacity is not None and capacity >= self.required_capacity(config)

    def find_alternatives(self, config: BeamConfiguration, max_options: int = 10) -> list[BeamSection]:
        return find_alternatives(
            self.catalog,
            self.required_capacity(config),
            config.bridge_span,
            config.capped,
            max_options,
        )

    # ── Analysis ─────────────────────────────────────────────────

    def analyze(self, config: BeamConfiguration) -> AnalysisResult:
        """Select the lightest adequate beam and run the four checks.

        Raises ``SelectionError`` if no beam in the configured system carries
        the ECL at the bridge span.
        """
        k1, k2 = self.lookup_factors(config.wheelbase_span_ratio)
        ecl = k1 * config.max_wheel_load

        candidates = self.rank_beams(ecl, config.bridge_span, config.capped, CANDIDATE_LIMIT)
        if not candidates:
            raise SelectionError(ecl, config.bridge_span, config.capped)
        beam = candidates[0].section

        runway_beam_weight = beam.weight * config.bridge_span
        lateral = config.lateral_load
        longitudinal = config.longitudinal_load

        column_moment = lateral * config.rail_height_in
        foundation_moment = longitudinal * config.rail_height_in

        max_vertical = (
            config.rated_capacity
            + config.total_beam_weight
            + config.hoist_trolley_weight
            + runway_beam_weight
        )

        return AnalysisResult(
            k1=k1,
            k2=k2,
            wheelbase_span_ratio=config.wheelbase_span_ratio,
            impact_factor=config.impact_factor,
            ecl=ecl,
            span=config.bridge_span,
            capped=config.capped,
            selected_beam=beam,
            candidates=tuple(candidates),
            girder_weight=config.girder_weight,
            panel_weight=config.panel_weight,
            end_truck_weight=config.end_truck_weight,
            total_beam_weight=config.total_beam_weight,
            max_wheel_load=config.max_wheel_load,
            runway_beam_weight=runway_beam_weight,
            lateral_load=lateral,
            longitudinal_load=longitudinal,
            column_moment=column_moment,
            foundation_moment=foundation_moment,
            lateral_otm=overturning_moment(column_moment),
            longitudinal_otm=overturning_moment(foundation_moment),
            max_vertical_load=max_vertical,
            column_load_foundation=(max_vertical + FOUNDATION_ALLOWANCE) / 1000.0,
            lateral_deflection=check_lateral_deflection(config, beam, lateral),
            longitudinal_deflection=check_longitudinal_deflection(config, beam, longitudinal),
            bending_stress=check_bending_stress(config, beam, lateral),
            axial_unity=check_axial_unity(config, max_vertical),
        )


def analyze(config: BeamConfiguration, designer: RunwayDesigner | None = None) -> AnalysisResult:
    """Run a full analysis with the packaged catalog unless a designer is given."""
    return (designer or RunwayDesigner()).analyze(config)


def search_beams(
    required_load: float,
    span: float,
    capped: bool = False,
    limit: int = CANDIDATE_LIMIT,
    catalog: BeamCatalog | None = None,
) -> list[BeamSection]:
    return find_top_adequate(catalog or default_catalog(), required_load, span, capped, limit)
