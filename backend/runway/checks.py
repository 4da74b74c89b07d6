"""Closed-form structural checks on the selected runway beam / column.

All checks work in pounds and inches except the axial unity check, whose
slenderness term uses the effective length in feet.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import BeamConfiguration
from .section_data import BeamSection

# ── Constants ────────────────────────────────────────────────────────────
E_STEEL = 29_000_000.0              # psi
ALLOWABLE_BENDING_STRESS = 24_000.0  # psi
ALLOWABLE_AXIAL_LOAD = 24_000.0      # lbs, axial term denominator
SLENDERNESS_ALLOWANCE = 43.2         # ft, effective-length term denominator
LATERAL_DEFLECTION_RATIO = 450.0     # L/450
LONGITUDINAL_DEFLECTION_RATIO = 500.0  # L/500


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check: passes iff ``demand < limit``."""

    name: str
    demand: float
    limit: float
    units: str
    ok: bool

    @property
    def utilisation(self) -> float:
        return self.demand / self.limit


def _cantilever_deflection(load: float, height_in: float, Ix: float) -> float:
    return load * height_in**3 / (3.0 * E_STEEL * Ix)


def check_lateral_deflection(
    config: BeamConfiguration, beam: BeamSection, lateral_load: float
) -> CheckResult:
    h = config.rail_height_in
    deflection = _cantilever_deflection(lateral_load, h, beam.Ix)
    allowable = h / LATERAL_DEFLECTION_RATIO
    return CheckResult("lateral_deflection", deflection, allowable, "in", deflection < allowable)


def check_longitudinal_deflection(
    config: BeamConfiguration, beam: BeamSection, longitudinal_load: float
) -> CheckResult:
    h = config.rail_height_in
    deflection = _cantilever_deflection(longitudinal_load, h, beam.Ix)
    allowable = h / LONGITUDINAL_DEFLECTION_RATIO
    return CheckResult("longitudinal_deflection", deflection, allowable, "in", deflection < allowable)


def check_bending_stress(
    config: BeamConfiguration, beam: BeamSection, lateral_load: float
) -> CheckResult:
    stress = lateral_load * config.rail_height_in / beam.Sx
    return CheckResult(
        "bending_stress", stress, ALLOWABLE_BENDING_STRESS, "psi", stress < ALLOWABLE_BENDING_STRESS
    )


def check_axial_unity(config: BeamConfiguration, axial_load: float) -> CheckResult:
    """fa/Fa + fe/Fe < 1.0, with ``axial_load`` the maximum vertical load."""
    ratio = axial_load / ALLOWABLE_AXIAL_LOAD + config.effective_length / SLENDERNESS_ALLOWANCE
    return CheckResult("axial_unity", ratio, 1.0, "-", ratio < 1.0)
