"""Allowable beam load at an arbitrary span, interpolated from the catalog tables.

Spans that fall between two tabulated values are interpolated linearly.
Spans outside a beam's tabulated range have no capacity: the tables are
never extrapolated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from .catalog import BeamCatalog, default_catalog

# Spans this close to an integer are treated as that integer.
EXACT_SPAN_TOLERANCE = 0.001


class LookupKind(str, Enum):
    EXACT = "exact"
    INTERPOLATED = "interpolated"
    OUT_OF_RANGE = "out_of_range"
    UNKNOWN_SECTION = "unknown_section"
    INVALID_SPAN = "invalid_span"


@dataclass(frozen=True)
class CapacityTrace:
    """How a capacity value was obtained from the table."""

    designation: str
    span: float
    capped: bool
    kind: LookupKind
    capacity: float | None = None
    lower_span: int | None = None
    upper_span: int | None = None
    lower_capacity: int | None = None
    upper_capacity: int | None = None

    @property
    def found(self) -> bool:
        return self.capacity is not None

    @property
    def factor(self) -> float | None:
        if self.kind is not LookupKind.INTERPOLATED:
            return None
        return (self.span - self.lower_span) / (self.upper_span - self.lower_span)

    def describe(self) -> str:
        if self.kind is LookupKind.EXACT:
            return f"Exact table value: {self.lower_span} ft → {self.lower_capacity:,} lbs"
        if self.kind is LookupKind.INTERPOLATED:
            return (
                f"Interpolated between: {self.lower_span}ft({self.lower_capacity:,} lbs) ↔ "
                f"{self.upper_span}ft({self.upper_capacity:,} lbs), factor={self.factor:.3f}"
            )
        if self.kind is LookupKind.OUT_OF_RANGE:
            return f"Span {self.span:g} ft outside table range for {self.designation}"
        if self.kind is LookupKind.UNKNOWN_SECTION:
            system = "capped" if self.capped else "uncapped"
            return f"{self.designation} not found in {system} capacity data"
        return f"Invalid span length {self.span}"


def trace_capacity(
    catalog: BeamCatalog, designation: str, span: float, capped: bool = False
) -> CapacityTrace:
    """Look up the allowable load for ``designation`` at ``span`` ft."""
    table = catalog.capacities(capped)
    base = dict(designation=designation, span=span, capped=capped)

    if not designation or designation not in table:
        return CapacityTrace(kind=LookupKind.UNKNOWN_SECTION, **base)
    if not math.isfinite(span) or span <= 0:
        return CapacityTrace(kind=LookupKind.INVALID_SPAN, **base)

    nearest = int(round(span))
    if abs(span - nearest) < EXACT_SPAN_TOLERANCE:
        exact = table.get(designation, nearest)
        if exact is not None:
            return CapacityTrace(
                kind=LookupKind.EXACT,
                capacity=float(exact),
                lower_span=nearest,
                upper_span=nearest,
                lower_capacity=exact,
                upper_capacity=exact,
                **base,
            )

    bounds = table.bracket(designation, span)
    if bounds is None:
        return CapacityTrace(kind=LookupKind.OUT_OF_RANGE, **base)

    lower, upper = bounds
    cap_lo = table.get(designation, lower)
    cap_hi = table.get(designation, upper)
    if lower == upper:
        return CapacityTrace(
            kind=LookupKind.EXACT,
            capacity=float(cap_lo),
            lower_span=lower,
            upper_span=upper,
            lower_capacity=cap_lo,
            upper_capacity=cap_hi,
            **base,
        )

    capacity = cap_lo + (span - lower) / (upper - lower) * (cap_hi - cap_lo)
    return CapacityTrace(
        kind=LookupKind.INTERPOLATED,
        capacity=capacity,
        lower_span=lower,
        upper_span=upper,
        lower_capacity=cap_lo,
        upper_capacity=cap_hi,
        **base,
    )


@lru_cache(maxsize=8192)
def _cached_capacity(catalog: BeamCatalog, designation: str, span: float, capped: bool) -> float | None:
    return trace_capacity(catalog, designation, span, capped).capacity


def interpolate_capacity(
    catalog: BeamCatalog, designation: str, span: float, capped: bool = False
) -> float | None:
    """Allowable load in lbs, or None if the beam/span has no tabulated value."""
    return _cached_capacity(catalog, designation, float(span), bool(capped))


def lookup_capacity(
    designation: str, span: float, capped: bool = False, catalog: BeamCatalog | None = None
) -> float | None:
    return interpolate_capacity(catalog or default_catalog(), designation, span, capped)


def clear_capacity_cache() -> None:
    _cached_capacity.cache_clear()
