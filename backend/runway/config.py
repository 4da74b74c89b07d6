"""Crane/runway configuration: validated inputs plus the loads derived from them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, Mapping, NoReturn, TypeVar, Union

from .errors import ValidationError

T = TypeVar("T")

MAX_RATED_CAPACITY = 80_000.0   # lbs
MIN_RAIL_HEIGHT = 8.0           # ft
MAX_RAIL_HEIGHT = 100.0         # ft
MAX_WHEELBASE = 50.0            # ft
MAX_SUPPORT_CENTERS = 150.0     # ft
MAX_BRIDGE_SPAN = 120.0         # ft
MAX_HOIST_SPEED = 500.0         # ft/min

DEFAULT_IMPACT_FACTOR = 1.15
FREESTANDING_LENGTH_FACTOR = 2.0
BRACED_LENGTH_FACTOR = 0.5


# ── Result type ──────────────────────────────────────────────────


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T
    ok = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: ValidationError
    ok = False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]


# ── Validation rules ─────────────────────────────────────────────

_NUMERIC_INPUTS = (
    "rated_capacity",
    "hoist_trolley_weight",
    "girder_weight",
    "panel_weight",
    "end_truck_weight",
    "num_columns",
    "rail_height",
    "wheelbase",
    "support_centers",
    "bridge_span",
)


def _first_violation(
    rated_capacity: float,
    hoist_trolley_weight: float,
    total_beam_weight: float,
    num_columns: int,
    rail_height: float,
    wheelbase: float,
    support_centers: float,
    bridge_span: float,
    hoist_speed: float,
) -> ValidationError | None:
    if not 0 < rated_capacity <= MAX_RATED_CAPACITY:
        return ValidationError(
            "rated_capacity",
            f"Rated capacity must be positive and at most {MAX_RATED_CAPACITY:,.0f} lbs",
        )
    if not hoist_trolley_weight > 0:
        return ValidationError("hoist_trolley_weight", "Hoist/trolley weight must be positive")
    if not total_beam_weight > 0:
        return ValidationError(
            "girder_weight", "Crane self-weight (girder + panel + end truck) must be positive"
        )
    if not float(num_columns).is_integer():
        return ValidationError("num_columns", "Number of columns must be a whole number")
    if num_columns < 2:
        return ValidationError("num_columns", "Number of columns must be at least 2")
    if not MIN_RAIL_HEIGHT <= rail_height <= MAX_RAIL_HEIGHT:
        return ValidationError(
            "rail_height",
            f"Rail height must be between {MIN_RAIL_HEIGHT:g} and {MAX_RAIL_HEIGHT:g} feet",
        )
    if not 0 < wheelbase <= MAX_WHEELBASE:
        return ValidationError("wheelbase", f"Wheelbase must be between 0 and {MAX_WHEELBASE:g} feet")
    if not 0 < support_centers <= MAX_SUPPORT_CENTERS:
        return ValidationError(
            "support_centers",
            f"Support centers must be between 0 and {MAX_SUPPORT_CENTERS:g} feet",
        )
    if not 0 < bridge_span <= MAX_BRIDGE_SPAN:
        return ValidationError(
            "bridge_span", f"Bridge span must be between 0 and {MAX_BRIDGE_SPAN:g} feet"
        )
    if not 0 <= hoist_speed <= MAX_HOIST_SPEED:
        return ValidationError(
            "hoist_speed", f"Hoist speed must be between 0 and {MAX_HOIST_SPEED:g} ft/min"
        )
    if wheelbase > support_centers:
        return ValidationError("wheelbase", "Wheelbase cannot be greater than support centers")
    return None


def impact_factor_for(hoist_speed: float) -> float:
    if hoist_speed <= 0:
        return DEFAULT_IMPACT_FACTOR
    return 1 + 0.005 * hoist_speed


# ── Configuration ────────────────────────────────────────────────


@dataclass(frozen=True)
class BeamConfiguration:
    """Immutable crane/runway inputs and the quantities derived from them.

    Units: loads in lbs, lengths in ft, hoist speed in ft/min.
    Construction validates every input and raises ``ValidationError`` on
    the first violation; use :func:`validate` for a non-raising variant.
    """

    rated_capacity: float        # lbs, P
    hoist_trolley_weight: float  # lbs, H
    girder_weight: float         # lbs
    panel_weight: float          # lbs
    end_truck_weight: float      # lbs
    num_columns: int             # per side
    rail_height: float           # ft
    wheelbase: float             # ft, A
    support_centers: float       # ft, L, runway beam support spacing
    bridge_span: float           # ft, runway beam span used for selection
    freestanding: bool = False
    capped: bool = True
    hoist_speed: float = 0.0     # ft/min, 0 = default impact factor

    # ── derived in __post_init__ ─────────────────────────────────
    total_beam_weight: float = field(init=False)     # lbs
    impact_factor: float = field(init=False)
    max_wheel_load: float = field(init=False)        # lbs
    wheelbase_span_ratio: float = field(init=False)  # A/L
    lateral_load: float = field(init=False)          # lbs
    longitudinal_load: float = field(init=False)     # lbs
    rail_height_in: float = field(init=False)        # in
    effective_length_factor: float = field(init=False)
    effective_length: float = field(init=False)      # ft

    def __post_init__(self) -> None:
        total = self.girder_weight + self.panel_weight + self.end_truck_weight
        error = _first_violation(
            self.rated_capacity,
            self.hoist_trolley_weight,
            total,
            self.num_columns,
            self.rail_height,
            self.wheelbase,
            self.support_centers,
            self.bridge_span,
            self.hoist_speed,
        )
        if error is not None:
            raise error

        impact = impact_factor_for(self.hoist_speed)
        max_wheel = impact * self.rated_capacity / 2.0 + self.hoist_trolley_weight / 2.0 + total / 4.0
        length_factor = FREESTANDING_LENGTH_FACTOR if self.freestanding else BRACED_LENGTH_FACTOR

        derived = dict(
            total_beam_weight=total,
            impact_factor=impact,
            max_wheel_load=max_wheel,
            wheelbase_span_ratio=self.wheelbase / self.support_centers,
            lateral_load=0.2 * (self.rated_capacity + self.hoist_trolley_weight),
            longitudinal_load=0.1 * max_wheel,
            rail_height_in=self.rail_height * 12.0,
            effective_length_factor=length_factor,
            effective_length=self.rail_height * length_factor,
        )
        for name, value in derived.items():
            object.__setattr__(self, name, value)

    @classmethod
    def create(cls, **inputs: Any) -> BeamConfiguration:
        """Validate raw keyword inputs; raises ``ValidationError``."""
        return validate(inputs).unwrap()

    def inputs(self) -> dict[str, Any]:
        """The raw inputs, suitable for ``BeamConfiguration(**inputs)``."""
        return {
            "rated_capacity": self.rated_capacity,
            "hoist_trolley_weight": self.hoist_trolley_weight,
            "girder_weight": self.girder_weight,
            "panel_weight": self.panel_weight,
            "end_truck_weight": self.end_truck_weight,
            "num_columns": self.num_columns,
            "rail_height": self.rail_height,
            "wheelbase": self.wheelbase,
            "support_centers": self.support_centers,
            "bridge_span": self.bridge_span,
            "freestanding": self.freestanding,
            "capped": self.capped,
            "hoist_speed": self.hoist_speed,
        }

    def summary(self) -> str:
        speed = f"{self.hoist_speed:g} ft/min" if self.hoist_speed > 0 else "Default"
        return "\n".join(
            [
                "Crane Configuration Summary:",
                f"  Capacity: {self.rated_capacity:,.0f} lbs",
                f"  Wheelbase: {self.wheelbase:g} ft, Support Centers: {self.support_centers:g} ft",
                f"  Bridge Span: {self.bridge_span:.1f} ft",
                f"  Wheelbase/Support Ratio: {self.wheelbase_span_ratio:.4f}",
                f"  Impact Factor: {self.impact_factor:.3f}",
                f"  Max Wheel Load: {self.max_wheel_load:.0f} lbs",
                f"  Beam System: {'Capped' if self.capped else 'Uncapped'}",
                f"  Column Type: {'Freestanding' if self.freestanding else 'Braced'}",
                f"  Rail Height: {self.rail_height:g} ft",
                f"  Hoist Speed: {speed}",
                "  Crane Weight Components:",
                f"    Girder: {self.girder_weight:,.0f} lbs",
                f"    Panel: {self.panel_weight:,.0f} lbs",
                f"    End Truck: {self.end_truck_weight:,.0f} lbs",
                f"    Total: {self.total_beam_weight:,.0f} lbs",
            ]
        )

    def __str__(self) -> str:
        return (
            f"BeamConfiguration[Capacity={self.rated_capacity:,.0f}, "
            f"Span={self.bridge_span:g}ft, System={'Capped' if self.capped else 'Uncapped'}]"
        )


def _coerce_number(raw: Mapping[str, Any], name: str) -> float | ValidationError:
    if name not in raw or raw[name] is None:
        return ValidationError(name, f"Missing required input '{name}'")
    value = raw[name]
    if isinstance(value, bool):
        return ValidationError(name, f"'{name}' must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return ValidationError(name, f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(number):
        return ValidationError(name, f"'{name}' must be finite, got {value!r}")
    return number


_FLAG_STRINGS = {"true": True, "false": False, "1": True, "0": False}


def _coerce_flag(raw: Mapping[str, Any], name: str, default: bool) -> bool | ValidationError:
    value = raw.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _FLAG_STRINGS:
        return _FLAG_STRINGS[value.strip().lower()]
    return ValidationError(name, f"'{name}' must be true or false, got {value!r}")


def validate(raw: Mapping[str, Any]) -> Result[BeamConfiguration]:
    """Build a configuration from raw inputs without raising.

    Returns ``Ok(config)`` or ``Err(ValidationError)`` for the first problem found.
    """
    values: dict[str, Any] = {}
    for name in _NUMERIC_INPUTS:
        number = _coerce_number(raw, name)
        if isinstance(number, ValidationError):
            return Err(number)
        values[name] = number

    speed = raw.get("hoist_speed")
    if speed is None:
        values["hoist_speed"] = 0.0
    else:
        number = _coerce_number(raw, "hoist_speed")
        if isinstance(number, ValidationError):
            return Err(number)
        values["hoist_speed"] = number

    for name, default in (("freestanding", False), ("capped", True)):
        flag = _coerce_flag(raw, name, default)
        if isinstance(flag, ValidationError):
            return Err(flag)
        values[name] = flag

    error = _first_violation(
        values["rated_capacity"],
        values["hoist_trolley_weight"],
        values["girder_weight"] + values["panel_weight"] + values["end_truck_weight"],
        values["num_columns"],
        values["rail_height"],
        values["wheelbase"],
        values["support_centers"],
        values["bridge_span"],
        values["hoist_speed"],
    )
    if error is not None:
        return Err(error)
    values["num_columns"] = int(values["num_columns"])
    return Ok(BeamConfiguration(**values))
