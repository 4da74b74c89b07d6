"""Cross-section properties of runway beams."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Union


def _require_positive(section: object) -> None:
    for f in fields(section):
        value = getattr(section, f.name)
        if isinstance(value, (int, float)) and not value > 0:
            raise ValueError(
                f"{type(section).__name__} {getattr(section, 'designation', '?')!r}: "
                f"{f.name} must be positive, got {value}"
            )


@dataclass(frozen=True)
class WideFlangeSection:
    """A single AISC wide-flange shape.

    Units follow the published AISC tables:
    - Dimensions: in
    - Areas: in²
    - Moment of inertia: in⁴
    - Section modulus: in³
    - Weight: lb/ft
    """

    designation: str
    depth: float             # in, overall depth d
    weight: float            # lb/ft
    area: float              # in²
    web_thickness: float     # in, tw
    flange_width: float      # in, bf
    flange_thickness: float  # in, tf
    flange_area: float       # in², bf·tf
    Ix: float                # in⁴, strong-axis moment of inertia
    Sx: float                # in³, strong-axis section modulus
    rx: float                # in, radius of gyration
    flange_gage: float       # in, g

    def __post_init__(self) -> None:
        _require_positive(self)

    @property
    def capped(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.designation}: {self.weight:g} lbs/ft, I={self.Ix:g} in⁴, S={self.Sx:g} in³"


@dataclass(frozen=True)
class CappedSection:
    """A wide-flange shape with a channel cap welded to its top flange.

    The designation is ``"<W-shape>+<channel>"``, e.g. ``"W12x40+C10x15.3"``.
    Weight and area are for the combined section.
    """

    w_shape: str             # base wide-flange designation, e.g. "W12x40"
    channel: str             # cap channel designation, e.g. "C10x15.3"
    weight: float            # lb/ft, combined
    area: float              # in², combined
    width: float             # in, overall width (channel depth)
    depth: float             # in
    yc: float                # in, neutral axis to compression fibre
    yt: float                # in, neutral axis to tension fibre
    Ix: float                # in⁴
    Sc: float                # in³, upper (compression) section modulus
    Sl: float                # in³, lower (tension) section modulus
    torsional_constant: float  # in⁴
    Sx: float                # in³, section modulus used for stress checks

    def __post_init__(self) -> None:
        _require_positive(self)

    @property
    def designation(self) -> str:
        return f"{self.w_shape}+{self.channel}"

    @property
    def capped(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"{self.designation}: {self.weight:g} lbs/ft, I={self.Ix:.1f} in⁴, S={self.Sx:.1f} in³"


BeamSection = Union[WideFlangeSection, CappedSection]
