"""Lightest-adequate beam search over one beam system of the catalog."""

from __future__ import annotations

from dataclasses import dataclass

from .capacity import interpolate_capacity
from .catalog import BeamCatalog
from .section_data import BeamSection


@dataclass(frozen=True)
class BeamCandidate:
    """An adequate beam together with its capacity at the searched span."""

    section: BeamSection
    capacity: float     # lbs, interpolated allowable ECL
    required: float     # lbs, ECL searched for
    rank: int           # 1 = lightest

    @property
    def designation(self) -> str:
        return self.section.designation

    @property
    def weight(self) -> float:
        return self.section.weight

    @property
    def utilisation(self) -> float:
        """Required / allowable, in percent."""
        return self.required / self.capacity * 100.0

    @property
    def margin(self) -> float:
        return self.capacity - self.required


def rank_candidates(
    catalog: BeamCatalog,
    required_load: float,
    span: float,
    capped: bool = False,
    limit: int = 5,
) -> list[BeamCandidate]:
    """Every beam whose capacity at ``span`` meets ``required_load``, lightest first.

    Weight is the only sort key. An empty list is a normal outcome.
    """
    if not required_load > 0 or not span > 0 or limit <= 0:
        return []

    adequate: list[tuple[BeamSection, float]] = []
    for section in catalog.sections(capped).values():
        capacity = interpolate_capacity(catalog, section.designation, span, capped)
        if capacity is not None and capacity > 0 and capacity >= required_load:
            adequate.append((section, capacity))

    # stable sort: equal weights keep catalog order
    adequate.sort(key=lambda item: item[0].weight)
    return [
        BeamCandidate(section=s, capacity=c, required=required_load, rank=i + 1)
        for i, (s, c) in enumerate(adequate[:limit])
    ]


def find_top_adequate(
    catalog: BeamCatalog,
    required_load: float,
    span: float,
    capped: bool = False,
    limit: int = 5,
) -> list[BeamSection]:
    return [c.section for c in rank_candidates(catalog, required_load, span, capped, limit)]


def find_alternatives(
    catalog: BeamCatalog,
    required_load: float,
    span: float,
    capped: bool = False,
    max_options: int = 10,
) -> list[BeamSection]:
    """Options from the requested system first, topped up from the other one."""
    options = find_top_adequate(catalog, required_load, span, capped, max_options // 2)
    if len(options) < max_options:
        options += find_top_adequate(
            catalog, required_load, span, not capped, max_options - len(options)
        )
    return options[:max_options]
