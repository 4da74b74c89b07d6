"""Runway beam catalog: loads W-shape and capped sections from CSV data."""

from __future__ import annotations

import csv
import os
from bisect import bisect_left
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .section_data import BeamSection, CappedSection, WideFlangeSection

_DATA_DIR = Path(__file__).parent / "data"

UNCAPPED_SECTIONS_CSV = "uncapped_sections.csv"
UNCAPPED_CAPACITIES_CSV = "uncapped_capacities.csv"
CAPPED_SECTIONS_CSV = "capped_sections.csv"
CAPPED_CAPACITIES_CSV = "capped_capacities.csv"


@dataclass(frozen=True, eq=False)
class CapacityTable:
    """Allowable equivalent concentrated load (lbs) per beam and span (ft).

    Holds a flat ``(designation, span) -> capacity`` lookup plus, for every
    beam, its tabulated spans sorted ascending.
    """

    values: Mapping[tuple[str, int], int]
    spans: Mapping[str, tuple[int, ...]]

    @classmethod
    def from_rows(cls, rows: Mapping[str, Mapping[int, int]]) -> CapacityTable:
        values: dict[tuple[str, int], int] = {}
        spans: dict[str, tuple[int, ...]] = {}
        for designation, by_span in rows.items():
            if not by_span:
                continue
            for span, capacity in by_span.items():
                if span <= 0 or capacity <= 0:
                    raise ValueError(
                        f"Capacity entry {designation} @ {span} ft must be positive, "
                        f"got {capacity}"
                    )
                values[(designation, span)] = capacity
            spans[designation] = tuple(sorted(by_span))
        return cls(values=MappingProxyType(values), spans=MappingProxyType(spans))

    def __contains__(self, designation: object) -> bool:
        return designation in self.spans

    def __len__(self) -> int:
        return len(self.values)

    def get(self, designation: str, span: int) -> int | None:
        return self.values.get((designation, span))

    def spans_for(self, designation: str) -> tuple[int, ...]:
        return self.spans.get(designation, ())

    def bracket(self, designation: str, span: float) -> tuple[int, int] | None:
        """Tightest tabulated spans ``lower <= span <= upper``, or None if outside."""
        spans = self.spans.get(designation)
        if not spans or span < spans[0] or span > spans[-1]:
            return None
        i = bisect_left(spans, span)
        if spans[i] == span:
            return spans[i], spans[i]
        return spans[i - 1], spans[i]


@dataclass(frozen=True, eq=False)
class BeamCatalog:
    """Both beam systems with their capacity tables. Never mutated after load."""

    uncapped_sections: Mapping[str, WideFlangeSection]
    capped_sections: Mapping[str, CappedSection]
    uncapped_capacities: CapacityTable
    capped_capacities: CapacityTable
    lower_flange_loads: Mapping[str, int]

    def sections(self, capped: bool) -> Mapping[str, BeamSection]:
        return self.capped_sections if capped else self.uncapped_sections

    def capacities(self, capped: bool) -> CapacityTable:
        return self.capped_capacities if capped else self.uncapped_capacities

    def section(self, designation: str, capped: bool = False) -> BeamSection:
        """Look up a section by designation (e.g. ``"W12x40"``)."""
        try:
            return self.sections(capped)[designation]
        except KeyError:
            system = "capped" if capped else "uncapped"
            raise ValueError(
                f"Section '{designation}' not found in the {system} catalog. "
                f"Use list_sections() to see available designations."
            ) from None

    def list_sections(self, capped: bool = False, series: str | None = None) -> list[str]:
        """Designations sorted by weight, optionally filtered by prefix.

        ``series`` is matched case-insensitively, e.g. ``"W21"``.
        """
        sections = sorted(self.sections(capped).values(), key=lambda s: (s.weight, s.designation))
        names = [s.designation for s in sections]
        if series is not None:
            prefix = series.strip().upper()
            names = [n for n in names if n.upper().startswith(prefix)]
        return names

    def lower_flange_loading(self, designation: str) -> int | None:
        """Maximum load (lbs) on the lower flange of an uncapped W-shape."""
        return self.lower_flange_loads.get(designation)


# ── CSV parsing ───────────────────────────────────────────────────


def _read_uncapped_sections(path: Path) -> tuple[dict[str, WideFlangeSection], dict[str, int]]:
    sections: dict[str, WideFlangeSection] = {}
    lower_flange: dict[str, int] = {}
    with open(path, encoding="utf-8-sig") as f:
        for row in csv.DictReader(f):
            designation = row["Section"].strip()
            if designation in sections:
                raise ValueError(f"Duplicate uncapped section '{designation}' in {path.name}")
            sections[designation] = WideFlangeSection(
                designation=designation,
                depth=float(row["d[in]"]),
                weight=float(row["W[lb/ft]"]),
                area=float(row["A[in2]"]),
                web_thickness=float(row["tw[in]"]),
                flange_width=float(row["bf[in]"]),
                flange_thickness=float(row["tf[in]"]),
                flange_area=float(row["Af[in2]"]),
                Ix=float(row["Ix[in4]"]),
                Sx=float(row["Sx[in3]"]),
                rx=float(row["r[in]"]),
                flange_gage=float(row["g[in]"]),
            )
            if row.get("LFL[lb]", "").strip():
                lower_flange[designation] = int(row["LFL[lb]"])
    return sections, lower_flange


def _read_capped_sections(path: Path) -> dict[str, CappedSection]:
    sections: dict[str, CappedSection] = {}
    with open(path, encoding="utf-8-sig") as f:
        for row in csv.DictReader(f):
            section = CappedSection(
                w_shape=row["W-Shape"].strip(),
                channel=row["Channel"].strip(),
                weight=float(row["W[lb/ft]"]),
                area=float(row["A[in2]"]),
                width=float(row["b[in]"]),
                depth=float(row["d[in]"]),
                yc=float(row["yc[in]"]),
                yt=float(row["yt[in]"]),
                Ix=float(row["Ix[in4]"]),
                Sc=float(row["Sc[in3]"]),
                Sl=float(row["Sl[in3]"]),
                torsional_constant=float(row["J[in4]"]),
                Sx=float(row["Sx[in3]"]),
            )
            if section.designation in sections:
                raise ValueError(f"Duplicate capped section '{section.designation}' in {path.name}")
            sections[section.designation] = section
    return sections


def _read_capacities(path: Path) -> dict[str, dict[int, int]]:
    """Parse a wide capacity table: one row per beam, one column per span (ft)."""
    rows: dict[str, dict[int, int]] = {}
    with open(path, encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        span_columns = [c for c in (reader.fieldnames or []) if c != "Section"]
        for row in reader:
            designation = row["Section"].strip()
            rows[designation] = {
                int(col): int(row[col])
                for col in span_columns
                if (row.get(col) or "").strip()
            }
    return rows


def _derive_capped_capacities(
    capped: Mapping[str, CappedSection],
    uncapped: Mapping[str, WideFlangeSection],
    uncapped_rows: Mapping[str, Mapping[int, int]],
) -> dict[str, dict[int, int]]:
    """Scale each base W-shape's capacities by the stiffness gained from its cap."""
    rows: dict[str, dict[int, int]] = {}
    for designation, section in capped.items():
        base = uncapped.get(section.w_shape)
        base_row = uncapped_rows.get(section.w_shape)
        if base is None or not base_row:
            continue
        ratio = section.Ix / base.Ix
        rows[designation] = {span: int(round(cap * ratio)) for span, cap in base_row.items()}
    return rows


def _check_known(rows: Mapping[str, object], sections: Mapping[str, object], label: str) -> None:
    unknown = sorted(set(rows) - set(sections))
    if unknown:
        raise ValueError(f"{label} capacity data references unknown sections: {', '.join(unknown)}")


def load_catalog(data_dir: str | Path | None = None) -> BeamCatalog:
    """Parse the catalog CSV files in ``data_dir`` into an immutable catalog."""
    data_dir = Path(data_dir) if data_dir is not None else _DATA_DIR

    uncapped, lower_flange = _read_uncapped_sections(data_dir / UNCAPPED_SECTIONS_CSV)
    capped = _read_capped_sections(data_dir / CAPPED_SECTIONS_CSV)

    uncapped_rows = _read_capacities(data_dir / UNCAPPED_CAPACITIES_CSV)
    _check_known(uncapped_rows, uncapped, "Uncapped")

    capped_path = data_dir / CAPPED_CAPACITIES_CSV
    if capped_path.exists():
        capped_rows = _read_capacities(capped_path)
        _check_known(capped_rows, capped, "Capped")
    else:
        capped_rows = _derive_capped_capacities(capped, uncapped, uncapped_rows)

    return BeamCatalog(
        uncapped_sections=MappingProxyType(uncapped),
        capped_sections=MappingProxyType(capped),
        uncapped_capacities=CapacityTable.from_rows(uncapped_rows),
        capped_capacities=CapacityTable.from_rows(capped_rows),
        lower_flange_loads=MappingProxyType(lower_flange),
    )


@lru_cache(maxsize=None)
def default_catalog() -> BeamCatalog:
    """The packaged catalog (or ``RUNWAY_DATA_DIR``), loaded on first access."""
    return load_catalog(os.getenv("RUNWAY_DATA_DIR") or None)
