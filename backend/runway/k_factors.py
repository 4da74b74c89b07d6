"""Load-distribution factors (k1, k2) versus wheelbase / support-centre ratio."""

from __future__ import annotations

import csv
from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_DATA_DIR = Path(__file__).parent / "data"
K_FACTORS_CSV = "k_factors.csv"


@dataclass(frozen=True)
class LoadFactorRow:
    ratio: float  # A/L, wheelbase / support centres
    k1: float
    k2: float


@dataclass(frozen=True)
class LoadFactorTable:
    """Ordered (ratio, k1, k2) rows with strictly increasing ratio.

    Lookups between rows interpolate each factor linearly and round to three
    decimals. Ratios outside the table return the boundary row unchanged.
    """

    rows: tuple[LoadFactorRow, ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("K-factor table cannot be empty")
        for prev, row in zip(self.rows, self.rows[1:]):
            if row.ratio <= prev.ratio:
                raise ValueError(
                    f"K-factor ratios must be strictly increasing: {prev.ratio} then {row.ratio}"
                )
        for row in self.rows:
            if row.k1 <= 0 or row.k2 <= 0:
                raise ValueError(f"Non-positive K-factor at ratio {row.ratio}")

    @property
    def min_ratio(self) -> float:
        return self.rows[0].ratio

    @property
    def max_ratio(self) -> float:
        return self.rows[-1].ratio

    def lookup(self, ratio: float) -> tuple[float, float]:
        """Return ``(k1, k2)`` for an A/L ratio."""
        first, last = self.rows[0], self.rows[-1]
        if not ratio > first.ratio:  # also catches NaN
            return first.k1, first.k2
        if ratio >= last.ratio:
            return last.k1, last.k2

        i = bisect_right([r.ratio for r in self.rows], ratio)
        lo, hi = self.rows[i - 1], self.rows[i]
        t = (ratio - lo.ratio) / (hi.ratio - lo.ratio)
        k1 = lo.k1 + (hi.k1 - lo.k1) * t
        k2 = lo.k2 + (hi.k2 - lo.k2) * t
        return round(k1, 3), round(k2, 3)

    def is_supported(self, ratio: float) -> bool:
        return self.min_ratio <= ratio <= self.max_ratio

    def closest_row(self, ratio: float) -> LoadFactorRow:
        """Tabulated row nearest to ``ratio`` (first one wins on a tie)."""
        return min(self.rows, key=lambda r: abs(r.ratio - ratio))

    def guidance(self, ratio: float) -> str:
        if ratio < self.min_ratio:
            return (
                f"Ratio {ratio:.3f} is below minimum supported value ({self.min_ratio:.2f}). "
                "Consider increasing wheelbase or reducing support centers. "
                "K-factors clamped to minimum values."
            )
        if ratio > self.max_ratio:
            return (
                f"Ratio {ratio:.3f} is above maximum supported value ({self.max_ratio:.2f}). "
                "This may indicate a very short support span or very long wheelbase. "
                "Verify crane geometry. K-factors clamped to maximum values."
            )
        return f"Ratio {ratio:.3f} is within normal range for overhead cranes."


def load_factor_table(path: str | Path | None = None) -> LoadFactorTable:
    path = Path(path) if path is not None else _DATA_DIR / K_FACTORS_CSV
    with open(path, encoding="utf-8-sig") as f:
        rows = tuple(
            LoadFactorRow(ratio=float(r["ratio"]), k1=float(r["k1"]), k2=float(r["k2"]))
            for r in csv.DictReader(f)
        )
    return LoadFactorTable(rows)


@lru_cache(maxsize=None)
def default_factor_table() -> LoadFactorTable:
    return load_factor_table()


def lookup_factors(ratio: float, table: LoadFactorTable | None = None) -> tuple[float, float]:
    """``(k1, k2)`` from the packaged table unless another is given."""
    return (table or default_factor_table()).lookup(ratio)
