from __future__ import annotations

import math
from dataclasses import dataclass

import pandas as pd

from heart_dashboard.numeric import round_half_up

DEFAULT_AGE_BIN_WIDTH = 5


def bin_lower_bound(age: float, width: int = DEFAULT_AGE_BIN_WIDTH) -> int:
    return int(math.floor(age / width)) * width


def bin_label(low: int, width: int = DEFAULT_AGE_BIN_WIDTH) -> str:
    return f"{low}-{low + width - 1}"


@dataclass(frozen=True)
class AgeBinSummary:
    low: int
    label: str
    count: int
    no_risk_count: int
    at_risk_count: int
    mean_bmi: float
    mean_bp: float
    mean_chol: float
    avg_bmi: float
    avg_bp: float
    avg_chol: float


@dataclass
class AgeBin:
    """Running sums for one half-open age interval ``[low, low + width)``."""

    low: int
    width: int = DEFAULT_AGE_BIN_WIDTH
    bmi_sum: float = 0.0
    bp_sum: float = 0.0
    chol_sum: float = 0.0
    count: int = 0
    no_risk_count: int = 0
    at_risk_count: int = 0

    @property
    def label(self) -> str:
        return bin_label(self.low, self.width)

    def add(self, bmi: float, blood_pressure: float, cholesterol: float, heart_risk: int) -> None:
        self.bmi_sum += bmi
        self.bp_sum += blood_pressure
        self.chol_sum += cholesterol
        self.count += 1
        if heart_risk == 1:
            self.at_risk_count += 1
        else:
            self.no_risk_count += 1

    def finalize(self) -> AgeBinSummary:
        mean_bmi = self.bmi_sum / self.count
        mean_bp = self.bp_sum / self.count
        mean_chol = self.chol_sum / self.count
        return AgeBinSummary(
            low=self.low,
            label=self.label,
            count=self.count,
            no_risk_count=self.no_risk_count,
            at_risk_count=self.at_risk_count,
            mean_bmi=mean_bmi,
            mean_bp=mean_bp,
            mean_chol=mean_chol,
            avg_bmi=round_half_up(mean_bmi, 1),
            avg_bp=round_half_up(mean_bp, 1),
            avg_chol=round_half_up(mean_chol, 1),
        )


def build_age_bins(
    records: pd.DataFrame,
    width: int = DEFAULT_AGE_BIN_WIDTH,
) -> list[AgeBinSummary]:
    """Fold records into fixed-width age bins, ordered by numeric lower bound.

    Records are folded strictly in row order so floating point sums are
    reproducible.  Age 0 (including ages that failed to parse) lands in the
    first bin like any other value.
    """
    if width < 1:
        raise ValueError(f"age bin width must be >= 1, got {width}")

    bins: dict[int, AgeBin] = {}
    for row in records.itertuples(index=False):
        low = bin_lower_bound(float(row.age), width)
        age_bin = bins.get(low)
        if age_bin is None:
            age_bin = bins[low] = AgeBin(low=low, width=width)
        age_bin.add(
            bmi=float(row.bmi),
            blood_pressure=float(row.blood_pressure),
            cholesterol=float(row.cholesterol),
            heart_risk=int(row.heart_risk),
        )
    return [bins[low].finalize() for low in sorted(bins)]


def build_age_series(bins: list[AgeBinSummary]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age_bin": [item.label for item in bins],
            "avg_bmi": [item.avg_bmi for item in bins],
            "avg_bp": [item.avg_bp for item in bins],
        },
        columns=["age_bin", "avg_bmi", "avg_bp"],
    )


def build_risk_stack(bins: list[AgeBinSummary]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age_bin": [item.label for item in bins],
            "no_risk": [item.no_risk_count for item in bins],
            "at_risk": [item.at_risk_count for item in bins],
            "total": [item.count for item in bins],
        },
        columns=["age_bin", "no_risk", "at_risk", "total"],
    ).astype({"no_risk": "int64", "at_risk": "int64", "total": "int64"})


def build_cholesterol_series(bins: list[AgeBinSummary]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age_bin": [item.label for item in bins],
            "avg_chol": [item.avg_chol for item in bins],
        },
        columns=["age_bin", "avg_chol"],
    )
