from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

LOGGER = logging.getLogger(__name__)

POINT_COLUMNS = ["bmi", "heart_rate", "cholesterol"]


@dataclass(frozen=True, eq=False)
class ScatterSample:
    no_risk: pd.DataFrame
    at_risk: pd.DataFrame


def stride_indices(size: int, limit: int) -> np.ndarray:
    """Evenly spaced positions ``(i * size) // limit`` for ``i`` in ``range(limit)``."""
    if limit < 0:
        raise ValueError(f"sample limit must be >= 0, got {limit}")
    if size <= limit:
        return np.arange(size, dtype=np.int64)
    return (np.arange(limit, dtype=np.int64) * size) // limit


def stride_sample(points: pd.DataFrame, limit: int) -> pd.DataFrame:
    """Deterministically downsample to at most ``limit`` rows, keeping input order."""
    positions = stride_indices(len(points), limit)
    return points.iloc[positions].reset_index(drop=True)


def scatter_points(records: pd.DataFrame) -> pd.DataFrame:
    """Records usable as scatter points: BMI and heart rate both non-zero."""
    eligible = records.loc[(records["bmi"] != 0) & (records["heart_rate"] != 0)]
    return eligible.reset_index(drop=True)


def sample_scatter(
    records: pd.DataFrame,
    no_risk_limit: int = 220,
    at_risk_limit: int = 220,
) -> ScatterSample:
    eligible = scatter_points(records)
    at_risk_mask = eligible["heart_risk"] == 1
    no_risk_points = eligible.loc[~at_risk_mask, POINT_COLUMNS].reset_index(drop=True)
    at_risk_points = eligible.loc[at_risk_mask, POINT_COLUMNS].reset_index(drop=True)

    LOGGER.debug(
        "Scatter eligible points: no_risk=%d at_risk=%d (limits %d/%d)",
        len(no_risk_points),
        len(at_risk_points),
        no_risk_limit,
        at_risk_limit,
    )
    return ScatterSample(
        no_risk=stride_sample(no_risk_points, no_risk_limit),
        at_risk=stride_sample(at_risk_points, at_risk_limit),
    )
