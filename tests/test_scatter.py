from __future__ import annotations

import pandas as pd
import pytest

from heart_dashboard.features.scatter import (
    POINT_COLUMNS,
    sample_scatter,
    scatter_points,
    stride_indices,
    stride_sample,
)


def _records(n_no_risk: int, n_at_risk: int) -> pd.DataFrame:
    rows = []
    for i in range(n_no_risk):
        rows.append({"bmi": 20.0 + i, "heart_rate": 60.0, "cholesterol": 0.0, "heart_risk": 0})
    for i in range(n_at_risk):
        rows.append({"bmi": 30.0 + i, "heart_rate": 90.0, "cholesterol": 200.0, "heart_risk": 1})
    return pd.DataFrame(rows, columns=["bmi", "heart_rate", "cholesterol", "heart_risk"])


def test_stride_indices_cover_the_sequence_evenly() -> None:
    assert stride_indices(10, 5).tolist() == [0, 2, 4, 6, 8]
    assert stride_indices(7, 3).tolist() == [0, 2, 4]
    assert stride_indices(3, 10).tolist() == [0, 1, 2]
    assert stride_indices(5, 0).tolist() == []


def test_stride_indices_reject_negative_limit() -> None:
    with pytest.raises(ValueError, match=">= 0"):
        stride_indices(5, -1)


@pytest.mark.parametrize("limit", [0, 1, 3, 7, 10, 25])
def test_stride_sample_length_is_min_of_size_and_limit(limit: int) -> None:
    points = pd.DataFrame({"bmi": range(10)})
    assert len(stride_sample(points, limit)) == min(10, limit)


def test_stride_sample_is_identity_within_budget() -> None:
    points = pd.DataFrame({"bmi": [5.0, 3.0, 9.0]})
    sampled = stride_sample(points, 3)
    assert sampled["bmi"].tolist() == [5.0, 3.0, 9.0]


def test_stride_sample_is_deterministic() -> None:
    points = pd.DataFrame({"bmi": range(1000)})
    first = stride_sample(points, 220)
    second = stride_sample(points, 220)
    assert first.equals(second)
    assert first["bmi"].is_monotonic_increasing


def test_scatter_points_require_bmi_and_heart_rate() -> None:
    records = pd.DataFrame(
        {
            "bmi": [22.0, 0.0, 25.0, 27.0],
            "heart_rate": [70.0, 80.0, 0.0, 65.0],
            "cholesterol": [0.0, 180.0, 190.0, 200.0],
            "heart_risk": [0, 1, 1, 1],
        }
    )

    eligible = scatter_points(records)
    assert eligible["bmi"].tolist() == [22.0, 27.0]
    # zero cholesterol is carried through as a point size
    assert eligible["cholesterol"].tolist() == [0.0, 200.0]


def test_sample_scatter_partitions_by_risk_and_applies_limits() -> None:
    sample = sample_scatter(_records(500, 40), no_risk_limit=220, at_risk_limit=220)

    assert list(sample.no_risk.columns) == POINT_COLUMNS
    assert len(sample.no_risk) == 220
    assert len(sample.at_risk) == 40
    assert sample.at_risk["bmi"].tolist() == [30.0 + i for i in range(40)]
    assert sample.no_risk["bmi"].iloc[0] == 20.0


def test_sample_scatter_with_uneven_shared_budget() -> None:
    sample = sample_scatter(_records(400, 400), no_risk_limit=150, at_risk_limit=151)
    assert len(sample.no_risk) == 150
    assert len(sample.at_risk) == 151
