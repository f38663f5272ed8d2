from __future__ import annotations

import pandas as pd

from heart_dashboard.preprocess.coerce import RECORD_COLUMNS, Record
from heart_dashboard.preprocess.validate import filter_valid, is_usable, usable_mask


def _records(rows: list[dict[str, float]]) -> pd.DataFrame:
    return pd.DataFrame(
        [{**Record().as_dict(), **row} for row in rows],
        columns=RECORD_COLUMNS,
    )


def test_is_usable_requires_one_strictly_positive_signal() -> None:
    assert not is_usable(Record())
    assert not is_usable(Record(age=-4.0, bmi=0.0))
    assert is_usable(Record(cholesterol=180.0))
    assert is_usable(Record(blood_pressure=110.0))


def test_blood_pressure_can_be_excluded_from_the_signal_set() -> None:
    record = Record(blood_pressure=110.0, heart_risk=1)
    assert is_usable(record, include_blood_pressure=True)
    assert not is_usable(record, include_blood_pressure=False)


def test_filter_valid_keeps_order_and_resets_index() -> None:
    records = _records(
        [
            {"age": 40.0},
            {},
            {"blood_pressure": 120.0},
            {"heart_rate": 66.0, "heart_risk": 1},
        ]
    )

    valid = filter_valid(records)

    assert valid.index.tolist() == [0, 1, 2]
    assert valid["age"].tolist() == [40.0, 0.0, 0.0]
    assert valid["heart_risk"].tolist() == [0, 0, 1]

    without_bp = filter_valid(records, include_blood_pressure=False)
    assert len(without_bp) == 2


def test_usable_mask_handles_empty_frame() -> None:
    mask = usable_mask(_records([]))
    assert mask.empty
    assert filter_valid(_records([])).empty
