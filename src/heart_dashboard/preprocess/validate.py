from __future__ import annotations

import pandas as pd

from heart_dashboard.preprocess.coerce import Record

SIGNAL_COLUMNS = ["age", "bmi", "heart_rate", "cholesterol", "blood_pressure"]


def _signal_columns(include_blood_pressure: bool) -> list[str]:
    if include_blood_pressure:
        return list(SIGNAL_COLUMNS)
    return [column for column in SIGNAL_COLUMNS if column != "blood_pressure"]


def is_usable(record: Record, include_blood_pressure: bool = True) -> bool:
    return any(getattr(record, column) > 0 for column in _signal_columns(include_blood_pressure))


def usable_mask(records: pd.DataFrame, include_blood_pressure: bool = True) -> pd.Series:
    columns = _signal_columns(include_blood_pressure)
    if records.empty:
        return pd.Series(False, index=records.index, dtype=bool)
    return (records[columns] > 0).any(axis=1)


def filter_valid(records: pd.DataFrame, include_blood_pressure: bool = True) -> pd.DataFrame:
    """Keep rows with at least one strictly positive health signal, in input order."""
    mask = usable_mask(records, include_blood_pressure=include_blood_pressure)
    return records.loc[mask].reset_index(drop=True)
