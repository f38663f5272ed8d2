from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Literal

import pandas as pd

from heart_dashboard.numeric import embedded_numbers, number_or_zero, parse_number
from heart_dashboard.preprocess.columns import FieldRoles

RECORD_COLUMNS = ["age", "bmi", "blood_pressure", "heart_rate", "cholesterol", "heart_risk"]

TRUTHY_RISK_TOKENS = frozenset({"1", "true", "yes", "y", "high", "risk"})
FALSY_RISK_TOKENS = frozenset({"0", "false", "no", "n", "low", "none"})


@dataclass(frozen=True)
class Record:
    age: float = 0.0
    bmi: float = 0.0
    blood_pressure: float = 0.0
    heart_rate: float = 0.0
    cholesterol: float = 0.0
    heart_risk: Literal[0, 1] = 0

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


def _clean_text(raw: object) -> str:
    if raw is None:
        return ""
    if isinstance(raw, float) and math.isnan(raw):
        return ""
    return str(raw).strip()


def _lookup(row: Mapping[str, object], header: str | None) -> str:
    if header is None:
        return ""
    return _clean_text(row.get(header))


def parse_blood_pressure(raw: object) -> float | None:
    """Read a single reading, a "120/80" style pair (averaged) or a number inside text."""
    text = _clean_text(raw)
    if not text:
        return None
    single = parse_number(text)
    if single is not None:
        return single
    numbers = embedded_numbers(text)
    if len(numbers) >= 2:
        return (numbers[0] + numbers[1]) / 2
    if numbers:
        return numbers[0]
    return None


def parse_heart_risk(raw: object) -> Literal[0, 1]:
    token = _clean_text(raw).lower()
    if token in TRUTHY_RISK_TOKENS:
        return 1
    if token in FALSY_RISK_TOKENS:
        return 0
    if parse_number(token) == 1:
        return 1
    return 0


def _coerce_blood_pressure(row: Mapping[str, object], roles: FieldRoles) -> float:
    primary = parse_blood_pressure(_lookup(row, roles.blood_pressure))
    if primary is not None:
        return primary
    systolic = parse_number(_lookup(row, roles.systolic_bp))
    diastolic = parse_number(_lookup(row, roles.diastolic_bp))
    if systolic is not None and diastolic is not None:
        return (systolic + diastolic) / 2
    return 0.0


def coerce_row(row: Mapping[str, object], roles: FieldRoles) -> Record:
    """Best-effort typed view of one raw row; bad values become 0, never errors."""
    return Record(
        age=number_or_zero(_lookup(row, roles.age)),
        bmi=number_or_zero(_lookup(row, roles.bmi)),
        blood_pressure=_coerce_blood_pressure(row, roles),
        heart_rate=number_or_zero(_lookup(row, roles.heart_rate)),
        cholesterol=number_or_zero(_lookup(row, roles.cholesterol)),
        heart_risk=parse_heart_risk(_lookup(row, roles.risk)),
    )


def coerce_rows(rows: Iterable[Mapping[str, object]], roles: FieldRoles) -> pd.DataFrame:
    """Coerce raw rows into a records frame, preserving input order."""
    records = [coerce_row(row, roles).as_dict() for row in rows]
    frame = pd.DataFrame.from_records(records, columns=RECORD_COLUMNS)
    return frame.astype(
        {
            "age": "float64",
            "bmi": "float64",
            "blood_pressure": "float64",
            "heart_rate": "float64",
            "cholesterol": "float64",
            "heart_risk": "int64",
        }
    )
