from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import pandas as pd

from heart_dashboard.features.age_bins import AgeBinSummary
from heart_dashboard.features.risk import RiskSummary
from heart_dashboard.features.scatter import ScatterSample
from heart_dashboard.preprocess.columns import FieldRoles

PAYLOAD_SCHEMA_VERSION = 1

TABLE_NAMES = (
    "age_series",
    "risk_stack",
    "cholesterol_series",
    "risk_totals",
    "scatter_no_risk",
    "scatter_at_risk",
)


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if hasattr(value, "item"):
        value = value.item()
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    return value


def _records_from_frame(frame: pd.DataFrame) -> list[dict[str, Any]]:
    if frame.empty:
        return []
    return _json_safe(frame.to_dict(orient="records"))


@dataclass(frozen=True, eq=False)
class DashboardResult:
    """Read-only bundle of every chart-ready structure for one dataset."""

    roles: FieldRoles
    rows_read: int
    rows_valid: int
    summary: RiskSummary
    age_bins: tuple[AgeBinSummary, ...]
    age_series: pd.DataFrame
    risk_stack: pd.DataFrame
    cholesterol_series: pd.DataFrame
    risk_totals: pd.DataFrame
    scatter: ScatterSample

    @property
    def rows_dropped(self) -> int:
        return self.rows_read - self.rows_valid

    def tables(self) -> dict[str, pd.DataFrame]:
        return {
            "age_series": self.age_series,
            "risk_stack": self.risk_stack,
            "cholesterol_series": self.cholesterol_series,
            "risk_totals": self.risk_totals,
            "scatter_no_risk": self.scatter.no_risk,
            "scatter_at_risk": self.scatter.at_risk,
        }

    def summary_dict(self) -> dict[str, Any]:
        return {
            "rows_read": self.rows_read,
            "rows_valid": self.rows_valid,
            "rows_dropped": self.rows_dropped,
            "total": self.summary.total,
            "at_risk": self.summary.at_risk,
            "no_risk": self.summary.no_risk,
            "percent_at_risk": self.summary.percent_at_risk,
            "age_bin_count": len(self.age_bins),
        }

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe payload consumed by the presentation layer."""
        payload = {
            "schema_version": PAYLOAD_SCHEMA_VERSION,
            "columns": self.roles.as_dict(),
            "summary": self.summary_dict(),
            "charts": {name: _records_from_frame(frame) for name, frame in self.tables().items()},
        }
        return _json_safe(payload)
