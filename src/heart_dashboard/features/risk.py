from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from heart_dashboard.numeric import round_half_up

AT_RISK_LABEL = "At Risk"
NO_RISK_LABEL = "No Risk"


@dataclass(frozen=True)
class RiskSummary:
    total: int
    at_risk: int

    @property
    def no_risk(self) -> int:
        return max(0, self.total - self.at_risk)

    @property
    def percent_at_risk(self) -> float:
        # An empty set divides by 1 and reports 0.0% instead of failing.
        ratio = self.at_risk / (self.total or 1)
        return round_half_up(ratio * 1000) / 10


def summarize_risk(records: pd.DataFrame) -> RiskSummary:
    total = int(len(records))
    at_risk = int((records["heart_risk"] == 1).sum()) if total else 0
    return RiskSummary(total=total, at_risk=at_risk)


def build_risk_totals(summary: RiskSummary) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "label": [AT_RISK_LABEL, NO_RISK_LABEL],
            "value": [summary.at_risk, summary.no_risk],
        }
    ).astype({"value": "int64"})
