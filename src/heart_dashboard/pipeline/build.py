from __future__ import annotations

import logging
from pathlib import Path

from heart_dashboard.config import AppConfig
from heart_dashboard.errors import NoUsableRowsError
from heart_dashboard.features.age_bins import (
    build_age_bins,
    build_age_series,
    build_cholesterol_series,
    build_risk_stack,
)
from heart_dashboard.features.risk import build_risk_totals, summarize_risk
from heart_dashboard.features.scatter import sample_scatter
from heart_dashboard.io.read import SourceTable, load_source
from heart_dashboard.preprocess.coerce import coerce_rows
from heart_dashboard.preprocess.columns import detect_columns
from heart_dashboard.preprocess.validate import filter_valid
from heart_dashboard.report.contracts import DashboardResult

LOGGER = logging.getLogger(__name__)


def build_dashboard(source: SourceTable, config: AppConfig | None = None) -> DashboardResult:
    config = config or AppConfig()
    roles = detect_columns(source.headers, overrides=config.columns.overrides())

    records = coerce_rows(source.rows(), roles)
    valid = filter_valid(
        records,
        include_blood_pressure=config.validation.include_blood_pressure,
    )
    if valid.empty:
        raise NoUsableRowsError(
            f"No usable rows found in {source.row_count} data rows. "
            "Check column names and data in CSV."
        )
    LOGGER.info("Kept %d of %d rows with a usable health signal", len(valid), len(records))

    bins = build_age_bins(valid, width=config.binning.age_bin_width)
    summary = summarize_risk(valid)
    no_risk_limit, at_risk_limit = config.scatter.budgets()
    scatter = sample_scatter(valid, no_risk_limit=no_risk_limit, at_risk_limit=at_risk_limit)

    return DashboardResult(
        roles=roles,
        rows_read=int(len(records)),
        rows_valid=int(len(valid)),
        summary=summary,
        age_bins=tuple(bins),
        age_series=build_age_series(bins),
        risk_stack=build_risk_stack(bins),
        cholesterol_series=build_cholesterol_series(bins),
        risk_totals=build_risk_totals(summary),
        scatter=scatter,
    )


def build_dashboard_from_csv(csv_path: Path, config: AppConfig | None = None) -> DashboardResult:
    return build_dashboard(load_source(csv_path), config=config)
