from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd

from heart_dashboard.paths import build_output_paths
from heart_dashboard.report.contracts import DashboardResult

LOGGER = logging.getLogger(__name__)

PAYLOAD_FILENAME = "dashboard.json"

TABLE_WRITERS: dict[str, Callable[[pd.DataFrame, Path], None]] = {
    "parquet": lambda df, path: df.to_parquet(path, index=False),
    "csv": lambda df, path: df.to_csv(path, index=False),
}


def _table_writer(fmt: str) -> Callable[[pd.DataFrame, Path], None]:
    try:
        return TABLE_WRITERS[fmt]
    except KeyError:
        supported = ", ".join(sorted(TABLE_WRITERS))
        raise ValueError(f"Unsupported table format: {fmt} (expected one of {supported})") from None


def write_table(df: pd.DataFrame, path: Path, fmt: str = "parquet") -> Path:
    writer = _table_writer(fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    writer(df, path)
    return path


def write_payload(data: dict[str, Any], path: Path) -> Path:
    # Strict JSON: the payload maps NaN and infinities to null before it gets here.
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True, allow_nan=False), encoding="utf-8")
    return path


def write_dashboard_outputs(
    result: DashboardResult,
    out_dir: Path,
    fmt: str = "parquet",
) -> dict[str, Path]:
    """Write every chart table plus the JSON payload; returns written paths by name.

    Tables land in ``<out>/tables/<name>.<fmt>`` and the payload in
    ``<out>/summary/dashboard.json``. An unknown format fails before anything
    is written.
    """
    writer = _table_writer(fmt)
    paths = build_output_paths(out_dir)

    written: dict[str, Path] = {}
    for name, table in result.tables().items():
        table_path = paths.tables / f"{name}.{fmt}"
        writer(table, table_path)
        written[name] = table_path
    written["payload"] = write_payload(result.to_payload(), paths.summary / PAYLOAD_FILENAME)
    LOGGER.info("Wrote %d dashboard outputs to %s", len(written), paths.root)
    return written
