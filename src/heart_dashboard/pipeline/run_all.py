from __future__ import annotations

from pathlib import Path

from heart_dashboard.config import AppConfig
from heart_dashboard.io.write import write_dashboard_outputs
from heart_dashboard.pipeline.build import build_dashboard_from_csv


def run_all(csv_path: Path, out_dir: Path, config: AppConfig) -> Path:
    """Build the dashboard for ``csv_path`` and return the written payload path."""
    result = build_dashboard_from_csv(csv_path=csv_path, config=config)
    written = write_dashboard_outputs(result, out_dir=out_dir, fmt=config.outputs.tables_format)
    return written["payload"]
