from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from heart_dashboard.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from heart_dashboard.errors import DashboardError
from heart_dashboard.io.read import load_source
from heart_dashboard.logging import configure_logging
from heart_dashboard.pipeline.build import build_dashboard_from_csv
from heart_dashboard.pipeline.run_all import run_all
from heart_dashboard.preprocess.columns import detect_columns

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _require_csv(csv: Path | None, cfg: AppConfig) -> Path:
    if csv is not None:
        return csv
    if cfg.input.csv_path:
        return Path(cfg.input.csv_path)
    raise typer.BadParameter(
        "Missing --csv. Pass a CSV path, set input.csv_path in config, "
        "or export HEART_DASHBOARD_CSV."
    )


def _fail(exc: ValueError) -> NoReturn:
    if isinstance(exc, DashboardError):
        message = exc.describe()
    else:
        # Plain ValueErrors come from column overrides that do not fit the CSV.
        message = f"Error [config]: {exc}"
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.command()
def columns(
    csv: Path | None = typer.Option(None, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Show which CSV header each canonical field role resolves to."""
    configure_logging("WARNING")
    cfg = _load_app_config(config)
    csv = _require_csv(csv=csv, cfg=cfg)
    try:
        source = load_source(csv)
        roles = detect_columns(source.headers, overrides=cfg.columns.overrides())
    except ValueError as exc:
        _fail(exc)
    for role, header in roles.as_dict().items():
        typer.echo(f"- {role}: {header if header is not None else '<unresolved>'}")


@app.command()
def summary(
    csv: Path | None = typer.Option(None, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
) -> None:
    """Print dataset-wide risk totals without writing any outputs."""
    configure_logging("WARNING")
    cfg = _load_app_config(config)
    csv = _require_csv(csv=csv, cfg=cfg)
    try:
        result = build_dashboard_from_csv(csv_path=csv, config=cfg)
    except ValueError as exc:
        _fail(exc)
    typer.echo(f"- rows_read: {result.rows_read}")
    typer.echo(f"- rows_valid: {result.rows_valid}")
    typer.echo(f"- total: {result.summary.total}")
    typer.echo(f"- at_risk: {result.summary.at_risk}")
    typer.echo(f"- no_risk: {result.summary.no_risk}")
    typer.echo(f"- percent_at_risk: {result.summary.percent_at_risk}")


@app.command()
def build(
    csv: Path | None = typer.Option(None, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    tables_format: str | None = typer.Option(
        None,
        help="Override outputs.tables_format (parquet or csv).",
    ),
) -> None:
    """Build chart-ready tables and the dashboard JSON payload."""
    configure_logging()
    cfg = _load_app_config(config)
    if tables_format is not None:
        if tables_format not in {"parquet", "csv"}:
            raise typer.BadParameter("--tables-format must be 'parquet' or 'csv'")
        cfg.outputs.tables_format = tables_format
    csv = _require_csv(csv=csv, cfg=cfg)
    try:
        payload_path = run_all(csv_path=csv, out_dir=out, config=cfg)
    except ValueError as exc:
        _fail(exc)
    typer.echo(f"Dashboard build complete. Payload: {payload_path}")


if __name__ == "__main__":
    app()
