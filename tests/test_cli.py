from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from heart_dashboard.cli import app


def _write_config(tmp_path: Path, body: str = "{}") -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(body, encoding="utf-8")
    return config_path


def _write_csv(tmp_path: Path) -> Path:
    csv_path = tmp_path / "heart.csv"
    csv_path.write_text(
        "\n".join(
            [
                "Age,BMI,Blood Pressure,Heart Rate,Cholesterol,Heart Attack Risk",
                "22,21,120/80,70,180,no",
                "24,30,140/95,95,250,yes",
            ]
        ),
        encoding="utf-8",
    )
    return csv_path


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "build" in result.stdout
    assert "columns" in result.stdout
    assert "summary" in result.stdout


def test_columns_command_lists_resolved_roles(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "columns",
            "--csv",
            str(_write_csv(tmp_path)),
            "--config",
            str(_write_config(tmp_path)),
        ],
    )

    assert result.exit_code == 0
    assert "- age: Age" in result.stdout
    assert "- blood_pressure: Blood Pressure" in result.stdout
    assert "- systolic_bp: <unresolved>" in result.stdout


def test_summary_command_prints_risk_totals(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "summary",
            "--csv",
            str(_write_csv(tmp_path)),
            "--config",
            str(_write_config(tmp_path)),
        ],
    )

    assert result.exit_code == 0
    assert "- total: 2" in result.stdout
    assert "- at_risk: 1" in result.stdout
    assert "- percent_at_risk: 50.0" in result.stdout


def test_build_command_writes_outputs(tmp_path: Path) -> None:
    out_dir = tmp_path / "out"
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "build",
            "--csv",
            str(_write_csv(tmp_path)),
            "--out",
            str(out_dir),
            "--config",
            str(_write_config(tmp_path)),
            "--tables-format",
            "csv",
        ],
    )

    assert result.exit_code == 0
    assert "Dashboard build complete" in result.stdout
    assert (out_dir / "summary" / "dashboard.json").exists()
    assert (out_dir / "tables" / "age_series.csv").exists()


def test_build_command_uses_csv_path_from_config(tmp_path: Path) -> None:
    _write_csv(tmp_path)
    config_path = _write_config(
        tmp_path,
        "input:\n  csv_path: heart.csv\noutputs:\n  tables_format: csv\n",
    )
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["build", "--out", str(tmp_path / "out"), "--config", str(config_path)],
    )

    assert result.exit_code == 0
    assert (tmp_path / "out" / "tables" / "risk_stack.csv").exists()


def test_missing_source_reports_labeled_error(tmp_path: Path) -> None:
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "summary",
            "--csv",
            str(tmp_path / "missing.csv"),
            "--config",
            str(_write_config(tmp_path)),
        ],
    )

    assert result.exit_code == 1
    assert "Error [source_unavailable]" in result.output


def test_header_only_source_reports_no_usable_rows(tmp_path: Path) -> None:
    csv_path = tmp_path / "header_only.csv"
    csv_path.write_text("Age,BMI,Heart Attack Risk\n", encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["summary", "--csv", str(csv_path), "--config", str(_write_config(tmp_path))],
    )

    assert result.exit_code == 1
    assert "Error [no_usable_rows]" in result.output


def test_override_for_missing_header_reports_config_error(tmp_path: Path) -> None:
    csv_path = _write_csv(tmp_path)
    config_path = _write_config(tmp_path, "columns:\n  bmi: Body Mass\n")
    runner = CliRunner()

    for command in ("columns", "summary"):
        result = runner.invoke(
            app,
            [command, "--csv", str(csv_path), "--config", str(config_path)],
        )

        assert result.exit_code == 1
        assert "Error [config]" in result.output
        assert "Body Mass" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
