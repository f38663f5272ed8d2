from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

SOURCE_ENV_VAR = "HEART_DASHBOARD_CSV"


class ColumnsConfig(BaseModel):
    """Optional explicit header per role; unset roles fall back to detection."""

    age: str | None = None
    bmi: str | None = None
    cholesterol: str | None = None
    heart_rate: str | None = None
    blood_pressure: str | None = None
    systolic_bp: str | None = None
    diastolic_bp: str | None = None
    risk: str | None = None

    def overrides(self) -> dict[str, str]:
        return {role: header for role, header in self.model_dump().items() if header}


class BinningConfig(BaseModel):
    age_bin_width: int = Field(default=5, ge=1)


class ValidationConfig(BaseModel):
    include_blood_pressure: bool = True


class ScatterConfig(BaseModel):
    mode: Literal["per_class", "shared"] = "per_class"
    max_points_per_class: int = Field(default=220, ge=0)
    shared_budget: int = Field(default=300, ge=0)

    def budgets(self) -> tuple[int, int]:
        """Return ``(no_risk, at_risk)`` point limits for the configured mode."""
        if self.mode == "shared":
            half = self.shared_budget // 2
            return half, self.shared_budget - half
        return self.max_points_per_class, self.max_points_per_class


class InputConfig(BaseModel):
    csv_path: str | None = None


class OutputsConfig(BaseModel):
    tables_format: Literal["parquet", "csv"] = "parquet"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    binning: BinningConfig = Field(default_factory=BinningConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    scatter: ScatterConfig = Field(default_factory=ScatterConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.csv_path = _resolve_optional_path(config.input.csv_path, base_dir) or os.getenv(
        SOURCE_ENV_VAR
    )
    return config
