"""Resolve arbitrary CSV headers to the canonical field roles.

Detection looks only at header names, never at row values.  Each role first
tries an exact (case-insensitive, trimmed) alias match, then falls back to a
substring match against a shorter fragment list.  Within each pass the first
header in file order wins, so alias order never breaks ties.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass

LOGGER = logging.getLogger(__name__)

ROLE_NAMES = (
    "age",
    "bmi",
    "cholesterol",
    "heart_rate",
    "blood_pressure",
    "systolic_bp",
    "diastolic_bp",
    "risk",
)

_EXACT_ALIASES: dict[str, list[str]] = {
    "age": ["age", "age_years", "age (years)"],
    "bmi": ["bmi", "body_mass_index", "body mass index"],
    "cholesterol": ["cholesterol", "chol", "cholestrol"],
    "heart_rate": ["heartrate", "heart_rate", "heart rate", "hr", "pulse"],
    "blood_pressure": ["bloodpressure", "blood_pressure", "blood pressure", "bp"],
    "systolic_bp": ["systolic", "systolic_bp", "sbp"],
    "diastolic_bp": ["diastolic", "diastolic_bp", "dbp"],
    "risk": [
        "heart attack risk",
        "heartattack",
        "heart_risk",
        "heartattackrisk",
        "risk",
        "target",
    ],
}

# "systolic" is intentionally absent from blood_pressure so split readings use the
# systolic/diastolic averaging path.
_CONTAINS_FRAGMENTS: dict[str, list[str]] = {
    "age": ["age"],
    "bmi": ["bmi", "body mass"],
    "cholesterol": ["chol"],
    "heart_rate": ["heart rate", "heartrate", "heart_rate"],
    "blood_pressure": ["blood pressure", "bloodpressure", "blood_pressure"],
    "systolic_bp": ["systolic", "sbp"],
    "diastolic_bp": ["diastolic", "dbp"],
    "risk": ["heart attack", "heartattack", "risk", "target"],
}


@dataclass(frozen=True)
class FieldRoles:
    age: str | None = None
    bmi: str | None = None
    cholesterol: str | None = None
    heart_rate: str | None = None
    blood_pressure: str | None = None
    systolic_bp: str | None = None
    diastolic_bp: str | None = None
    risk: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def unresolved(self) -> list[str]:
        return [role for role, header in self.as_dict().items() if header is None]


def _normalize_header(header: object) -> str:
    return str(header or "").strip().lower()


def _find_exact(normalized: list[tuple[str, str]], aliases: Sequence[str]) -> str | None:
    wanted = {alias.lower() for alias in aliases}
    for original, norm in normalized:
        if norm in wanted:
            return original
    return None


def _find_contains(normalized: list[tuple[str, str]], fragments: Sequence[str]) -> str | None:
    lowered = [fragment.lower() for fragment in fragments]
    for original, norm in normalized:
        if any(fragment in norm for fragment in lowered):
            return original
    return None


def resolve_role(headers: Sequence[str], role: str) -> str | None:
    if role not in _EXACT_ALIASES:
        raise ValueError(f"Unknown field role: {role}")
    normalized = [(header, _normalize_header(header)) for header in headers]
    return _find_exact(normalized, _EXACT_ALIASES[role]) or _find_contains(
        normalized, _CONTAINS_FRAGMENTS[role]
    )


def detect_columns(
    headers: Sequence[str],
    overrides: Mapping[str, str] | None = None,
) -> FieldRoles:
    """Map header names to canonical roles, honoring explicit per-role overrides."""
    overrides = dict(overrides or {})
    unknown = sorted(set(overrides) - set(ROLE_NAMES))
    if unknown:
        raise ValueError(f"Unknown field roles in column overrides: {', '.join(unknown)}")

    header_list = list(headers)
    resolved: dict[str, str | None] = {}
    for role in ROLE_NAMES:
        override = overrides.get(role)
        if override is not None:
            if override not in header_list:
                raise ValueError(
                    f"Configured column '{override}' for role '{role}' not found in CSV header"
                )
            resolved[role] = override
            continue
        resolved[role] = resolve_role(header_list, role)

    roles = FieldRoles(**resolved)
    LOGGER.info("Column mapping: %s", roles.as_dict())
    if roles.unresolved():
        LOGGER.info("Unresolved roles: %s", roles.unresolved())
    return roles
