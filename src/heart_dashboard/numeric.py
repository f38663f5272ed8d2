from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_EMBEDDED_NUMBER_PATTERN = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def parse_number(raw: object) -> float | None:
    """Parse a strict decimal literal; ``None`` for blanks, junk, NaN and infinities."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else None
    text = str(raw).strip()
    if not text or not _NUMBER_PATTERN.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def number_or_zero(raw: object) -> float:
    value = parse_number(raw)
    return 0.0 if value is None else value


def embedded_numbers(text: str) -> list[float]:
    """Unsigned numbers embedded in free text, in order of appearance."""
    return [float(token) for token in _EMBEDDED_NUMBER_PATTERN.findall(text)]


def round_half_up(value: float, ndigits: int = 0) -> float:
    if not math.isfinite(value):
        return value
    # Quantize the shortest repr: 0.25 -> 0.3 and 1.15 -> 1.2, never round-to-even.
    exact = Decimal(str(value))
    quantum = Decimal(10) ** -ndigits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + ndigits + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))
