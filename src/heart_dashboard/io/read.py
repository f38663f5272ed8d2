from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from heart_dashboard.errors import ParseFailureError, SourceUnavailableError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SourceTable:
    """Header list plus ordered raw rows, every value kept as a string."""

    headers: tuple[str, ...]
    frame: pd.DataFrame

    @property
    def row_count(self) -> int:
        return int(len(self.frame))

    def rows(self) -> Iterator[dict[str, str]]:
        for row in self.frame.to_dict(orient="records"):
            yield {str(key): value for key, value in row.items()}


def source_from_rows(
    headers: Sequence[str],
    rows: Iterable[Mapping[str, object]],
) -> SourceTable:
    """Build a source from already-parsed rows; missing cells become empty strings."""
    header_list = [str(header) for header in headers]
    records = [
        {
            header: "" if row.get(header) is None else str(row.get(header))
            for header in header_list
        }
        for row in rows
    ]
    frame = pd.DataFrame.from_records(records, columns=header_list)
    return SourceTable(headers=tuple(header_list), frame=frame.astype(str))


def _unique_headers(raw_headers: Iterable[object]) -> list[str]:
    seen: dict[str, int] = {}
    headers: list[str] = []
    for raw in raw_headers:
        header = str(raw).strip()
        count = seen.get(header, 0)
        seen[header] = count + 1
        headers.append(header if count == 0 else f"{header}.{count}")
    return headers


def load_source(csv_path: Path | str) -> SourceTable:
    """Read a CSV with a header row, keeping all cells as raw strings.

    The header is read as an ordinary row, so a data row with more fields than
    the header is a tokenizer error instead of an implicit index column.
    """
    path = Path(csv_path)
    if not path.is_file():
        raise SourceUnavailableError(f"CSV source not found: {path}")

    try:
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        raw = pd.read_csv(
            path,
            header=None,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except PermissionError as exc:
        raise SourceUnavailableError(f"CSV source is not readable: {path}") from exc
    except pd.errors.EmptyDataError as exc:
        raise ParseFailureError(f"CSV source has no header row: {path}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise ParseFailureError(f"Could not parse CSV source {path}: {exc}") from exc

    headers = _unique_headers(raw.iloc[0].fillna(""))
    frame = raw.iloc[1:].reset_index(drop=True).fillna("")
    frame.columns = headers
    LOGGER.info("Loaded %d rows with columns %s from %s", len(frame), headers, path)
    return SourceTable(headers=tuple(headers), frame=frame)
