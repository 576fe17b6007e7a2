from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Union
from zipfile import BadZipFile

import pandas as pd

from ..core.exceptions import ValidationError
from .parser import LINE_KEY, is_blank_row

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
CSV_SUFFIXES = {".csv", ".txt"}


def read_rows(source: Union[str, Path, IO[bytes]], *, filename: str | None = None) -> list[dict[str, Any]]:
    """Read an uploaded timesheet into raw row dicts.

    Cells are kept as read (``dtype=object``) so serial dates and fractional
    day times reach the normalizer untouched; empty cells become ``None`` and
    fully blank rows are dropped. Each kept row carries its data row number
    (first row under the header is 1, blank rows counted) under ``LINE_KEY``.
    """
    name = filename or (str(source) if isinstance(source, (str, Path)) else "")
    suffix = Path(name).suffix.lower()

    try:
        if suffix in EXCEL_SUFFIXES:
            frame = pd.read_excel(source, dtype=object)
        elif suffix in CSV_SUFFIXES:
            frame = pd.read_csv(source, dtype=object, skipinitialspace=True, skip_blank_lines=False)
        else:
            raise ValidationError(f"unsupported file type: {suffix or name or 'unknown'}")
    except (ValueError, OSError, BadZipFile) as e:
        raise ValidationError(f"cannot read spreadsheet: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]
    frame = frame.astype(object).where(pd.notna(frame), None)

    rows = []
    for line, row in enumerate(frame.to_dict(orient="records"), start=1):
        if is_blank_row(row):
            continue
        row[LINE_KEY] = line
        rows.append(row)
    return rows
