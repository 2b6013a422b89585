"""Excel file reader: keep it simple, always use openpyxl via pandas."""

import io
import logging
from typing import Any, List, Optional

import pandas as pd

from ..config import HEADER_MARKER, PREFERRED_SHEET
from ..errors import SourceError
from .base import BaseReader, RawRows

logger = logging.getLogger(__name__)


def _cell(value: Any) -> Any:
    """Empty cells (NaN/NaT/blank) become None."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    return value


def find_header_row(rows: List[List[Any]], marker: str = HEADER_MARKER) -> int:
    """Index of the first row with a cell containing the marker text, else 0."""
    for idx, row in enumerate(rows):
        for value in row:
            if value is not None and marker in " ".join(str(value).split()).lower():
                return idx
    return 0


def _header_names(cells: List[Any]) -> List[str]:
    # Ensure string unique headers
    seen: dict = {}
    names = []
    for i, c in enumerate(cells):
        name = str(c).strip() if c is not None else f"Unnamed: {i}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        names.append(name)
    return names


class ExcelReader(BaseReader):
    """Reader for workbook exports (openpyxl only).

    Ad platform exports put a title block above the table, so the header row
    is located by scanning for the marker column before rows are built.
    """

    def select_sheet(self, sheet_names: List[Any], preferred: Optional[str] = None) -> Any:
        preferred = preferred or self.config.get("sheet_name", PREFERRED_SHEET)
        if preferred in sheet_names:
            return preferred
        return sheet_names[0]

    def read(self, data: bytes, sheet_name: Optional[str] = None, **kwargs) -> RawRows:
        """Read the chosen sheet and return one raw row per line below the header."""
        try:
            book = pd.ExcelFile(io.BytesIO(data), engine="openpyxl")
        except Exception as e:
            raise SourceError(f"unreadable workbook: {e}") from e

        if not book.sheet_names:
            return []
        sheet = self.select_sheet(book.sheet_names, sheet_name)
        grid = book.parse(sheet, header=None, dtype=object)
        rows = [[_cell(v) for v in r] for r in grid.itertuples(index=False, name=None)]
        if not rows:
            return []

        header_idx = find_header_row(rows, kwargs.get("marker", HEADER_MARKER))
        logger.info(f"[excel] sheet='{sheet}', header row={header_idx}, rows={len(rows) - header_idx - 1}")

        header = _header_names(rows[header_idx])
        out: RawRows = []
        for values in rows[header_idx + 1:]:
            if all(v is None for v in values):
                continue
            out.append(dict(zip(header, values)))
        return out
