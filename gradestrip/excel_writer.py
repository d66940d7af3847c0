"""openpyxl-backed output sheet."""

# Module responsibilities:
# - Adapt the 0-indexed SheetSink calls of the layout engines to an openpyxl worksheet.
# - Create the single destination workbook and serialize it once at the end of an export.

from __future__ import annotations

from copy import copy
from pathlib import Path
from typing import Any, Optional, Tuple

from openpyxl import Workbook
from openpyxl.cell.cell import MergedCell
from openpyxl.utils.cell import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .schema import CellMerge, CellStyle
from .sink import SheetSink
from .utils.log import get_logger

logger = get_logger("excel_writer")


class WorksheetSink(SheetSink):
    """Writes cells, styles and merges into an openpyxl worksheet."""

    def __init__(self, worksheet: Worksheet) -> None:
        self.worksheet = worksheet
        self.merge_count = 0

    def write(self, row: int, col: int, value: Any, style: Optional[CellStyle] = None) -> None:
        cell = self.worksheet.cell(row=row + 1, column=col + 1)
        if isinstance(cell, MergedCell):
            logger.debug("Skipping write into merged cell", extra={"row": row, "col": col})
            return
        cell.value = value
        if style is None:
            return
        if style.font is not None:
            cell.font = copy(style.font)
        if style.fill is not None:
            cell.fill = copy(style.fill)
        if style.border is not None:
            cell.border = copy(style.border)
        if style.alignment is not None:
            cell.alignment = copy(style.alignment)
        if style.number_format is not None:
            cell.number_format = style.number_format

    def merge(self, merge: CellMerge) -> None:
        if merge.row_span == 1 and merge.col_span == 1:
            return
        self.worksheet.merge_cells(
            start_row=merge.start_row + 1,
            start_column=merge.start_col + 1,
            end_row=merge.end_row + 1,
            end_column=merge.end_col + 1,
        )
        self.merge_count += 1

    def set_row_height(self, row: int, height: float) -> None:
        self.worksheet.row_dimensions[row + 1].height = height

    def set_column_width(self, col: int, width: float) -> None:
        self.worksheet.column_dimensions[get_column_letter(col + 1)].width = width


def new_output_workbook(sheet_title: str) -> Tuple[Workbook, WorksheetSink]:
    """Create the destination workbook with a single titled worksheet."""

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title
    return workbook, WorksheetSink(worksheet)


def save_workbook(workbook: Workbook, out_path: Path) -> Path:
    """Serialize ``workbook`` to ``out_path``; codec errors propagate unchanged."""

    out_path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(out_path)
    logger.info("Workbook written", extra={"output": str(out_path)})
    return out_path


__all__ = ["WorksheetSink", "new_output_workbook", "save_workbook"]
