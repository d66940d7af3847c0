"""Source and template readers."""

# Module responsibilities:
# - Read an xlsx sheet (openpyxl) or csv file (pandas) into a grid of values plus merges.
# - Build the SheetModel for a chosen header block and the TemplateModel for template mode.
# - Emit structured logs for traceability.

from __future__ import annotations

from copy import copy
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.cell import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from .errors import InputEmptyError, SourceFormatError, TemplateError
from .headers import select_header_block
from .schema import CellMerge, CellStyle, SheetModel, TemplateCell, TemplateMapping, TemplateModel
from .utils.log import get_logger

logger = get_logger("excel_reader")

SheetType = Union[str, int, None]
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
CSV_SUFFIXES = {".csv"}


def _check_path(path: Path, suffixes: Iterable[str]) -> None:
    if not path.exists():
        raise FileNotFoundError(f"Workbook not found: {path}")
    if path.suffix.lower() not in set(suffixes):
        raise SourceFormatError(f"unsupported file type: {path.suffix or path.name}")


def _pick_sheet(workbook: Any, sheet: SheetType) -> Worksheet:
    if sheet is None:
        return workbook.worksheets[0]
    if isinstance(sheet, int):
        try:
            return workbook.worksheets[sheet]
        except IndexError as exc:
            raise KeyError(f"Sheet index {sheet} out of range") from exc
    if sheet not in workbook.sheetnames:
        raise KeyError(f"Sheet '{sheet}' not found in workbook")
    return workbook[sheet]


def _trim_trailing_blank_rows(rows: List[List[Any]]) -> List[List[Any]]:
    while rows and all(value is None or value == "" for value in rows[-1]):
        rows.pop()
    return rows


def list_sheets(path: Path) -> List[str]:
    """Return the sheet names of an xlsx workbook (``["csv"]``-style single entry for csv)."""

    _check_path(path, EXCEL_SUFFIXES | CSV_SUFFIXES)
    if path.suffix.lower() in CSV_SUFFIXES:
        return [path.stem]
    workbook = load_workbook(path, read_only=True)
    try:
        return list(workbook.sheetnames)
    finally:
        workbook.close()


def read_grid(path: Path, sheet: SheetType = None) -> Tuple[List[List[Any]], List[CellMerge]]:
    """Load a sheet as a list of rows plus its merged regions.

    Formulas are read as their cached values. csv files carry no merges.

    Raises:
        FileNotFoundError: When the file does not exist.
        SourceFormatError: For unsupported file types.
        InputEmptyError: When the sheet holds no rows.
    """

    _check_path(path, EXCEL_SUFFIXES | CSV_SUFFIXES)
    logger.info("Reading source", extra={"path": str(path), "sheet": sheet})

    merges: List[CellMerge] = []
    if path.suffix.lower() in CSV_SUFFIXES:
        try:
            frame = pd.read_csv(path, header=None, dtype=object)
        except pd.errors.EmptyDataError as exc:
            raise InputEmptyError(f"source sheet has no rows: {path}") from exc
        rows = frame.astype(object).where(frame.notna(), None).values.tolist()
    else:
        workbook = load_workbook(path, data_only=True)
        ws = _pick_sheet(workbook, sheet)
        rows = [
            list(row)
            for row in ws.iter_rows(
                min_row=1, max_row=ws.max_row, max_col=ws.max_column, values_only=True
            )
        ]
        merges = [CellMerge.from_range(rng.coord) for rng in ws.merged_cells.ranges]

    rows = _trim_trailing_blank_rows(rows)
    if not rows:
        raise InputEmptyError(f"source sheet has no rows: {path}")

    logger.info("Source loaded", extra={"rows": len(rows), "merges": len(merges)})
    return rows, merges


def read_source(
    path: Path,
    *,
    sheet: SheetType = None,
    header_start: int = 0,
    header_end: Optional[int] = None,
) -> SheetModel:
    """Read ``path`` and split it into a header block and data rows (0-based row indices)."""

    grid, merges = read_grid(path, sheet)
    return select_header_block(grid, merges, header_start, header_end)


def _cell_style(cell: Any) -> CellStyle:
    return CellStyle(
        font=copy(cell.font),
        fill=copy(cell.fill),
        border=copy(cell.border),
        alignment=copy(cell.alignment),
        number_format=cell.number_format,
    )


def read_template(
    path: Path,
    mappings: Sequence[TemplateMapping] = (),
    *,
    sheet: SheetType = None,
) -> TemplateModel:
    """Load the first (or given) sheet of a template workbook with values, styles and merges.

    Raises:
        FileNotFoundError: When the template does not exist.
        SourceFormatError: For non-xlsx templates.
        TemplateError: When the workbook has no worksheet.
    """

    _check_path(path, EXCEL_SUFFIXES)
    workbook = load_workbook(path)
    if not workbook.worksheets:
        raise TemplateError(f"template has no worksheets: {path}")
    ws = _pick_sheet(workbook, sheet)

    rows = [
        tuple(TemplateCell(value=cell.value, style=_cell_style(cell)) for cell in row)
        for row in ws.iter_rows(min_row=1, max_row=ws.max_row, max_col=ws.max_column)
    ]
    merges = [CellMerge.from_range(rng.coord) for rng in ws.merged_cells.ranges]
    row_heights = [
        (idx - 1, dim.height)
        for idx, dim in sorted(ws.row_dimensions.items())
        if dim.height is not None and idx <= ws.max_row
    ]
    column_widths = [
        (column_index_from_string(key) - 1, dim.width)
        for key, dim in sorted(ws.column_dimensions.items())
        if dim.customWidth and dim.width
    ]

    template = TemplateModel(
        rows=rows,
        merges=merges,
        row_count=ws.max_row,
        mappings=tuple(mappings),
        row_heights=row_heights,
        column_widths=column_widths,
    )
    logger.info(
        "Template loaded",
        extra={"path": str(path), "rows": template.row_count, "merges": len(merges)},
    )
    return template


__all__ = ["list_sheets", "read_grid", "read_source", "read_template"]
