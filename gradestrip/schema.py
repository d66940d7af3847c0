"""Shared data structures for source sheets, templates and the output cursor."""

# Module responsibilities:
# - Provide immutable containers for parsed sheets, merges and templates.
# - Keep all coordinates 0-indexed; 1-indexed spreadsheet coordinates only exist at the codec edge.

from __future__ import annotations

from copy import copy
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from openpyxl.utils.cell import get_column_letter, range_boundaries

Row = Tuple[Any, ...]
Grid = Tuple[Row, ...]


@dataclass(frozen=True, slots=True)
class CellMerge:
    """Rectangular merged region, inclusive on both corners."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int

    def __post_init__(self) -> None:
        if self.end_row < self.start_row or self.end_col < self.start_col:
            raise ValueError(
                f"merge end ({self.end_row}, {self.end_col}) precedes start "
                f"({self.start_row}, {self.start_col})"
            )

    @property
    def row_span(self) -> int:
        return self.end_row - self.start_row + 1

    @property
    def col_span(self) -> int:
        return self.end_col - self.start_col + 1

    def to_range(self) -> str:
        """Return the region in A1 notation, e.g. ``A1:C2``."""

        return (
            f"{get_column_letter(self.start_col + 1)}{self.start_row + 1}:"
            f"{get_column_letter(self.end_col + 1)}{self.end_row + 1}"
        )

    @classmethod
    def from_range(cls, ref: str) -> "CellMerge":
        """Parse an A1 range such as ``B2:D3`` into a 0-indexed merge."""

        min_col, min_row, max_col, max_row = range_boundaries(ref)
        return cls(
            start_row=min_row - 1,
            start_col=min_col - 1,
            end_row=max_row - 1,
            end_col=max_col - 1,
        )


@dataclass(frozen=True, slots=True)
class SheetModel:
    """Normalized source sheet split into a header block and data rows.

    ``merges`` keeps the absolute coordinates of the whole source sheet while
    ``header_merges`` is already relative to the first header row.
    ``data_row_offset`` is the absolute source row of ``data_rows[0]``.
    """

    header_rows: Grid
    data_rows: Grid
    merges: Tuple[CellMerge, ...] = ()
    header_merges: Tuple[CellMerge, ...] = ()
    data_row_offset: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "header_rows", _freeze_grid(self.header_rows))
        object.__setattr__(self, "data_rows", _freeze_grid(self.data_rows))
        object.__setattr__(self, "merges", tuple(self.merges))
        object.__setattr__(self, "header_merges", tuple(self.header_merges))
        if self.data_row_offset is None:
            object.__setattr__(self, "data_row_offset", len(self.header_rows))

    @property
    def header_row_count(self) -> int:
        return len(self.header_rows)

    @property
    def max_columns(self) -> int:
        """Widest row across header and data rows."""

        return max((len(row) for row in (*self.header_rows, *self.data_rows)), default=0)


@dataclass(frozen=True, slots=True)
class LogicalRecord:
    """View over ``length`` consecutive data rows starting at ``start_index``."""

    start_index: int
    length: int

    def rows(self, model: SheetModel) -> Grid:
        return model.data_rows[self.start_index : self.start_index + self.length]


@dataclass(frozen=True, slots=True)
class TemplateMapping:
    """Binds a flattened header name to a template cell address (blank = unmapped)."""

    header_name: str
    cell_address: str = ""

    @property
    def is_mapped(self) -> bool:
        return bool(self.cell_address and self.cell_address.strip())


@dataclass(frozen=True, slots=True)
class CellStyle:
    """Explicit style value struct; each field is an openpyxl style object or ``None``."""

    font: Any = None
    fill: Any = None
    border: Any = None
    alignment: Any = None
    number_format: Optional[str] = None

    def copy(self) -> "CellStyle":
        """Field-by-field copy so output cells never share style objects with the source."""

        return CellStyle(
            font=copy(self.font) if self.font is not None else None,
            fill=copy(self.fill) if self.fill is not None else None,
            border=copy(self.border) if self.border is not None else None,
            alignment=copy(self.alignment) if self.alignment is not None else None,
            number_format=self.number_format,
        )


@dataclass(frozen=True, slots=True)
class TemplateCell:
    value: Any = None
    style: CellStyle = field(default_factory=CellStyle)


@dataclass(frozen=True, slots=True)
class TemplateModel:
    """Template block loaded once from a user-supplied workbook; read-only to the layout."""

    rows: Tuple[Tuple[TemplateCell, ...], ...]
    merges: Tuple[CellMerge, ...] = ()
    row_count: Optional[int] = None
    mappings: Tuple[TemplateMapping, ...] = ()
    row_heights: Tuple[Tuple[int, float], ...] = ()
    column_widths: Tuple[Tuple[int, float], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))
        object.__setattr__(self, "merges", tuple(self.merges))
        object.__setattr__(self, "mappings", tuple(self.mappings))
        object.__setattr__(self, "row_heights", tuple(self.row_heights))
        object.__setattr__(self, "column_widths", tuple(self.column_widths))
        if self.row_count is None:
            object.__setattr__(self, "row_count", len(self.rows))


@dataclass(slots=True)
class OutputCursor:
    """Single-owner row pointer into the destination sheet."""

    current_row: int = 0

    def advance(self, rows: int = 1) -> int:
        """Move the cursor forward and return the row it pointed at before moving."""

        if rows < 0:
            raise ValueError("cursor only moves forward")
        before = self.current_row
        self.current_row += rows
        return before


def _freeze_grid(rows: Sequence[Sequence[Any]]) -> Grid:
    return tuple(tuple(row) for row in rows)


__all__ = [
    "CellMerge",
    "CellStyle",
    "Grid",
    "LogicalRecord",
    "OutputCursor",
    "Row",
    "SheetModel",
    "TemplateCell",
    "TemplateMapping",
    "TemplateModel",
]
