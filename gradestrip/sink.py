"""Destination-sheet interface used by the layout engines."""

# Module responsibilities:
# - Define the SheetSink protocol the layout code writes through (0-indexed coordinates).
# - Provide GridSink, an in-memory sink used for previews and tests.

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .schema import CellMerge, CellStyle


class SheetSink(ABC):
    """Write-only view of one output worksheet."""

    @abstractmethod
    def write(self, row: int, col: int, value: Any, style: Optional[CellStyle] = None) -> None:
        """Write ``value`` (and optionally ``style``) into cell ``(row, col)``."""

    @abstractmethod
    def merge(self, merge: CellMerge) -> None:
        """Merge the given absolute region."""

    def set_row_height(self, row: int, height: float) -> None:  # pragma: no cover - optional hook
        pass

    def set_column_width(self, col: int, width: float) -> None:  # pragma: no cover - optional hook
        pass


@dataclass
class GridSink(SheetSink):
    """Collects written cells in memory."""

    cells: Dict[Tuple[int, int], Any] = field(default_factory=dict)
    styles: Dict[Tuple[int, int], CellStyle] = field(default_factory=dict)
    merges: List[CellMerge] = field(default_factory=list)
    row_heights: Dict[int, float] = field(default_factory=dict)
    column_widths: Dict[int, float] = field(default_factory=dict)

    def write(self, row: int, col: int, value: Any, style: Optional[CellStyle] = None) -> None:
        self.cells[(row, col)] = value
        if style is not None:
            self.styles[(row, col)] = style

    def merge(self, merge: CellMerge) -> None:
        self.merges.append(merge)

    def set_row_height(self, row: int, height: float) -> None:
        self.row_heights[row] = height

    def set_column_width(self, col: int, width: float) -> None:
        self.column_widths[col] = width

    @property
    def row_count(self) -> int:
        """One past the last row that received a cell."""

        if not self.cells:
            return 0
        return max(row for row, _ in self.cells) + 1

    def to_rows(self, row_count: Optional[int] = None) -> List[List[Any]]:
        """Render the collected cells as a dense list of rows (missing cells are ``None``)."""

        rows = self.row_count if row_count is None else row_count
        width = max((col for _, col in self.cells), default=-1) + 1
        grid: List[List[Any]] = [[None] * width for _ in range(rows)]
        for (row, col), value in self.cells.items():
            if row < rows:
                grid[row][col] = value
        return grid


__all__ = ["GridSink", "SheetSink"]
