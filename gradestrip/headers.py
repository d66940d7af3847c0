"""Header block selection and flattening."""

# Module responsibilities:
# - Cut a contiguous header block out of a parsed grid and keep its merges in header-relative coordinates.
# - Resolve a multi-row header into one display name per column.

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence

from .errors import HeaderSelectionError, InputEmptyError
from .merges import merges_within_rows
from .schema import CellMerge, SheetModel
from .utils.log import get_logger

logger = get_logger("headers")


def is_blank(value: Any) -> bool:
    return value is None or str(value) == ""


def column_label(col: int) -> str:
    """Positional name used when a column has no header text at all."""

    return f"Column {col + 1}"


def flatten_headers(header_rows: Sequence[Sequence[Any]]) -> List[str]:
    """Return one display name per column of ``header_rows``.

    The last header row wins; a blank cell there takes the nearest non-blank
    value above it in the same column, which is how a label in a merged
    top-row cell reaches the columns below it. Columns blank in every row get
    a positional name.

    Examples:
        >>> flatten_headers([["A", "", ""], ["", "B", "C"]])
        ['A', 'B', 'C']
    """

    if not header_rows:
        return []
    width = max(len(row) for row in header_rows)
    names: List[str] = []
    for col in range(width):
        name: Optional[str] = None
        for row in reversed(header_rows):
            value = row[col] if col < len(row) else None
            if not is_blank(value):
                name = str(value)
                break
        names.append(name if name is not None else column_label(col))
    return names


def _pad(rows: Iterable[Sequence[Any]], width: int) -> List[List[Any]]:
    return [list(row) + [None] * (width - len(row)) for row in rows]


def select_header_block(
    grid: Sequence[Sequence[Any]],
    merges: Iterable[CellMerge] = (),
    header_start: int = 0,
    header_end: Optional[int] = None,
) -> SheetModel:
    """Build a :class:`SheetModel` using rows ``header_start..header_end`` as the header.

    Rows above the header block are discarded, every row after it is data.

    Raises:
        InputEmptyError: When ``grid`` has no rows.
        HeaderSelectionError: When the selection is reversed or out of range.
    """

    if not grid:
        raise InputEmptyError("source sheet has no rows")
    if header_end is None:
        header_end = header_start
    if header_start < 0 or header_end < header_start:
        raise HeaderSelectionError(
            f"invalid header rows {header_start}..{header_end}: header rows must be contiguous"
        )
    if header_end >= len(grid):
        raise HeaderSelectionError(
            f"header row {header_end + 1} is beyond the last source row ({len(grid)})"
        )

    width = max(len(row) for row in grid)
    padded = _pad(grid, width)
    merges = tuple(merges)
    header_merges = merges_within_rows(merges, header_start, header_end)

    model = SheetModel(
        header_rows=padded[header_start : header_end + 1],
        data_rows=padded[header_end + 1 :],
        merges=merges,
        header_merges=header_merges,
        data_row_offset=header_end + 1,
    )
    logger.debug(
        "Header block selected",
        extra={
            "header_rows": model.header_row_count,
            "data_rows": len(model.data_rows),
            "header_merges": len(header_merges),
        },
    )
    return model


__all__ = ["column_label", "flatten_headers", "is_blank", "select_header_block"]
