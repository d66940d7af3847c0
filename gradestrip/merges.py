"""Merge-region coordinate arithmetic for repeated strips."""

# Module responsibilities:
# - Shift merges between header-relative, template-relative and absolute output coordinates.
# - Clip source merges to a single logical record, dropping those that cross its boundary.

from __future__ import annotations

from typing import Iterable, List, Optional

from .schema import CellMerge


def translate_merge(merge: CellMerge, row_offset: int, col_offset: int = 0) -> CellMerge:
    """Return ``merge`` with both corners shifted by the given offsets."""

    if row_offset == 0 and col_offset == 0:
        return merge
    return CellMerge(
        start_row=merge.start_row + row_offset,
        start_col=merge.start_col + col_offset,
        end_row=merge.end_row + row_offset,
        end_col=merge.end_col + col_offset,
    )


def clip_to_record(
    merge: CellMerge, record_row_start: int, record_row_count: int
) -> Optional[CellMerge]:
    """Re-base an absolute source merge onto one record's data rows.

    The merge survives only when its whole row range lies inside
    ``[record_row_start, record_row_start + record_row_count)``; the result is
    relative to ``record_row_start``. Merges crossing the record boundary, or
    lying outside it, yield ``None``.
    """

    record_row_end = record_row_start + record_row_count - 1
    if merge.start_row < record_row_start or merge.end_row > record_row_end:
        return None
    return translate_merge(merge, -record_row_start)


def clip_merges_to_record(
    merges: Iterable[CellMerge], record_row_start: int, record_row_count: int
) -> List[CellMerge]:
    """Apply :func:`clip_to_record` to every merge, keeping only the survivors."""

    clipped: List[CellMerge] = []
    for merge in merges:
        relative = clip_to_record(merge, record_row_start, record_row_count)
        if relative is not None:
            clipped.append(relative)
    return clipped


def merges_within_rows(merges: Iterable[CellMerge], first_row: int, last_row: int) -> List[CellMerge]:
    """Merges lying entirely inside ``[first_row, last_row]``, relative to ``first_row``."""

    return clip_merges_to_record(merges, first_row, last_row - first_row + 1)


__all__ = ["clip_merges_to_record", "clip_to_record", "merges_within_rows", "translate_merge"]
