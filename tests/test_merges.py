from __future__ import annotations

import itertools

import pytest

from gradestrip.merges import clip_merges_to_record, clip_to_record, merges_within_rows, translate_merge
from gradestrip.schema import CellMerge


def test_translate_identity():
    merge = CellMerge(1, 2, 3, 4)
    assert translate_merge(merge, 0, 0) == merge


def test_translate_composes():
    merge = CellMerge(1, 2, 3, 4)
    for a, b, c, d in [(1, 0, 2, 3), (5, 1, -2, 0), (0, 4, 7, -1)]:
        assert translate_merge(translate_merge(merge, a, b), c, d) == translate_merge(merge, a + c, b + d)


def test_translate_shifts_both_corners():
    assert translate_merge(CellMerge(0, 0, 1, 2), 10, 1) == CellMerge(10, 1, 11, 3)


def test_clip_inside_record_is_rebased():
    assert clip_to_record(CellMerge(5, 1, 6, 2), 4, 3) == CellMerge(1, 1, 2, 2)


def test_clip_drops_merge_crossing_record_end():
    assert clip_to_record(CellMerge(5, 0, 7, 0), 4, 3) is None


def test_clip_drops_merge_starting_before_record():
    assert clip_to_record(CellMerge(3, 0, 4, 0), 4, 3) is None


def test_clip_zero_length_record_drops_everything():
    assert clip_to_record(CellMerge(4, 0, 4, 1), 4, 0) is None


def test_clip_matches_containment_rule():
    starts = range(0, 6)
    for s, length, m_start, m_len in itertools.product(starts, range(1, 4), range(0, 8), range(1, 4)):
        merge = CellMerge(m_start, 0, m_start + m_len - 1, 1)
        expected = merge.start_row >= s and merge.end_row <= s + length - 1
        assert (clip_to_record(merge, s, length) is not None) is expected


def test_clip_merges_to_record_keeps_only_survivors():
    merges = [CellMerge(2, 0, 2, 1), CellMerge(2, 2, 4, 2), CellMerge(0, 0, 1, 0)]
    assert clip_merges_to_record(merges, 2, 2) == [CellMerge(0, 0, 0, 1)]


def test_merges_within_rows_is_inclusive():
    merges = [CellMerge(1, 0, 2, 0), CellMerge(2, 1, 3, 1)]
    assert merges_within_rows(merges, 1, 2) == [CellMerge(0, 0, 1, 0)]


def test_cell_merge_rejects_inverted_corners():
    with pytest.raises(ValueError):
        CellMerge(2, 0, 1, 0)


def test_cell_merge_range_notation():
    merge = CellMerge.from_range("B2:D3")
    assert merge == CellMerge(1, 1, 2, 3)
    assert merge.to_range() == "B2:D3"
    assert (merge.row_span, merge.col_span) == (2, 3)
