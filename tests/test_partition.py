from __future__ import annotations

import math

from gradestrip.partition import partition_records, record_count
from gradestrip.schema import LogicalRecord, SheetModel


def test_record_count_and_last_length():
    for rows in range(0, 25):
        for k in range(1, 6):
            records = list(partition_records(rows, k))
            assert len(records) == math.ceil(rows / k) == record_count(rows, k)
            if records:
                assert records[-1].length == rows - k * (math.ceil(rows / k) - 1)
                assert [r.start_index for r in records] == list(range(0, rows, k))


def test_rows_per_student_below_one_is_clamped():
    assert list(partition_records(3, 0)) == [LogicalRecord(0, 1), LogicalRecord(1, 1), LogicalRecord(2, 1)]
    assert record_count(3, -4) == 3


def test_partition_is_restartable():
    first = list(partition_records(7, 3))
    assert list(partition_records(7, 3)) == first == [
        LogicalRecord(0, 3),
        LogicalRecord(3, 3),
        LogicalRecord(6, 1),
    ]


def test_record_rows_view():
    model = SheetModel(header_rows=[["h"]], data_rows=[[1], [2], [3]])
    assert LogicalRecord(1, 2).rows(model) == ((2,), (3,))
