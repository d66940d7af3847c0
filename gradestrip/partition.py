"""Grouping of physical data rows into logical records."""

from __future__ import annotations

from typing import Iterator

from .schema import LogicalRecord


def normalize_rows_per_student(rows_per_student: int) -> int:
    return max(1, int(rows_per_student))


def record_count(row_count: int, rows_per_student: int) -> int:
    """Number of records ``partition_records`` yields: ``ceil(row_count / k)``."""

    k = normalize_rows_per_student(rows_per_student)
    return -(-max(0, row_count) // k)


def partition_records(row_count: int, rows_per_student: int) -> Iterator[LogicalRecord]:
    """Yield consecutive records of ``rows_per_student`` rows; the last one may be short."""

    k = normalize_rows_per_student(rows_per_student)
    for start in range(0, row_count, k):
        yield LogicalRecord(start_index=start, length=min(k, row_count - start))


__all__ = ["normalize_rows_per_student", "partition_records", "record_count"]
