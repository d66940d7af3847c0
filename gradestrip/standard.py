"""Standard-mode strip layout: header copy, data copy, merge remapping and gaps."""

# Module responsibilities:
# - Emit one strip per logical record through a SheetSink while owning the output cursor.
# - Remap header merges and record-local data merges onto every strip.
# - Track per-column display widths and apply them once all strips are written.

from __future__ import annotations

from itertools import islice
from typing import Any, Iterable, List, Optional, Sequence

from .config import GeneratorConfig
from .merges import clip_merges_to_record, translate_merge
from .partition import partition_records, record_count
from .progress import ProgressCallback, ProgressReporter
from .schema import CellStyle, LogicalRecord, OutputCursor, SheetModel
from .sink import SheetSink
from .styles import (
    DEFAULT_COLUMN_WIDTH,
    STRIP_STYLES,
    clamp_column_width,
    display_width,
    header_style,
)
from .utils.log import get_logger

logger = get_logger("standard")


class StripLayoutEngine:
    """Lay out ``model`` as repeated strips into ``sink``.

    Each record goes through header emission, header merges, data emission,
    data merges and the trailing gap. The cursor is created per engine and is
    never shared with other components.
    """

    def __init__(self, model: SheetModel, config: GeneratorConfig, sink: SheetSink) -> None:
        self.model = model
        self.config = config
        self.sink = sink
        self.cursor = OutputCursor()
        self.max_cols = model.max_columns
        self.column_widths: List[float] = [DEFAULT_COLUMN_WIDTH] * self.max_cols
        self._header_style = header_style(config.use_optimized_style)
        self._data_style = STRIP_STYLES["data"]

    @property
    def record_count(self) -> int:
        return record_count(len(self.model.data_rows), self.config.rows_per_student)

    def records(self) -> Iterable[LogicalRecord]:
        return partition_records(len(self.model.data_rows), self.config.rows_per_student)

    def _write_row(self, row_values: Sequence[Any], style: CellStyle) -> None:
        row = self.cursor.current_row
        for col in range(self.max_cols):
            value = row_values[col] if col < len(row_values) else None
            self.sink.write(row, col, value, style)
            if value is not None:
                self.column_widths[col] = max(self.column_widths[col], display_width(value) + 2)
        self.cursor.advance()

    def emit_header(self) -> int:
        strip_start = self.cursor.current_row
        for header_row in self.model.header_rows:
            self._write_row(header_row, self._header_style)
        return strip_start

    def apply_header_merges(self, strip_start: int) -> None:
        for merge in self.model.header_merges:
            self.sink.merge(translate_merge(merge, strip_start))

    def emit_data(self, record: LogicalRecord) -> int:
        data_start = self.cursor.current_row
        for row_values in record.rows(self.model):
            self._write_row(row_values, self._data_style)
        return data_start

    def apply_data_merges(self, record: LogicalRecord, data_start: int) -> None:
        if record.length <= 0:
            return
        record_abs_start = record.start_index + self.model.data_row_offset
        for relative in clip_merges_to_record(self.model.merges, record_abs_start, record.length):
            self.sink.merge(translate_merge(relative, data_start))

    def emit_gap(self) -> None:
        self.cursor.advance(self.config.gap_rows)

    def emit_record(self, record: LogicalRecord) -> None:
        """Run one record through the full strip state sequence."""

        strip_start = self.emit_header()
        self.apply_header_merges(strip_start)
        data_start = self.emit_data(record)
        self.apply_data_merges(record, data_start)
        self.emit_gap()

    def apply_column_widths(self) -> None:
        for col, width in enumerate(self.column_widths):
            self.sink.set_column_width(col, clamp_column_width(width))

    def run(
        self,
        on_progress: Optional[ProgressCallback] = None,
        *,
        limit: Optional[int] = None,
        reporter: Optional[ProgressReporter] = None,
    ) -> int:
        """Lay out every record (or the first ``limit``) and return the final cursor row.

        The returned cursor includes the gap after the last strip; those rows
        stay blank.
        """

        total = self.record_count if limit is None else min(max(0, limit), self.record_count)
        reporter = reporter or ProgressReporter(
            total, on_progress, every=self.config.progress_every
        )
        logger.info(
            "Laying out strips",
            extra={
                "records": total,
                "header_rows": self.model.header_row_count,
                "rows_per_student": self.config.rows_per_student,
                "gap_rows": self.config.gap_rows,
            },
        )
        for record in reporter.iterate(islice(self.records(), total)):
            self.emit_record(record)
        self.apply_column_widths()
        return self.cursor.current_row


__all__ = ["StripLayoutEngine"]
