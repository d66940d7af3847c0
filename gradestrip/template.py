"""Template mode: clone a styled template block per record and overlay mapped fields."""

# Module responsibilities:
# - Parse spreadsheet-style cell addresses (A1, aa12) into 0-based columns and 1-based rows.
# - Clone template values, styles, row heights and merges at a given output row.
# - Write each mapped field of a record's first physical row into its template cell.

from __future__ import annotations

import re
from itertools import islice
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import GeneratorConfig
from .merges import translate_merge
from .partition import partition_records, record_count
from .progress import ProgressCallback, ProgressReporter
from .schema import CellStyle, LogicalRecord, OutputCursor, SheetModel, TemplateModel
from .sink import SheetSink
from .styles import overlay_style
from .utils.log import get_logger

logger = get_logger("template")

_ADDRESS_RE = re.compile(r"^([A-Za-z]+)([0-9]+)$")


def column_index(letters: str) -> int:
    """Convert column letters to a 0-based index (A -> 0, Z -> 25, AA -> 26)."""

    if not letters or not letters.isalpha() or not letters.isascii():
        raise ValueError(f"invalid column letters: {letters!r}")
    index = 0
    for char in letters.upper():
        index = index * 26 + (ord(char) - ord("A") + 1)
    return index - 1


def column_letters(index: int) -> str:
    """Inverse of :func:`column_index`."""

    if index < 0:
        raise ValueError("column index must be non-negative")
    letters = ""
    index += 1
    while index:
        index, rem = divmod(index - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def parse_cell_address(address: str) -> Optional[Tuple[int, int]]:
    """Parse ``"B12"`` into ``(col=1, row=12)``; malformed addresses give ``None``.

    Columns are 0-based, rows stay 1-based as written.
    """

    match = _ADDRESS_RE.match(address.strip()) if address else None
    if match is None:
        return None
    row = int(match.group(2))
    if row < 1:
        return None
    return column_index(match.group(1)), row


class TemplateOverlay:
    """Writes one template copy per record, with mapped fields filled in."""

    def __init__(self, template: TemplateModel, flat_names: Sequence[str], sink: SheetSink) -> None:
        self.template = template
        self.sink = sink
        self._name_index: Dict[str, int] = {}
        for idx, name in enumerate(flat_names):
            # first occurrence wins for duplicated header names
            self._name_index.setdefault(name, idx)
        self._targets = self._resolve_targets()

    def _resolve_targets(self) -> List[Tuple[int, int, int]]:
        targets: List[Tuple[int, int, int]] = []
        for mapping in self.template.mappings:
            if not mapping.is_mapped:
                continue
            parsed = parse_cell_address(mapping.cell_address)
            if parsed is None:
                logger.debug("Skipping malformed template address", extra={"address": mapping.cell_address})
                continue
            header_idx = self._name_index.get(mapping.header_name)
            if header_idx is None:
                logger.debug("Skipping unmapped template field", extra={"header": mapping.header_name})
                continue
            col, row = parsed
            rel_row, col = self._merge_anchor(row - 1, col)
            targets.append((header_idx, rel_row, col))
        return targets

    def _merge_anchor(self, row: int, col: int) -> Tuple[int, int]:
        """Map a cell covered by a template merge onto that merge's top-left cell."""

        for merge in self.template.merges:
            if merge.start_row <= row <= merge.end_row and merge.start_col <= col <= merge.end_col:
                if (row, col) != (merge.start_row, merge.start_col):
                    logger.debug(
                        "Redirecting mapped cell to merge anchor",
                        extra={"merge": merge.to_range(), "row": row, "col": col},
                    )
                return merge.start_row, merge.start_col
        return row, col

    @property
    def mapped_field_count(self) -> int:
        return len(self._targets)

    def _template_style(self, row: int, col: int) -> CellStyle:
        if row < len(self.template.rows) and col < len(self.template.rows[row]):
            return self.template.rows[row][col].style
        return CellStyle()

    def clone_template(self, cursor_start: int) -> None:
        for r, row in enumerate(self.template.rows):
            for c, cell in enumerate(row):
                self.sink.write(cursor_start + r, c, cell.value, cell.style.copy())
        for r, height in self.template.row_heights:
            self.sink.set_row_height(cursor_start + r, height)

    def overlay_record(self, first_row: Sequence[Any], cursor_start: int) -> None:
        for header_idx, rel_row, col in self._targets:
            value = first_row[header_idx] if header_idx < len(first_row) else None
            style = overlay_style(self._template_style(rel_row, col).copy())
            self.sink.write(cursor_start + rel_row, col, value, style)

    def apply_merges(self, cursor_start: int) -> None:
        for merge in self.template.merges:
            self.sink.merge(translate_merge(merge, cursor_start))

    def apply(self, record: LogicalRecord, model: SheetModel, cursor_start: int) -> None:
        """Clone the template at ``cursor_start`` and fill in the record's mapped fields.

        Only the record's first physical row feeds the mapping.
        """

        self.clone_template(cursor_start)
        rows = record.rows(model)
        if rows:
            self.overlay_record(rows[0], cursor_start)
        self.apply_merges(cursor_start)


class TemplateLayoutEngine:
    """Drives :class:`TemplateOverlay` over every record with a fixed strip height."""

    def __init__(
        self,
        model: SheetModel,
        template: TemplateModel,
        flat_names: Sequence[str],
        config: GeneratorConfig,
        sink: SheetSink,
    ) -> None:
        self.model = model
        self.template = template
        self.config = config
        self.sink = sink
        self.cursor = OutputCursor()
        self.overlay = TemplateOverlay(template, flat_names, sink)

    @property
    def record_count(self) -> int:
        return record_count(len(self.model.data_rows), self.config.rows_per_student)

    @property
    def strip_height(self) -> int:
        return self.template.row_count + self.config.gap_rows

    def run(
        self,
        on_progress: Optional[ProgressCallback] = None,
        *,
        limit: Optional[int] = None,
        reporter: Optional[ProgressReporter] = None,
    ) -> int:
        """Overlay every record (or the first ``limit``) and return the final cursor row."""

        total = self.record_count if limit is None else min(max(0, limit), self.record_count)
        reporter = reporter or ProgressReporter(
            total, on_progress, every=self.config.progress_every
        )
        logger.info(
            "Applying template",
            extra={
                "records": total,
                "template_rows": self.template.row_count,
                "mapped_fields": self.overlay.mapped_field_count,
            },
        )
        records = partition_records(len(self.model.data_rows), self.config.rows_per_student)
        for record in reporter.iterate(islice(records, total)):
            self.overlay.apply(record, self.model, self.cursor.current_row)
            self.cursor.advance(self.strip_height)
        for col, width in self.template.column_widths:
            self.sink.set_column_width(col, width)
        return self.cursor.current_row


__all__ = [
    "TemplateLayoutEngine",
    "TemplateOverlay",
    "column_index",
    "column_letters",
    "parse_cell_address",
]
