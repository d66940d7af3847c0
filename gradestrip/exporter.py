"""Export drivers for standard and template strip generation."""

# Module responsibilities:
# - Acquire one destination workbook per export, run the matching layout engine, save once.
# - Provide an in-memory preview of the first few strips.

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import GeneratorConfig
from .errors import InputEmptyError
from .excel_writer import new_output_workbook, save_workbook
from .headers import flatten_headers
from .progress import ProgressCallback
from .schema import CellMerge, SheetModel, TemplateModel
from .sink import GridSink
from .standard import StripLayoutEngine
from .template import TemplateLayoutEngine
from .utils.log import get_logger
from .utils.paths import prepare_output_path, timestamped_filename

logger = get_logger("exporter")

STANDARD_PREFIX = "grade_strips"
TEMPLATE_PREFIX = "grade_strips_template"


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of one export run."""

    output_path: Path
    record_count: int
    row_count: int


@dataclass(frozen=True, slots=True)
class PreviewResult:
    rows: List[List[Any]]
    merges: List[CellMerge]
    record_count: int


def _ensure_input(model: SheetModel) -> None:
    if not model.header_rows and not model.data_rows:
        raise InputEmptyError("source sheet has no rows")


def _resolve_output(prefix: str, out_dir: Optional[Path], filename: Optional[str], now: Optional[datetime]) -> Path:
    return prepare_output_path(filename or timestamped_filename(prefix, now=now), out_dir)


def export_standard(
    model: SheetModel,
    config: GeneratorConfig,
    *,
    out_dir: Optional[Path] = None,
    filename: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    now: Optional[datetime] = None,
) -> ExportResult:
    """Write every record as a header + data strip into a new workbook.

    Raises:
        InputEmptyError: When the model holds no rows at all.
    """

    _ensure_input(model)
    workbook, sink = new_output_workbook(config.sheet_title)
    engine = StripLayoutEngine(model, config, sink)
    rows = engine.run(on_progress)
    out_path = save_workbook(workbook, _resolve_output(STANDARD_PREFIX, out_dir, filename, now))
    logger.info(
        "Standard export finished",
        extra={"output": str(out_path), "records": engine.record_count, "merges": sink.merge_count},
    )
    return ExportResult(output_path=out_path, record_count=engine.record_count, row_count=rows)


def export_with_template(
    model: SheetModel,
    template: TemplateModel,
    config: GeneratorConfig,
    *,
    out_dir: Optional[Path] = None,
    filename: Optional[str] = None,
    on_progress: Optional[ProgressCallback] = None,
    flat_names: Optional[Sequence[str]] = None,
    now: Optional[datetime] = None,
) -> ExportResult:
    """Overlay every record onto a copy of ``template`` stacked down a new worksheet.

    Raises:
        InputEmptyError: When the model holds no rows at all.
    """

    _ensure_input(model)
    names = list(flat_names) if flat_names is not None else flatten_headers(model.header_rows)
    workbook, sink = new_output_workbook(config.sheet_title)
    engine = TemplateLayoutEngine(model, template, names, config, sink)
    rows = engine.run(on_progress)
    out_path = save_workbook(workbook, _resolve_output(TEMPLATE_PREFIX, out_dir, filename, now))
    logger.info(
        "Template export finished",
        extra={"output": str(out_path), "records": engine.record_count},
    )
    return ExportResult(output_path=out_path, record_count=engine.record_count, row_count=rows)


def preview_strips(model: SheetModel, config: GeneratorConfig, count: int = 3) -> PreviewResult:
    """Lay out the first ``count`` strips in memory."""

    _ensure_input(model)
    sink = GridSink()
    engine = StripLayoutEngine(model, config, sink)
    shown = min(max(0, count), engine.record_count)
    engine.run(limit=shown)
    return PreviewResult(rows=sink.to_rows(), merges=list(sink.merges), record_count=shown)


__all__ = [
    "ExportResult",
    "PreviewResult",
    "export_standard",
    "export_with_template",
    "preview_strips",
]
