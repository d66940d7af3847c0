"""`gradestrip` top-level package exports the strip layout engine and its IO helpers."""

# Module responsibilities:
# - Re-export the layout, template and export interfaces so consumers have a stable API surface.
# - Provide the package version.

from __future__ import annotations

from .config import GeneratorConfig, load_config
from .errors import (
    ConfigError,
    GradeStripError,
    HeaderSelectionError,
    InputEmptyError,
    SourceFormatError,
    TemplateError,
)
from .excel_reader import list_sheets, read_grid, read_source, read_template
from .exporter import ExportResult, export_standard, export_with_template, preview_strips
from .headers import flatten_headers, select_header_block
from .mapping import default_mappings, load_template_mappings
from .merges import clip_to_record, translate_merge
from .partition import partition_records, record_count
from .progress import ProgressReporter
from .schema import (
    CellMerge,
    CellStyle,
    LogicalRecord,
    OutputCursor,
    SheetModel,
    TemplateCell,
    TemplateMapping,
    TemplateModel,
)
from .standard import StripLayoutEngine
from .template import TemplateLayoutEngine, TemplateOverlay, parse_cell_address

__all__ = [
    "CellMerge",
    "CellStyle",
    "ConfigError",
    "ExportResult",
    "GeneratorConfig",
    "GradeStripError",
    "HeaderSelectionError",
    "InputEmptyError",
    "LogicalRecord",
    "OutputCursor",
    "ProgressReporter",
    "SheetModel",
    "SourceFormatError",
    "StripLayoutEngine",
    "TemplateCell",
    "TemplateError",
    "TemplateLayoutEngine",
    "TemplateMapping",
    "TemplateModel",
    "TemplateOverlay",
    "clip_to_record",
    "default_mappings",
    "export_standard",
    "export_with_template",
    "flatten_headers",
    "list_sheets",
    "load_config",
    "load_template_mappings",
    "parse_cell_address",
    "partition_records",
    "preview_strips",
    "read_grid",
    "read_source",
    "read_template",
    "record_count",
    "select_header_block",
    "translate_merge",
]

__version__ = "0.1.0"
