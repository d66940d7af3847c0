"""Cell styles and column-width heuristics for generated strips."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .schema import CellStyle

HEADER_FILL_COLOR = "FFF5F5F5"
DEFAULT_COLUMN_WIDTH = 10
MIN_COLUMN_WIDTH = 8
MAX_COLUMN_WIDTH = 50

_thin = Side(style="thin")
THIN_BORDER = Border(top=_thin, left=_thin, bottom=_thin, right=_thin)
CENTERED = Alignment(horizontal="center", vertical="center")

STRIP_STYLES: Mapping[str, CellStyle] = MappingProxyType(
    {
        "header": CellStyle(font=Font(bold=True), border=THIN_BORDER, alignment=CENTERED),
        "header_filled": CellStyle(
            font=Font(bold=True),
            fill=PatternFill(fill_type="solid", fgColor=HEADER_FILL_COLOR),
            border=THIN_BORDER,
            alignment=CENTERED,
        ),
        "data": CellStyle(border=THIN_BORDER, alignment=CENTERED),
        # mapped template cells: border + centering always override the template's own style
        "overlay": CellStyle(border=THIN_BORDER, alignment=CENTERED),
    }
)


def header_style(optimized: bool) -> CellStyle:
    return STRIP_STYLES["header_filled" if optimized else "header"]


def overlay_style(base: CellStyle) -> CellStyle:
    """Keep the template's font, fill and number format but force border and alignment."""

    overlay = STRIP_STYLES["overlay"]
    return CellStyle(
        font=base.font,
        fill=base.fill,
        border=overlay.border,
        alignment=overlay.alignment,
        number_format=base.number_format,
    )


def display_width(value: Any) -> int:
    """Approximate rendered width: wide (non-ASCII) characters count double."""

    text = str(value)
    return sum(2 if ord(ch) > 0xFF else 1 for ch in text)


def clamp_column_width(width: float) -> float:
    return min(max(width, MIN_COLUMN_WIDTH), MAX_COLUMN_WIDTH)


__all__ = [
    "CENTERED",
    "DEFAULT_COLUMN_WIDTH",
    "STRIP_STYLES",
    "THIN_BORDER",
    "clamp_column_width",
    "display_width",
    "header_style",
    "overlay_style",
]
