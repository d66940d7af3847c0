from __future__ import annotations

import pytest
from openpyxl.styles import Font

from gradestrip.config import GeneratorConfig
from gradestrip.schema import CellMerge, CellStyle, LogicalRecord, SheetModel, TemplateCell, TemplateMapping, TemplateModel
from gradestrip.sink import GridSink
from gradestrip.template import (
    TemplateLayoutEngine,
    TemplateOverlay,
    column_index,
    column_letters,
    parse_cell_address,
)


def _template(mappings=()) -> TemplateModel:
    title = TemplateCell("成绩单", CellStyle(font=Font(bold=True, size=14)))
    rows = [
        [title, TemplateCell(), TemplateCell()],
        [TemplateCell("姓名"), TemplateCell(), TemplateCell("总分")],
        [TemplateCell("评语"), TemplateCell(), TemplateCell()],
    ]
    return TemplateModel(
        rows=rows,
        merges=[CellMerge(0, 0, 0, 2), CellMerge(2, 1, 2, 2)],
        mappings=mappings,
        row_heights=[(0, 24.0)],
        column_widths=[(1, 18.0)],
    )


def _model() -> SheetModel:
    return SheetModel(
        header_rows=[["Name", "Scores", None], [None, "Total", "Comment"]],
        data_rows=[
            ["Ann", 180, "good"],
            ["(extra)", 0, "ignored"],
            ["Bob", 150],
        ],
    )


MAPPINGS = (
    TemplateMapping("Name", "b2"),
    TemplateMapping("Total", "D2"),
    TemplateMapping("Comment", "B3"),
    TemplateMapping("Missing", "A1"),
    TemplateMapping("Total", ""),
    TemplateMapping("Name", "2B"),
)


@pytest.mark.parametrize(
    "address, expected",
    [("A1", (0, 1)), ("B12", (1, 12)), ("aa1", (26, 1)), ("Z3", (25, 3)), (" c7 ", (2, 7))],
)
def test_parse_cell_address(address, expected):
    assert parse_cell_address(address) == expected


@pytest.mark.parametrize("address", ["", "12", "A", "A0", "1A", "A-1", "Ä1", "A1:B2"])
def test_parse_cell_address_rejects_malformed(address):
    assert parse_cell_address(address) is None


def test_column_letter_conversion_round_trips():
    assert column_index("A") == 0
    assert column_index("az") == 51
    assert column_letters(0) == "A"
    assert column_letters(26) == "AA"
    assert column_letters(701) == "ZZ"
    assert column_letters(702) == "AAA"
    with pytest.raises(ValueError):
        column_index("A1")


def test_overlay_clones_template_and_writes_first_row_fields():
    sink = GridSink()
    model = _model()
    overlay = TemplateOverlay(_template(MAPPINGS), ["Name", "Total", "Comment"], sink)
    overlay.apply(LogicalRecord(0, 2), model, cursor_start=10)

    assert sink.cells[(10, 0)] == "成绩单"
    assert sink.styles[(10, 0)].font.bold
    assert sink.cells[(11, 1)] == "Ann"
    assert sink.cells[(11, 3)] == 180
    assert sink.cells[(12, 1)] == "good"
    assert sink.cells[(11, 2)] == "总分"
    assert "(extra)" not in sink.cells.values()
    assert sink.styles[(11, 1)].border.left.style == "thin"
    assert sink.styles[(11, 1)].alignment.horizontal == "center"
    assert sink.merges == [CellMerge(10, 0, 10, 2), CellMerge(12, 1, 12, 2)]
    assert sink.row_heights == {10: 24.0}
    assert overlay.mapped_field_count == 3


def test_unknown_header_is_skipped_without_writes():
    sink = GridSink()
    template = _template([TemplateMapping("Nope", "A5")])
    TemplateOverlay(template, ["Name"], sink).apply(LogicalRecord(0, 1), _model(), 0)
    assert (4, 0) not in sink.cells
    assert set(sink.cells) == {(r, c) for r in range(3) for c in range(3)}


def test_short_source_row_writes_none():
    sink = GridSink()
    model = _model()
    overlay = TemplateOverlay(_template(MAPPINGS), ["Name", "Total", "Comment"], sink)
    overlay.apply(LogicalRecord(2, 1), model, 0)
    assert sink.cells[(0 + 1, 1)] == "Bob"
    assert sink.cells[(2, 1)] is None


def test_template_engine_height_is_fixed_per_record():
    sink = GridSink()
    config = GeneratorConfig(gap_rows=2, rows_per_student=1)
    engine = TemplateLayoutEngine(_model(), _template(MAPPINGS), ["Name", "Total", "Comment"], config, sink)
    cursor = engine.run()

    assert engine.record_count == 3
    assert cursor == 3 * (3 + 2)
    assert sink.cells[(6, 1)] == "(extra)"
    assert sink.cells[(11, 1)] == "Bob"
    assert sink.column_widths == {1: 18.0}


def test_template_engine_groups_rows_per_student():
    sink = GridSink()
    progress: list[int] = []
    config = GeneratorConfig(gap_rows=0, rows_per_student=2)
    engine = TemplateLayoutEngine(_model(), _template(MAPPINGS), ["Name", "Total", "Comment"], config, sink)
    assert engine.run(progress.append) == 2 * 3
    assert sink.cells[(1, 1)] == "Ann"
    assert sink.cells[(4, 1)] == "Bob"
    assert progress == [100]


def test_mapped_cell_inside_merge_lands_on_anchor():
    sink = GridSink()
    template = _template([TemplateMapping("Comment", "C3"), TemplateMapping("Name", "B1")])
    overlay = TemplateOverlay(template, ["Name", "Total", "Comment"], sink)
    overlay.apply(LogicalRecord(0, 1), _model(), cursor_start=4)

    assert sink.cells[(6, 1)] == "good"
    assert sink.cells[(4, 0)] == "Ann"
    assert sink.cells[(6, 2)] is None
    assert sink.cells[(4, 1)] is None
    assert sink.merges == [CellMerge(4, 0, 4, 2), CellMerge(6, 1, 6, 2)]
