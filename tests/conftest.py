from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Sequence

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Keep test runs from writing into ~/GradeStrip/logs.
os.environ.setdefault("GRADESTRIP_LOG_DIR", str(Path(tempfile.gettempdir()) / "gradestrip-test-logs"))


def build_workbook(path: Path, rows: Sequence[Sequence[Any]], merges: Sequence[str] = (), title: str = "Scores") -> Path:
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(list(row))
    for ref in merges:
        ws.merge_cells(ref)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


@pytest.fixture()
def score_rows() -> list[list[Any]]:
    return [
        ["姓名", "成绩", None, "备注"],
        [None, "语文", "数学", None],
        ["张三", 90, 85, "优"],
        ["李四", 78, 92, "良"],
        ["王五", 66, 70, "中"],
    ]


@pytest.fixture()
def score_workbook(tmp_path: Path, score_rows) -> Path:
    return build_workbook(tmp_path / "scores.xlsx", score_rows, merges=["A1:A2", "B1:C1", "D1:D2"])
