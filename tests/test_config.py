from __future__ import annotations

from pathlib import Path

import pytest

from gradestrip.config import GeneratorConfig, load_config
from gradestrip.errors import ConfigError
from gradestrip.mapping import default_mappings, load_template_mappings, mappings_from_payload
from gradestrip.schema import TemplateMapping


def test_defaults():
    config = GeneratorConfig()
    assert (config.gap_rows, config.use_optimized_style, config.rows_per_student) == (1, True, 1)


def test_rows_per_student_is_clamped():
    assert GeneratorConfig(rows_per_student=0).rows_per_student == 1
    assert GeneratorConfig(rows_per_student=-3).rows_per_student == 1


def test_negative_gap_is_rejected():
    with pytest.raises(ConfigError):
        load_config(gap_rows=-1)


def test_load_config_from_yaml_with_overrides(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("gap_rows: 3\nrows_per_student: 2\nuse_optimized_style: false\n", encoding="utf-8")
    config = load_config(path, gap_rows=None, rows_per_student=4)
    assert config.gap_rows == 3
    assert config.rows_per_student == 4
    assert config.use_optimized_style is False


def test_load_config_errors(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(bad)
    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("gap: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(unknown)
    broken = tmp_path / "broken.yaml"
    broken.write_text("gap_rows: [1\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(broken)


@pytest.mark.parametrize("raw", ["null", "[2, 3]", "two"])
def test_non_integer_rows_per_student_is_a_config_error(tmp_path: Path, raw: str):
    path = tmp_path / "config.yaml"
    path.write_text(f"rows_per_student: {raw}\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_rows_per_student_string_digits_are_coerced():
    assert GeneratorConfig(rows_per_student="3").rows_per_student == 3
    assert GeneratorConfig(rows_per_student="0").rows_per_student == 1


def test_mapping_yaml_dict_form(tmp_path: Path):
    path = tmp_path / "mapping.yaml"
    path.write_text("姓名: b2\n数学: D2\n备注:\n", encoding="utf-8")
    assert load_template_mappings(path) == [
        TemplateMapping("姓名", "B2"),
        TemplateMapping("数学", "D2"),
        TemplateMapping("备注", ""),
    ]


def test_mapping_yaml_list_form(tmp_path: Path):
    path = tmp_path / "mapping.yaml"
    path.write_text(
        "mappings:\n  - header_name: 姓名\n    cell_address: a1\n  - header_name: 总分\n",
        encoding="utf-8",
    )
    assert load_template_mappings(path) == [TemplateMapping("姓名", "A1"), TemplateMapping("总分", "")]


def test_mapping_payload_errors(tmp_path: Path):
    with pytest.raises(ConfigError):
        mappings_from_payload([{"cell_address": "A1"}])
    with pytest.raises(ConfigError):
        mappings_from_payload("A1")
    with pytest.raises(ConfigError):
        load_template_mappings(tmp_path / "missing.yaml")


def test_default_mappings_reuse_existing_addresses():
    result = default_mappings(["姓名", "数学", "备注"], [TemplateMapping("数学", "c4"), TemplateMapping("其他", "A1")])
    assert result == [
        TemplateMapping("姓名", ""),
        TemplateMapping("数学", "C4"),
        TemplateMapping("备注", ""),
    ]
    assert [m.is_mapped for m in result] == [False, True, False]
