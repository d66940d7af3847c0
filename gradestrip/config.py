"""Generator configuration and its YAML loader."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .progress import DEFAULT_REPORT_EVERY


class GeneratorConfig(BaseModel):
    """Layout settings shared by the standard and template exporters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    gap_rows: int = Field(default=1, ge=0)
    use_optimized_style: bool = True
    rows_per_student: int = 1
    sheet_title: str = "成绩条"
    progress_every: int = Field(default=DEFAULT_REPORT_EVERY, ge=1)

    @field_validator("rows_per_student", mode="after")
    @classmethod
    def _clamp_rows_per_student(cls, value: int) -> int:
        # values below one are clamped, not rejected
        return max(1, value)


def load_config(path: Optional[str | Path] = None, **overrides: Any) -> GeneratorConfig:
    """Load a :class:`GeneratorConfig` from YAML, applying non-``None`` overrides.

    Raises:
        ConfigError: When the file is missing, not a mapping, or fails validation.
    """

    data: dict[str, Any] = {}
    if path is not None:
        data.update(_load_yaml(Path(path)))
    data.update({key: value for key, value in overrides.items() if value is not None})
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"invalid generator configuration: {exc}") from exc


def _load_yaml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("config file must contain a mapping")
    return data


__all__ = ["GeneratorConfig", "load_config"]
