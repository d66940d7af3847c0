"""Template field mappings: YAML loading and defaults."""

# Module responsibilities:
# - Load header-name -> template-cell mappings from YAML (mapping or list form).
# - Build the full per-header mapping list, reusing addresses configured earlier.

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Sequence

import yaml

from .errors import ConfigError
from .schema import TemplateMapping


def _normalize_address(address: Any) -> str:
    if address is None:
        return ""
    return str(address).strip().upper()


def mappings_from_payload(payload: Any) -> List[TemplateMapping]:
    """Accept ``{header: address}`` or ``[{header_name, cell_address}, ...]``."""

    if isinstance(payload, Mapping) and "mappings" in payload:
        payload = payload["mappings"]
    if isinstance(payload, Mapping):
        return [
            TemplateMapping(header_name=str(name), cell_address=_normalize_address(address))
            for name, address in payload.items()
        ]
    if isinstance(payload, list):
        result: List[TemplateMapping] = []
        for item in payload:
            if not isinstance(item, Mapping) or "header_name" not in item:
                raise ConfigError("each mapping item needs a 'header_name' key")
            result.append(
                TemplateMapping(
                    header_name=str(item["header_name"]),
                    cell_address=_normalize_address(item.get("cell_address")),
                )
            )
        return result
    raise ConfigError("Invalid mapping YAML structure (expected mapping or list)")


def load_template_mappings(path: Path) -> List[TemplateMapping]:
    """Load template mappings from a YAML file."""

    if not path.exists():
        raise ConfigError(f"mapping file not found: {path}")
    with path.open("r", encoding="utf-8") as fh:
        try:
            payload = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if payload is None:
        return []
    return mappings_from_payload(payload)


def default_mappings(
    flat_names: Sequence[str], existing: Iterable[TemplateMapping] = ()
) -> List[TemplateMapping]:
    """One mapping per flattened header, keeping addresses already configured for it."""

    known = {}
    for mapping in existing:
        known.setdefault(mapping.header_name, mapping)
    return [
        TemplateMapping(
            header_name=name,
            cell_address=_normalize_address(known[name].cell_address) if name in known else "",
        )
        for name in flat_names
    ]


__all__ = ["default_mappings", "load_template_mappings", "mappings_from_payload"]
