"""Filesystem helpers for the default GradeStrip workspace."""

# Module responsibilities:
# - Define the default ~/GradeStrip directory layout and create folders on demand.
# - Build timestamped output file names so repeated exports never overwrite each other.

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

DEFAULT_BASE = Path.home() / "GradeStrip"


def ensure_default_structure(base: Optional[Path] = None) -> Dict[str, Path]:
    """Ensure the default GradeStrip directory structure exists.

    Args:
        base: Optional override for the GradeStrip base directory.

    Returns:
        Mapping with keys ``base``, ``out``, ``logs``.
    """

    target_base = base or DEFAULT_BASE
    paths = {
        "base": target_base,
        "out": target_base / "out",
        "logs": target_base / "logs",
    }
    for path in paths.values():
        path.mkdir(parents=True, exist_ok=True)
    return paths


def timestamped_filename(prefix: str, suffix: str = ".xlsx", now: Optional[datetime] = None) -> str:
    """Return ``<prefix>_<YYYYmmdd_HHMMSS><suffix>``."""

    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{stamp}{suffix}"


def prepare_output_path(filename: str, out_dir: Optional[Path] = None, base: Optional[Path] = None) -> Path:
    """Prepare an output path for ``filename``.

    Args:
        filename: Desired file name.
        out_dir: Explicit output directory; created when missing.
        base: Optional override for the GradeStrip base directory, used when
            ``out_dir`` is not given.

    Returns:
        Final path of the output file.
    """

    if out_dir is None:
        out_dir = ensure_default_structure(base)["out"]
    out_dir.mkdir(parents=True, exist_ok=True)
    return out_dir / filename
