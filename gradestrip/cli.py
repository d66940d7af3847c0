"""Typer based command line entry points for gradestrip."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from gradestrip.config import GeneratorConfig, load_config
from gradestrip.errors import GradeStripError
from gradestrip.excel_reader import list_sheets, read_source, read_template
from gradestrip.exporter import export_standard, export_with_template, preview_strips
from gradestrip.headers import flatten_headers
from gradestrip.mapping import default_mappings, load_template_mappings
from gradestrip.schema import SheetModel
from gradestrip.utils.log import get_logger, set_level

app = typer.Typer(help="Turn a score sheet into cut-apart strips, one per student.")
logger = get_logger("cli")


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")
    set_level(level_value)


def _progress(percent: int) -> None:
    typer.secho(f"{percent:>3}%", err=True)


def _sheet_arg(sheet: Optional[str]) -> str | int | None:
    if sheet is None:
        return None
    return int(sheet) if sheet.isdigit() else sheet


def _load_model(source: Path, sheet: Optional[str], header_start: int, header_end: Optional[int]) -> SheetModel:
    if header_start < 1:
        raise typer.BadParameter("header-start is a 1-based row number")
    return read_source(
        source,
        sheet=_sheet_arg(sheet),
        header_start=header_start - 1,
        header_end=None if header_end is None else header_end - 1,
    )


def _build_config(
    config_path: Optional[Path],
    gap_rows: Optional[int],
    rows_per_student: Optional[int],
    plain_style: bool,
) -> GeneratorConfig:
    overrides = {"gap_rows": gap_rows, "rows_per_student": rows_per_student}
    if plain_style:
        overrides["use_optimized_style"] = False
    return load_config(config_path, **overrides)


def _fail(exc: Exception) -> NoReturn:
    logger.error("Command failed", extra={"error": str(exc)})
    typer.secho(f"Error: {exc}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


@app.command("sheets")
def sheets_command(source: Path = typer.Argument(..., help="Source workbook.")) -> None:
    """List the sheet names of a workbook."""

    try:
        names = list_sheets(source)
    except (GradeStripError, FileNotFoundError) as exc:
        _fail(exc)
    for idx, name in enumerate(names):
        typer.echo(f"{idx}\t{name}")


@app.command("preview")
def preview_command(
    source: Path = typer.Argument(..., help="Source workbook (.xlsx or .csv)."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Sheet name or 0-based index."),
    header_start: int = typer.Option(1, "--header-start", help="First header row (1-based)."),
    header_end: Optional[int] = typer.Option(None, "--header-end", help="Last header row (1-based)."),
    rows_per_student: Optional[int] = typer.Option(None, "--rows-per-student"),
    gap_rows: Optional[int] = typer.Option(None, "--gap-rows"),
    count: int = typer.Option(3, "--count", help="Number of strips to show."),
) -> None:
    """Print the first strips as tab-separated text."""

    try:
        model = _load_model(source, sheet, header_start, header_end)
        config = _build_config(None, gap_rows, rows_per_student, False)
        preview = preview_strips(model, config, count=count)
    except (GradeStripError, FileNotFoundError, KeyError) as exc:
        _fail(exc)
    typer.echo("Fields: " + ", ".join(flatten_headers(model.header_rows)))
    for row in preview.rows:
        typer.echo("\t".join("" if value is None else str(value) for value in row))
    typer.echo(f"({preview.record_count} strip(s), {len(preview.merges)} merge(s))")


@app.command("standard")
def standard_command(
    source: Path = typer.Argument(..., help="Source workbook (.xlsx or .csv)."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Sheet name or 0-based index."),
    header_start: int = typer.Option(1, "--header-start", help="First header row (1-based)."),
    header_end: Optional[int] = typer.Option(None, "--header-end", help="Last header row (1-based)."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML generator config."),
    gap_rows: Optional[int] = typer.Option(None, "--gap-rows", help="Blank rows between strips."),
    rows_per_student: Optional[int] = typer.Option(None, "--rows-per-student"),
    plain_style: bool = typer.Option(False, "--plain-style", help="Skip the header fill."),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Output directory."),
) -> None:
    """Generate strips that repeat the header above every student."""

    try:
        model = _load_model(source, sheet, header_start, header_end)
        config = _build_config(config_path, gap_rows, rows_per_student, plain_style)
        result = export_standard(model, config, out_dir=out_dir, on_progress=_progress)
    except (GradeStripError, FileNotFoundError, KeyError) as exc:
        _fail(exc)
    typer.echo(f"Strips written: {result.record_count}")
    typer.echo(f"Output: {result.output_path}")


@app.command("template")
def template_command(
    source: Path = typer.Argument(..., help="Source workbook (.xlsx or .csv)."),
    template: Path = typer.Argument(..., help="Template workbook (.xlsx)."),
    mapping: Path = typer.Option(..., "--mapping", help="YAML file mapping header names to cells."),
    sheet: Optional[str] = typer.Option(None, "--sheet", help="Sheet name or 0-based index."),
    header_start: int = typer.Option(1, "--header-start", help="First header row (1-based)."),
    header_end: Optional[int] = typer.Option(None, "--header-end", help="Last header row (1-based)."),
    config_path: Optional[Path] = typer.Option(None, "--config", help="YAML generator config."),
    gap_rows: Optional[int] = typer.Option(None, "--gap-rows", help="Blank rows between copies."),
    rows_per_student: Optional[int] = typer.Option(None, "--rows-per-student"),
    out_dir: Optional[Path] = typer.Option(None, "--out-dir", help="Output directory."),
) -> None:
    """Fill one copy of a template per student."""

    try:
        model = _load_model(source, sheet, header_start, header_end)
        config = _build_config(config_path, gap_rows, rows_per_student, False)
        flat_names = flatten_headers(model.header_rows)
        mappings = default_mappings(flat_names, load_template_mappings(mapping))
        template_model = read_template(template, mappings)
        result = export_with_template(
            model,
            template_model,
            config,
            out_dir=out_dir,
            on_progress=_progress,
            flat_names=flat_names,
        )
    except (GradeStripError, FileNotFoundError, KeyError) as exc:
        _fail(exc)
    mapped = sum(1 for item in mappings if item.is_mapped)
    typer.echo(f"Strips written: {result.record_count} ({mapped} mapped field(s))")
    typer.echo(f"Output: {result.output_path}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
