"""
Command-line interface for the serials overlap analyzer.

Uses Typer to provide a CLI with options for the major configuration
settings. Structural input problems exit with status 1.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, get_processing_date, load_config
from .core.errors import ConfigurationError
from .runner import load_holdings, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


def _build_config(
    config: Path | None,
    exclude: list[str] | None,
    as_of: str | None,
) -> AppConfig:
    cfg = load_config(str(config) if config else None)
    if exclude:
        cfg.analysis.exclude_packages = [*cfg.analysis.exclude_packages, *exclude]
    if as_of:
        cfg.analysis.processing_date = as_of
    return cfg


@app.command()
def run(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    output: Path = typer.Option(Path("out"), "--output", "-o"),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    exclude: list[str] | None = typer.Option(
        None, "--exclude", "-x", help="Package to drop before analysis (repeatable)."
    ),
    as_of: str | None = typer.Option(
        None, "--as-of", help="Processing date (YYYY-MM-DD) used for 'present' ends."
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    run_folder_mode: str | None = typer.Option(
        None,
        "--run-folder-mode",
        help="Output subfolder mode: input, timestamp, or input_timestamp.",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Run the package overlap analysis.

    Reads a holdings export, finds for every package which of its journals
    another package covers, and writes summary, index and per-package tables.

    Args:
        input: Path to the holdings export (CSV/TSV)
        output: Directory for output reports
        config: Optional path to YAML config file
        exclude: Package names excluded from the analysis
        as_of: Processing date replacing "present" coverage ends
        progress: Whether to show progress bar
        run_folder_mode: Output folder naming strategy
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    try:
        cfg = _build_config(config, exclude, as_of)

        if run_folder_mode:
            cfg.output.run_folder_mode = run_folder_mode
        if log_level:
            cfg.logging.level = log_level
        if log_format:
            cfg.logging.format = log_format
        if log_file is not None:
            cfg.logging.file = log_file

        output_path = run_pipeline(input, output, cfg, show_progress=progress, console=console)
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(f"Reports written to: {output_path}")


@app.command()
def validate(
    input: Path = typer.Option(..., "--input", "-i", exists=True, readable=True),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True),
    exclude: list[str] | None = typer.Option(None, "--exclude", "-x"),
    as_of: str | None = typer.Option(None, "--as-of"),
):
    """Check a holdings export and the denylist without running the analysis."""
    try:
        cfg = _build_config(config, exclude, as_of)
        _holdings, _packages, stats = load_holdings(
            input, cfg, get_processing_date(cfg.analysis)
        )
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        "[bold]Holdings[/bold]: "
        f"rows={stats.rows}, excluded={stats.excluded_rows}, packages={stats.packages}, "
        f"journals={stats.journals}, undefined_dates={stats.undefined_dates}"
    )


if __name__ == "__main__":
    app()
