"""
Main pipeline orchestration for the serials overlap analyzer.

This module coordinates the entire workflow:
1. Read the holdings export and validate its columns
2. Drop denylisted packages
3. Normalize effective coverage intervals
4. Run the overlap engine package by package
5. Aggregate per-package covered percentages
6. Write the summary, index and detail tables (plus optional reports)

Supports both progress bar and quiet modes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from .config import AppConfig, get_processing_date, validate_config
from .core.coverage import normalize_holdings
from .core.engine import run_overlap
from .core.errors import ConfigurationError
from .core.summary import build_package_index, results_by_package, summarize
from .core.types import Holding, OverlapResult, PackageSummary
from .input.holdings_csv import apply_denylist, package_names, read_holdings
from .logging_utils import close_logging, log_event, setup_logging
from .output.renderer import render_html, render_markdown
from .output.writer import write_package_details, write_package_index, write_summary


@dataclass
class LoadStats:
    """Statistics collected while loading holdings.

    Attributes:
        rows: Rows read from the export
        excluded_rows: Rows dropped by the package denylist
        holdings: Holdings kept for analysis
        packages: Packages in the working set
        journals: Distinct journal keys in the working set
        undefined_dates: Holdings with an undefined begin or end
    """
    rows: int = 0
    excluded_rows: int = 0
    holdings: int = 0
    packages: int = 0
    journals: int = 0
    undefined_dates: int = 0


def load_holdings(
    input_path: Path,
    cfg: AppConfig,
    processing_date: date,
) -> tuple[list[Holding], list[str], LoadStats]:
    """Read, filter and normalize holdings.

    Args:
        input_path: Path to the holdings export
        cfg: Application configuration
        processing_date: Date substituted for an open-ended "present" end

    Returns:
        Tuple of (normalized holdings, working package names, load stats)

    Raises:
        ConfigurationError: On invalid settings, missing columns, unreadable
            input or unknown denylisted packages
    """
    validate_config(cfg)
    records = read_holdings(input_path, cfg.input)
    kept = apply_denylist(records, cfg.analysis.exclude_packages)
    holdings = normalize_holdings(
        kept,
        processing_date,
        present_token=cfg.input.present_token,
        date_formats=cfg.input.date_formats,
    )
    packages = package_names(kept)

    stats = LoadStats(
        rows=len(records),
        excluded_rows=len(records) - len(kept),
        holdings=len(holdings),
        packages=len(packages),
        journals=len({h.journal_key for h in holdings}),
        undefined_dates=sum(
            1 for h in holdings if h.effective_begin is None or h.effective_end is None
        ),
    )
    return holdings, packages, stats


def _log_load_stats(logger: logging.Logger, stats: LoadStats) -> None:
    log_event(
        logger,
        "Holdings loaded",
        event="holdings_loaded",
        rows=stats.rows,
        excluded_rows=stats.excluded_rows,
        packages=stats.packages,
        journals=stats.journals,
    )
    if stats.undefined_dates:
        log_event(
            logger,
            f"{stats.undefined_dates} holdings have an undefined begin or end date "
            "and cannot be covered",
            level=logging.WARNING,
            event="undefined_dates",
            count=stats.undefined_dates,
        )


def run_pipeline(
    input_path: Path,
    output_dir: Path,
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> Path:
    """Run the complete overlap analysis pipeline.

    The input is read and validated before the run folder is created, so
    structural errors leave no output behind.

    Args:
        input_path: Path to the holdings export
        output_dir: Base directory for output files
        cfg: Application configuration
        show_progress: Whether to display a progress bar
        console: Rich console for output (creates default if None)

    Returns:
        Path to the run output directory
    """
    console = console or Console()
    processing_date = get_processing_date(cfg.analysis)
    run_output_dir = _build_run_output_dir(output_dir, input_path, cfg)
    holdings, packages, stats = load_holdings(input_path, cfg, processing_date)

    run_output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(cfg.logging, run_output_dir)
    try:
        log_event(
            logger,
            "Pipeline start",
            event="pipeline_start",
            input=str(input_path),
            output=str(run_output_dir),
            processing_date=processing_date.isoformat(),
        )
        _log_load_stats(logger, stats)
        _analyze_and_write(
            holdings,
            packages,
            input_path,
            run_output_dir,
            processing_date,
            cfg,
            show_progress,
            console,
            logger,
        )
    finally:
        close_logging(logger)
    return run_output_dir


def _analyze_and_write(
    holdings: list[Holding],
    packages: list[str],
    input_path: Path,
    run_output_dir: Path,
    processing_date: date,
    cfg: AppConfig,
    show_progress: bool,
    console: Console,
    logger: logging.Logger,
) -> None:
    def _log_package(package_name: str, package_results: list[OverlapResult]) -> None:
        log_event(
            logger,
            "Package analyzed",
            level=logging.DEBUG,
            event="package_analyzed",
            package=package_name,
            journals=len(package_results),
            covered=sum(1 for r in package_results if r.covered),
        )

    if show_progress:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeRemainingColumn(),
            console=console,
        )
        with progress:
            task = progress.add_task("Packages", total=len(packages))

            def _on_package(package_name: str, package_results: list[OverlapResult]) -> None:
                _log_package(package_name, package_results)
                progress.advance(task, 1)

            results = run_overlap(holdings, packages, on_package=_on_package)
    else:
        results = run_overlap(holdings, packages, on_package=_log_package)

    summaries = summarize(results, packages)
    index = build_package_index(packages)

    write_summary(summaries, run_output_dir / "summary.csv", cfg.output.pct_decimals)
    write_package_index(index, run_output_dir / "packages.csv")
    write_package_details(
        index, results_by_package(results), run_output_dir / cfg.output.detail_dirname
    )

    title = f"Package Overlap Report - {input_path.stem}"
    if cfg.output.include_html:
        render_html(
            summaries,
            index,
            run_output_dir / "report.html",
            title,
            processing_date,
            cfg.output.detail_dirname,
        )
    if cfg.output.include_markdown:
        render_markdown(
            summaries,
            index,
            run_output_dir / "report.md",
            title,
            processing_date,
            cfg.output.detail_dirname,
        )

    _render_summary_table(summaries, console)
    log_event(
        logger,
        "Pipeline complete",
        event="pipeline_complete",
        output=str(run_output_dir),
        packages=len(packages),
        journals=len(results),
        covered=sum(1 for r in results if r.covered),
    )


def _render_summary_table(
    summaries: list[PackageSummary], console: Console, limit: int = 10
) -> None:
    """Print the packages with the highest overlap."""
    table = Table(title="Highest overlap packages")
    table.add_column("Package")
    table.add_column("Journals", justify="right")
    table.add_column("Covered", justify="right")
    table.add_column("Covered %", justify="right")
    ranked = sorted(summaries, key=lambda s: (-s.covered_pct, s.package_name.lower()))
    for summary in ranked[:limit]:
        table.add_row(
            summary.package_name,
            str(summary.total_journals),
            str(summary.covered_journals),
            f"{summary.covered_pct:.1f}",
        )
    console.print(table)


def _build_run_output_dir(output_dir: Path, input_path: Path, cfg: AppConfig) -> Path:
    """Build the output directory name based on configured mode.

    Raises:
        ConfigurationError: If run_folder_mode is not supported
    """
    stem = input_path.stem or "run"
    mode = (cfg.output.run_folder_mode or "input").lower()
    if mode == "input":
        run_dir_name = stem
    elif mode == "timestamp":
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        run_dir_name = f"{timestamp}-{stem}"
    elif mode == "input_timestamp":
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        run_dir_name = f"{stem}-{timestamp}"
    else:
        raise ConfigurationError(
            "Unsupported run_folder_mode. Use 'input', 'timestamp', or 'input_timestamp'."
        )
    return output_dir / run_dir_name
