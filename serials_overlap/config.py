"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- InputConfig: Holdings export format and column names
- AnalysisConfig: Package denylist and processing date
- OutputConfig: Output folder and report settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

import yaml

from .core.errors import ConfigurationError

DEFAULT_COLUMNS = {
    "package_name": "PackageName",
    "journal_id": "KBID",
    "title": "Title",
    "managed_begin": "ManagedCoverageBegin",
    "managed_end": "ManagedCoverageEnd",
    "custom_begin": "CustomCoverageBegin",
    "custom_end": "CustomCoverageEnd",
    "embargo": "Embargo",
    "hide_on_publication_finder": "HideOnPublicationFinder",
}


@dataclass
class InputConfig:
    """Configuration for reading the holdings export.

    Attributes:
        delimiter: Field delimiter ("," for CSV, "\\t" for TSV)
        encoding: File encoding; "utf-8-sig" strips a leading BOM
        columns: Mapping of logical field name to the export's column header
        present_token: End date value meaning "still running"
        date_formats: Extra strftime formats tried after ISO dates
    """

    delimiter: str = ","
    encoding: str = "utf-8-sig"
    columns: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLUMNS))
    present_token: str = "present"
    date_formats: list[str] = field(default_factory=lambda: ["%m/%d/%Y"])


@dataclass
class AnalysisConfig:
    """Configuration for the overlap analysis.

    Attributes:
        exclude_packages: Package names dropped before analysis (e.g., trials)
        processing_date: ISO date used to resolve "present"; today when None
    """

    exclude_packages: list[str] = field(default_factory=list)
    processing_date: str | None = None


@dataclass
class OutputConfig:
    """Configuration for output generation.

    Attributes:
        run_folder_mode: How to name output folders ("input", "timestamp", "input_timestamp")
        detail_dirname: Subfolder holding one detail table per package
        include_html: Whether to render the HTML summary report
        include_markdown: Whether to render the Markdown summary report
        pct_decimals: Decimal places for percentages in written tables
    """

    run_folder_mode: str = "input"
    detail_dirname: str = "packages"
    include_html: bool = True
    include_markdown: bool = False
    pct_decimals: int = 2


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the main log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = True
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    input: InputConfig = field(default_factory=InputConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return validate_config(_merge_config(AppConfig(), raw))


def validate_config(cfg: AppConfig) -> AppConfig:
    """Reject settings that would silently distort the analysis."""
    token = cfg.input.present_token
    if not isinstance(token, str) or not token.strip():
        raise ConfigurationError("input.present_token must not be empty")
    if not cfg.input.delimiter:
        raise ConfigurationError("input.delimiter must not be empty")
    if not isinstance(cfg.output.pct_decimals, int) or cfg.output.pct_decimals < 0:
        raise ConfigurationError("output.pct_decimals must be a non-negative integer")
    return cfg


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        # An empty section keeps its defaults
        if value is None:
            continue
        if not isinstance(value, dict):
            raise ConfigurationError(f"Config section '{key}' must be a mapping")
        for name, item in value.items():
            default = data[key].get(name)
            if item is None and isinstance(default, (dict, list)):
                continue
            # Column overrides extend the default mapping
            if isinstance(item, dict) and isinstance(default, dict):
                data[key][name].update(item)
            else:
                data[key][name] = item
    try:
        return _fromdict(data)
    except TypeError as exc:
        raise ConfigurationError(f"Unknown configuration option: {exc}") from exc


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "input": {
            "delimiter": cfg.input.delimiter,
            "encoding": cfg.input.encoding,
            "columns": dict(cfg.input.columns),
            "present_token": cfg.input.present_token,
            "date_formats": list(cfg.input.date_formats),
        },
        "analysis": {
            "exclude_packages": list(cfg.analysis.exclude_packages),
            "processing_date": cfg.analysis.processing_date,
        },
        "output": {
            "run_folder_mode": cfg.output.run_folder_mode,
            "detail_dirname": cfg.output.detail_dirname,
            "include_html": cfg.output.include_html,
            "include_markdown": cfg.output.include_markdown,
            "pct_decimals": cfg.output.pct_decimals,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        input=InputConfig(**data["input"]),
        analysis=AnalysisConfig(**data["analysis"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_processing_date(cfg: AnalysisConfig) -> date:
    """Get the configured processing date, defaulting to today."""
    if not cfg.processing_date:
        return date.today()
    value = cfg.processing_date
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"processing_date must be an ISO date (YYYY-MM-DD), got {value!r}"
        ) from exc
