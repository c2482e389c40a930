from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.types import PackageIndexEntry, PackageSummary
from .writer import detail_filename


def _ranked(summaries: Sequence[PackageSummary]) -> list[PackageSummary]:
    return sorted(summaries, key=lambda s: (-s.covered_pct, s.package_name.lower()))


def _rows(
    summaries: Sequence[PackageSummary],
    index: Sequence[PackageIndexEntry],
    detail_dirname: str,
) -> list[dict]:
    files = {entry.package_name: f"{detail_dirname}/{detail_filename(entry)}" for entry in index}
    return [{"summary": summary, "detail": files.get(summary.package_name)} for summary in _ranked(summaries)]


def render_html(
    summaries: Sequence[PackageSummary],
    index: Sequence[PackageIndexEntry],
    output_path: Path,
    title: str,
    processing_date: date,
    detail_dirname: str = "packages",
) -> None:
    env = Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("summary.html")

    html = template.render(
        title=title,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
        processing_date=processing_date.isoformat(),
        rows=_rows(summaries, index, detail_dirname),
        total_packages=len(summaries),
        total_holdings=sum(s.total_journals for s in summaries),
        total_covered=sum(s.covered_journals for s in summaries),
    )
    output_path.write_text(html, encoding="utf-8")


def render_markdown(
    summaries: Sequence[PackageSummary],
    index: Sequence[PackageIndexEntry],
    output_path: Path,
    title: str,
    processing_date: date,
    detail_dirname: str = "packages",
) -> None:
    lines = [
        f"# {title}",
        "",
        f"Processing date: {processing_date.isoformat()}",
        "",
        "| Package | Journals | Covered | Covered % | Detail |",
        "|---|---:|---:|---:|---|",
    ]
    for row in _rows(summaries, index, detail_dirname):
        summary = row["summary"]
        name = summary.package_name.replace("|", "\\|")
        lines.append(
            f"| {name} | {summary.total_journals} | {summary.covered_journals} "
            f"| {summary.covered_pct:.1f} | {row['detail'] or ''} |"
        )
    lines.append("")
    output_path.write_text("\n".join(lines), encoding="utf-8")
