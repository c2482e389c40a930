"""Report table writers and summary renderers."""

from .renderer import render_html, render_markdown
from .writer import (
    detail_row,
    write_package_detail,
    write_package_details,
    write_package_index,
    write_summary,
)

__all__ = [
    "detail_row",
    "render_html",
    "render_markdown",
    "write_package_detail",
    "write_package_details",
    "write_package_index",
    "write_summary",
]
