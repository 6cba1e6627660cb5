"""Report registry and renderers."""

from ghmilestones.reports.registry import (
    MILESTONES_REPORT,
    Report,
    ReportDispatcher,
    ReportRegistry,
    UnknownReportError,
    build_default_registry,
)
from ghmilestones.reports.render_md import render_markdown, write_report

__all__ = [
    "MILESTONES_REPORT",
    "Report",
    "ReportDispatcher",
    "ReportRegistry",
    "UnknownReportError",
    "build_default_registry",
    "render_markdown",
    "write_report",
]
