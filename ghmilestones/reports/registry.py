"""Report registry and dispatcher.

A report is a (refresh, render, template) triple stored under a string id.
The host application builds a registry, registers the reports it wants and
hands the registry to a dispatcher.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ghmilestones.config import RefreshConfig
from ghmilestones.core.interfaces import MilestoneLister, RefreshHook, RenderHook
from ghmilestones.models import RefreshResult

logger = logging.getLogger(__name__)

MILESTONES_REPORT = "milestonesData"

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class UnknownReportError(KeyError):
    pass


@dataclass(frozen=True)
class Report:
    """Hooks and template for one report type."""

    refresh: RefreshHook
    render: RenderHook
    template: str


class ReportRegistry:
    """Mapping from report id to Report, owned by whoever builds it."""

    def __init__(self):
        self._reports: Dict[str, Report] = {}

    def register(self, report_id: str, report: Report):
        """Register a report.

        Raises:
            ValueError: If report_id is already registered.
        """
        if report_id in self._reports:
            raise ValueError(f"Report '{report_id}' is already registered")
        self._reports[report_id] = report

    def get(self, report_id: str) -> Report:
        try:
            return self._reports[report_id]
        except KeyError:
            raise UnknownReportError(report_id) from None

    def ids(self) -> List[str]:
        return list(self._reports)

    def __contains__(self, report_id: object) -> bool:
        return report_id in self._reports

    def __len__(self) -> int:
        return len(self._reports)


def build_default_registry() -> ReportRegistry:
    """Registry holding the milestones report."""
    from ghmilestones.milestones import refresh, render_context

    registry = ReportRegistry()
    registry.register(
        MILESTONES_REPORT,
        Report(refresh=refresh, render=render_context, template="milestones.html.j2"),
    )
    return registry


class ReportDispatcher:
    """Runs refreshes and renders through the reports of a registry."""

    def __init__(self, registry: ReportRegistry, template_dir: Optional[Union[str, Path]] = None):
        """Initialize dispatcher.

        Args:
            registry: Reports this dispatcher can serve.
            template_dir: Where templates live. Defaults to the bundled templates.
        """
        self.registry = registry
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir or TEMPLATES_DIR)),
            autoescape=select_autoescape(["html", "xml", "html.j2"]),
        )

    def refresh(self, report_id: str, config: RefreshConfig, client: MilestoneLister) -> RefreshResult:
        report = self.registry.get(report_id)
        logger.debug("Refreshing report %s", report_id)
        return report.refresh(config, client)

    def render(self, report_id: str, result: RefreshResult, config: RefreshConfig) -> str:
        """Render a result to HTML with the report's template."""
        report = self.registry.get(report_id)
        context = report.render(result, config)
        template = self.env.get_template(report.template)
        return template.render(**context)
