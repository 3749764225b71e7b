"""
HTML rendering of taxonomy reports with Jinja2.

Templates live in infrastructure/rendering/templates/ (override with
`templates_root`). Output is autoescaped: origin and metric names come
straight off the wire.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from domain.report.models import TaxonomyReport
from infrastructure.constants import TEMPLATES_DIR
from infrastructure.io import ensure_exists

logger = logging.getLogger(__name__)

REPORT_TEMPLATE = "report.html.j2"
REPORT_TITLE = "Loggregator Metrics"


class ReportRenderError(RuntimeError):
    """Raised when a report cannot be rendered."""


class HtmlReportRenderer:
    """
    Renders a TaxonomyReport into an HTML page.

    The template is loaded (and cached by Jinja2) on first use; a missing or
    broken template surfaces as ReportRenderError at render time so that the
    caller can fail the request instead of the process.
    """

    def __init__(
        self,
        templates_root: Path = TEMPLATES_DIR,
        template_name: str = REPORT_TEMPLATE,
        title: str = REPORT_TITLE,
    ) -> None:
        self.templates_root = templates_root
        self.template_name = template_name
        self.title = title
        self.env = Environment(
            loader=FileSystemLoader(str(templates_root)),
            autoescape=select_autoescape(["html", "j2"], default_for_string=True),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def check(self) -> None:
        """Fail fast if the template is missing or does not compile."""
        ensure_exists(self.templates_root / self.template_name, "report template")
        self.env.get_template(self.template_name)
        logger.info("Loaded report template %s", self.templates_root / self.template_name)

    def render(self, report: TaxonomyReport) -> str:
        """
        Render `report` to an HTML string.

        Raises:
            ReportRenderError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(self.template_name)
            return template.render(report=report, title=self.title)
        except TemplateError as e:
            raise ReportRenderError(f"Failed to render '{self.template_name}': {e}") from e
