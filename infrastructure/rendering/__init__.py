"""Report rendering: Jinja2 HTML output for taxonomy reports."""

from infrastructure.rendering.html import HtmlReportRenderer, ReportRenderError

__all__ = [
    "HtmlReportRenderer",
    "ReportRenderError",
]
