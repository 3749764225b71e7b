"""Report workflow: store snapshot -> report rows -> HTML."""

import logging

from domain.report import build_report
from domain.taxonomy import TaxonomyStore
from infrastructure.rendering import HtmlReportRenderer, ReportRenderError

logger = logging.getLogger(__name__)


def render_report(store: TaxonomyStore, renderer: HtmlReportRenderer) -> str:
    """
    Render the current taxonomy as HTML.

    Works on a snapshot; the store is never mutated and ingestion is only
    blocked for the duration of the copy.

    Raises:
        ReportRenderError: If building or rendering the report fails
    """
    snapshot = store.snapshot()
    try:
        report = build_report(snapshot)
    except (TypeError, ValueError) as e:
        raise ReportRenderError(f"Failed to build report: {e}") from e

    html = renderer.render(report)
    logger.debug("Rendered report: %d rows, %d metrics", len(report.rows), report.total_metrics)
    return html
