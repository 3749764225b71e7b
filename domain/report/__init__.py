"""
Taxonomy reporting: turns a store snapshot into rows ready for rendering.

Pure functions only; HTML rendering lives in infrastructure.rendering.
"""

from domain.report.builder import build_report, total_metrics
from domain.report.models import ReportRow, SubcategoryCell, TaxonomyReport

__all__ = [
    "build_report",
    "total_metrics",
    "ReportRow",
    "SubcategoryCell",
    "TaxonomyReport",
]
