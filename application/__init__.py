"""
Application layer: Use cases and workflow orchestration.

This layer coordinates between domain logic and infrastructure,
implementing the two paths that share the taxonomy store:
ingestion (single writer) and reporting (concurrent readers).
"""

from application.ingestion import IngestionSummary, run_ingestion, start_ingestion_thread
from application.reporting import render_report

__all__ = [
    # Ingestion path
    "run_ingestion",
    "start_ingestion_thread",
    "IngestionSummary",
    # Query path
    "render_report",
]
