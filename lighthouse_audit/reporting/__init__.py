"""Aggregation, rendering and console output for Lighthouse reports."""

from lighthouse_audit.reporting.aggregator import sort_most_recent_first, summarize
from lighthouse_audit.reporting.dashboard import (
    dashboard_filename,
    generate_dashboard,
    preserve_dashboards,
)
from lighthouse_audit.reporting.renderer import classify_score, render

__all__ = [
    "classify_score",
    "dashboard_filename",
    "generate_dashboard",
    "preserve_dashboards",
    "render",
    "sort_most_recent_first",
    "summarize",
]
