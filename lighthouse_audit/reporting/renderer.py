"""HTML dashboard rendering for aggregated Lighthouse reports.

Rendering is a pure function of the summary and an explicit render time, so
the same inputs always give byte-identical output.
"""

from datetime import datetime
from typing import Any

from jinja2 import Environment, PackageLoader, StrictUndefined

from lighthouse_audit.consts import SCORE_AVERAGE_MIN, SCORE_GOOD_MIN
from lighthouse_audit.models.model_report import Metrics, Report, ScoreCategory
from lighthouse_audit.models.model_summary import AggregateSummary

TEMPLATE_PACKAGE = "lighthouse_audit.reporting"
DASHBOARD_TEMPLATE = "dashboard.html.j2"

# (field, label, unit) in display order
METRIC_COLUMNS: list[tuple[str, str, str]] = [
    ("fcp", "FCP", "ms"),
    ("lcp", "LCP", "ms"),
    ("cls", "CLS", ""),
    ("fid", "FID", "ms"),
    ("ttfb", "TTFB", "ms"),
    ("inp", "INP", "ms"),
]

_env = Environment(
    loader=PackageLoader(TEMPLATE_PACKAGE, "templates"),
    autoescape=True,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


def classify_score(score: int | None) -> str:
    """Return the tier for a score: "good" (>= 90), "average" (50-89) or "poor"."""
    if score is None:
        return "missing"
    if score >= SCORE_GOOD_MIN:
        return "good"
    elif score >= SCORE_AVERAGE_MIN:
        return "average"
    else:
        return "poor"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp independently of locale, e.g. 2025-01-31 14:05:09+00:00."""
    return value.isoformat(sep=" ", timespec="seconds")


def format_metric(value: float, unit: str) -> str:
    """Format a metric for display."""
    if unit == "ms":
        return f"{value:.0f} ms"
    return f"{value:.3f}"


def format_extra_metrics(metrics: Metrics) -> str:
    """Format additional named metrics as "name: value", sorted by name."""
    extra = metrics.model_extra or {}
    return ", ".join(f"{name}: {extra[name]:g}" for name in sorted(extra))


def _score_cell(score: int | None) -> dict[str, Any]:
    return {
        "value": "N/A" if score is None else str(score),
        "tier": classify_score(score),
    }


def _report_row(report: Report) -> dict[str, Any]:
    return {
        "url": report.url,
        "scores": [_score_cell(report.scores.get(category)) for category in ScoreCategory],
        "metrics": [
            format_metric(getattr(report.metrics, field), unit) for field, _, unit in METRIC_COLUMNS
        ],
        "extra_metrics": format_extra_metrics(report.metrics),
        "timestamp": format_timestamp(report.timestamp),
    }


def build_context(summary: AggregateSummary, rendered_at: datetime) -> dict[str, Any]:
    """Build the template context for a summary."""
    return {
        "count": summary.count,
        "rendered_at": format_timestamp(rendered_at),
        "categories": [category.label for category in ScoreCategory],
        "means": [
            {"label": category.label, **_score_cell(summary.means.get(category))}
            for category in ScoreCategory
        ],
        "metric_labels": [label for _, label, _ in METRIC_COLUMNS],
        "rows": [_report_row(report) for report in summary.reports],
        "good_min": SCORE_GOOD_MIN,
        "average_min": SCORE_AVERAGE_MIN,
    }


def render(summary: AggregateSummary, rendered_at: datetime) -> str:
    """Render the self-contained HTML dashboard.

    Args:
        summary: Aggregated report history
        rendered_at: Time shown as the render time (never read from the clock)

    Returns:
        HTML document as a string
    """
    template = _env.get_template(DASHBOARD_TEMPLATE)
    return template.render(**build_context(summary, rendered_at))
