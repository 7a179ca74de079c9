"""Threshold checks for Lighthouse scores and Core Web Vitals.

Checks never raise on violations. They return a ThresholdResult so callers
decide whether a violation fails a test, a CLI run or only gets logged.
"""

from lighthouse_audit.models.model_report import Metrics, ScoreCategory, Scores
from lighthouse_audit.models.model_thresholds import (
    MetricThresholds,
    ScoreThresholds,
    ThresholdResult,
)

# Metrics checked by assert_metrics_below_threshold: (field, label, unit, precision)
CHECKED_METRICS: list[tuple[str, str, str, int]] = [
    ("fcp", "FCP", "ms", 2),
    ("lcp", "LCP", "ms", 2),
    ("cls", "CLS", "", 3),
    ("ttfb", "TTFB", "ms", 2),
]

_BOTTLENECK_LABELS = {
    "fcp": "Slow FCP",
    "lcp": "Slow LCP",
    "cls": "High CLS",
    "ttfb": "Slow TTFB",
}


def assert_scores_above_threshold(
    scores: Scores,
    thresholds: ScoreThresholds | None = None,
) -> ThresholdResult:
    """Check that every category score meets its minimum.

    A category missing from the scores counts as a violation.
    """
    thresholds = thresholds or ScoreThresholds()
    issues: list[str] = []

    for category in ScoreCategory:
        minimum = getattr(thresholds, category.field_name)
        score = scores.get(category)
        if score is None:
            issues.append(f"{category.label} score is missing")
        elif score < minimum:
            issues.append(f"{category.label} score {score} is below threshold {minimum}")

    return ThresholdResult(passed=not issues, issues=issues)


def assert_metrics_below_threshold(
    metrics: Metrics,
    thresholds: MetricThresholds | None = None,
) -> ThresholdResult:
    """Check FCP, LCP, CLS and TTFB against their budgets."""
    thresholds = thresholds or MetricThresholds()
    issues: list[str] = []

    for field, label, unit, _ in CHECKED_METRICS:
        value = getattr(metrics, field)
        limit = getattr(thresholds, field)
        if value > limit:
            issues.append(f"{label} {value:g}{unit} exceeds threshold {limit:g}{unit}")

    return ThresholdResult(passed=not issues, issues=issues)


def find_bottlenecks(metrics: Metrics, thresholds: MetricThresholds | None = None) -> list[str]:
    """Describe each metric that exceeds its budget, e.g. "Slow LCP detected: 3100.00ms"."""
    thresholds = thresholds or MetricThresholds()
    bottlenecks = []
    for field, _, unit, precision in CHECKED_METRICS:
        value = getattr(metrics, field)
        if value > getattr(thresholds, field):
            bottlenecks.append(f"{_BOTTLENECK_LABELS[field]} detected: {value:.{precision}f}{unit}")
    return bottlenecks
