"""Threshold evaluation for Lighthouse reports."""

from lighthouse_audit.evaluators.thresholds import (
    assert_metrics_below_threshold,
    assert_scores_above_threshold,
    find_bottlenecks,
)

__all__ = [
    "assert_metrics_below_threshold",
    "assert_scores_above_threshold",
    "find_bottlenecks",
]
