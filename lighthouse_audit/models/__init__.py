"""Pydantic models for lighthouse-audit."""

from lighthouse_audit.models.model_report import (
    Metrics,
    Report,
    ScoreCategory,
    Scores,
)
from lighthouse_audit.models.model_runner import (
    AuditErrorType,
    AuditResult,
)
from lighthouse_audit.models.model_summary import (
    AggregateSummary,
    CategoryMeans,
)
from lighthouse_audit.models.model_thresholds import (
    MetricThresholds,
    ScoreThresholds,
    ThresholdResult,
)

__all__ = [
    # Report models
    "Metrics",
    "Report",
    "ScoreCategory",
    "Scores",
    # Runner models
    "AuditErrorType",
    "AuditResult",
    # Summary models
    "AggregateSummary",
    "CategoryMeans",
    # Threshold models
    "MetricThresholds",
    "ScoreThresholds",
    "ThresholdResult",
]
