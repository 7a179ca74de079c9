"""Threshold configuration for score and metric assertions."""

from pydantic import BaseModel, Field

from lighthouse_audit.consts import DEFAULT_METRIC_THRESHOLDS, DEFAULT_SCORE_THRESHOLD


class ScoreThresholds(BaseModel):
    """Minimum acceptable score per category."""

    performance: int = Field(default=DEFAULT_SCORE_THRESHOLD, ge=0, le=100)
    accessibility: int = Field(default=DEFAULT_SCORE_THRESHOLD, ge=0, le=100)
    best_practices: int = Field(default=DEFAULT_SCORE_THRESHOLD, ge=0, le=100)
    seo: int = Field(default=DEFAULT_SCORE_THRESHOLD, ge=0, le=100)


class MetricThresholds(BaseModel):
    """Maximum acceptable metric values (Core Web Vitals budgets)."""

    fcp: float = Field(default=DEFAULT_METRIC_THRESHOLDS["fcp"], ge=0.0)
    lcp: float = Field(default=DEFAULT_METRIC_THRESHOLDS["lcp"], ge=0.0)
    cls: float = Field(default=DEFAULT_METRIC_THRESHOLDS["cls"], ge=0.0)
    fid: float = Field(default=DEFAULT_METRIC_THRESHOLDS["fid"], ge=0.0)
    inp: float = Field(default=DEFAULT_METRIC_THRESHOLDS["inp"], ge=0.0)
    ttfb: float = Field(default=DEFAULT_METRIC_THRESHOLDS["ttfb"], ge=0.0)


class ThresholdResult(BaseModel):
    """Outcome of a threshold check."""

    passed: bool
    issues: list[str] = Field(default_factory=list)
