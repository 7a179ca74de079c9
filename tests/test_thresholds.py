"""Tests for threshold evaluation."""

from lighthouse_audit.evaluators.thresholds import (
    assert_metrics_below_threshold,
    assert_scores_above_threshold,
    find_bottlenecks,
)
from lighthouse_audit.models.model_report import Metrics, Scores
from lighthouse_audit.models.model_thresholds import MetricThresholds, ScoreThresholds


class TestScoreThresholds:
    """Tests for assert_scores_above_threshold()."""

    def test_passes_with_defaults(self) -> None:
        scores = Scores(performance=50, accessibility=80, best_practices=90, seo=100)

        result = assert_scores_above_threshold(scores)

        assert result.passed
        assert result.issues == []

    def test_reports_each_violation(self) -> None:
        scores = Scores(performance=55, accessibility=84, best_practices=90, seo=80)
        thresholds = ScoreThresholds(performance=60, accessibility=85, best_practices=80, seo=85)

        result = assert_scores_above_threshold(scores, thresholds)

        assert not result.passed
        assert result.issues == [
            "Performance score 55 is below threshold 60",
            "Accessibility score 84 is below threshold 85",
            "SEO score 80 is below threshold 85",
        ]

    def test_missing_category_is_violation(self) -> None:
        scores = Scores(performance=90, accessibility=90, best_practices=90)

        result = assert_scores_above_threshold(scores)

        assert not result.passed
        assert result.issues == ["SEO score is missing"]


class TestMetricThresholds:
    """Tests for assert_metrics_below_threshold()."""

    def test_passes_with_defaults(self) -> None:
        metrics = Metrics(fcp=1200, lcp=2000, cls=0.05, ttfb=300)

        assert assert_metrics_below_threshold(metrics).passed

    def test_equal_to_threshold_passes(self) -> None:
        metrics = Metrics(fcp=1800, lcp=2500, cls=0.1, ttfb=600)

        assert assert_metrics_below_threshold(metrics).passed

    def test_reports_violations(self) -> None:
        metrics = Metrics(fcp=1900, lcp=3100, cls=0.25, ttfb=700)
        thresholds = MetricThresholds(fcp=2000, lcp=3000, cls=0.15, ttfb=800)

        result = assert_metrics_below_threshold(metrics, thresholds)

        assert not result.passed
        assert result.issues == [
            "LCP 3100ms exceeds threshold 3000ms",
            "CLS 0.25 exceeds threshold 0.15",
        ]

    def test_fid_and_inp_not_checked(self) -> None:
        metrics = Metrics(fid=5000, inp=5000)

        assert assert_metrics_below_threshold(metrics).passed


def test_find_bottlenecks():
    """Test bottleneck descriptions for metrics over budget."""
    metrics = Metrics(fcp=1900, lcp=2000, cls=0.2, ttfb=650.5)

    assert find_bottlenecks(metrics) == [
        "Slow FCP detected: 1900.00ms",
        "High CLS detected: 0.200",
        "Slow TTFB detected: 650.50ms",
    ]


def test_find_bottlenecks_none():
    """Test a fast page has no bottlenecks."""
    assert find_bottlenecks(Metrics(fcp=500, lcp=900, cls=0.0, ttfb=100)) == []
