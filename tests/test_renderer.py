"""Tests for the HTML dashboard renderer."""

from datetime import UTC, datetime

import pytest
from jinja2 import PackageLoader

from lighthouse_audit.models.model_report import Metrics, Report, Scores
from lighthouse_audit.reporting.aggregator import summarize
from lighthouse_audit.reporting.renderer import (
    classify_score,
    format_extra_metrics,
    format_metric,
    format_timestamp,
    _env,
    render,
)

RENDERED_AT = datetime(2025, 2, 1, 10, 0, 0, tzinfo=UTC)


class TestClassifyScore:
    """Tests for score tiers."""

    @pytest.mark.parametrize(
        "score,tier",
        [
            (100, "good"),
            (91, "good"),
            (90, "good"),
            (89, "average"),
            (50, "average"),
            (49, "poor"),
            (0, "poor"),
            (None, "missing"),
        ],
    )
    def test_tiers(self, score: int | None, tier: str) -> None:
        assert classify_score(score) == tier


class TestFormatting:
    """Tests for value formatting helpers."""

    def test_timestamp_naive(self) -> None:
        assert format_timestamp(datetime(2025, 1, 31, 14, 5, 9, 500)) == "2025-01-31 14:05:09"

    def test_timestamp_aware(self) -> None:
        assert format_timestamp(RENDERED_AT) == "2025-02-01 10:00:00+00:00"

    def test_metric_ms(self) -> None:
        assert format_metric(1080.4, "ms") == "1080 ms"

    def test_metric_unitless(self) -> None:
        assert format_metric(0.0123, "") == "0.012"


class TestRender:
    """Tests for render()."""

    def test_empty_summary(self) -> None:
        """Test rendering with no reports succeeds and says so."""
        html = render(summarize([]), RENDERED_AT)

        assert html.startswith("<!DOCTYPE html>")
        assert "0 reports" in html
        assert "No Lighthouse reports found" in html
        assert "<tbody>" not in html
        assert "N/A" in html

    def test_single_report_all_good(self, sample_report: Report) -> None:
        """Test scores 91/98/100/92 are all classified good."""
        html = render(summarize([sample_report]), RENDERED_AT)

        assert "1 report<" in html
        assert '<td class="score good">91</td>' in html
        assert '<td class="score good">98</td>' in html
        assert '<td class="score good">100</td>' in html
        assert '<td class="score good">92</td>' in html
        assert '<td class="metric">1080 ms</td>' in html
        assert '<td class="metric">0.000</td>' in html
        assert "2025-01-31 14:05:09" in html

    def test_summary_means_rendered(self, make_report) -> None:
        """Test category means appear in the summary section."""
        reports = [
            make_report(datetime(2025, 1, 31, 9), performance=40),
            make_report(datetime(2025, 1, 31, 10), performance=60),
        ]

        html = render(summarize(reports), RENDERED_AT)

        assert "2 reports" in html
        assert '<div class="value average">50</div>' in html

    def test_poor_and_average_tiers(self, make_report) -> None:
        """Test lower tiers are classified in detail rows."""
        report = make_report(datetime(2025, 1, 31, 9), performance=49, accessibility=75)

        html = render(summarize([report]), RENDERED_AT)

        assert '<td class="score poor">49</td>' in html
        assert '<td class="score average">75</td>' in html

    def test_rows_most_recent_first(self, make_report) -> None:
        """Test two reports on the same day render newest first."""
        morning = make_report(datetime(2025, 1, 31, 9, 0, 0), url="https://morning.example/")
        evening = make_report(datetime(2025, 1, 31, 18, 0, 0), url="https://evening.example/")

        html = render(summarize([morning, evening]), RENDERED_AT)

        assert html.count('<td class="url">') == 2
        assert html.index("https://evening.example/") < html.index("https://morning.example/")

    def test_deterministic(self, sample_report: Report, make_report) -> None:
        """Test identical inputs give byte-identical output."""
        summary = summarize([sample_report, make_report(datetime(2025, 1, 30, 8))])

        assert render(summary, RENDERED_AT) == render(summary, RENDERED_AT)

    def test_rendered_at_is_explicit(self, sample_report: Report) -> None:
        """Test the render time comes from the argument."""
        html = render(summarize([sample_report]), RENDERED_AT)
        assert "Generated at 2025-02-01 10:00:00+00:00" in html

    def test_url_escaped(self) -> None:
        """Test target identifiers are HTML-escaped."""
        report = Report(
            url="https://example.com/?q=<script>",
            timestamp=datetime(2025, 1, 31, 9),
            scores=Scores(performance=90, accessibility=90, best_practices=90, seo=90),
            metrics=Metrics(),
        )

        html = render(summarize([report]), RENDERED_AT)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_self_contained(self, sample_report: Report) -> None:
        """Test no external stylesheet or script references."""
        html = render(summarize([sample_report]), RENDERED_AT)

        assert "<style>" in html
        assert "<link" not in html
        assert "src=" not in html


def test_fid_and_extra_metrics_rendered():
    """Test FID and additional named metrics appear in the detail row."""
    report = Report(
        url="https://example.com/",
        timestamp=datetime(2025, 1, 31, 9),
        scores=Scores(performance=90, accessibility=90, best_practices=90, seo=90),
        metrics=Metrics(fid=64, tbt=150.5, speed_index=1200),
    )

    html = render(summarize([report]), RENDERED_AT)

    assert "<th>FID</th>" in html
    assert '<td class="metric">64 ms</td>' in html
    assert "<th>Other metrics</th>" in html
    assert '<td class="metric extra">speed_index: 1200, tbt: 150.5</td>' in html


def test_format_extra_metrics_empty():
    assert format_extra_metrics(Metrics(fcp=900)) == ""


def test_templates_loaded_from_package():
    """Test templates resolve through the package, not a filesystem path."""
    assert isinstance(_env.loader, PackageLoader)
    assert "dashboard.html.j2" in _env.list_templates()
