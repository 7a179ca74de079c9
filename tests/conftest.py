"""Pytest configuration and fixtures."""

import os
import tempfile
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from lighthouse_audit.models.model_report import Metrics, Report, Scores


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_lhr() -> dict[str, Any]:
    """Trimmed Lighthouse result as produced by `lighthouse --output=json`."""
    return {
        "lighthouseVersion": "12.2.1",
        "requestedUrl": "https://playwright.dev/",
        "finalDisplayedUrl": "https://playwright.dev/",
        "categories": {
            "performance": {"id": "performance", "score": 0.91},
            "accessibility": {"id": "accessibility", "score": 0.98},
            "best-practices": {"id": "best-practices", "score": 1.0},
            "seo": {"id": "seo", "score": 0.92},
        },
        "audits": {
            "first-contentful-paint": {"numericValue": 1080.5, "displayValue": "1.1 s"},
            "largest-contentful-paint": {"numericValue": 1420.25, "displayValue": "1.4 s"},
            "cumulative-layout-shift": {"numericValue": 0.012},
            "max-potential-fid": {"numericValue": 64},
            "server-response-time": {"numericValue": 212.3},
        },
    }


@pytest.fixture
def sample_report(sample_lhr: dict[str, Any]) -> Report:
    """Create a sample report for testing."""
    return Report(
        url="https://playwright.dev/",
        timestamp=datetime(2025, 1, 31, 14, 5, 9),
        scores=Scores(performance=91, accessibility=98, best_practices=100, seo=92),
        metrics=Metrics(fcp=1080, lcp=1080, cls=0),
        raw_audits=sample_lhr,
    )


@pytest.fixture
def make_report() -> Callable[..., Report]:
    """Factory for reports with a given timestamp and scores."""

    def _make(
        timestamp: datetime,
        performance: int | None = 80,
        accessibility: int | None = 90,
        best_practices: int | None = 95,
        seo: int | None = 85,
        url: str = "https://example.com/",
        **metrics: float,
    ) -> Report:
        return Report(
            url=url,
            timestamp=timestamp,
            scores=Scores(
                performance=performance,
                accessibility=accessibility,
                best_practices=best_practices,
                seo=seo,
            ),
            metrics=Metrics(**metrics),
            raw_audits={"audits": {}},
        )

    return _make


@pytest.fixture
def umask_022():
    """Run with a typical 022 umask, restoring the previous one afterwards."""
    previous = os.umask(0o022)
    yield
    os.umask(previous)
