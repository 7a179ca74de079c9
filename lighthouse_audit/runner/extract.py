"""Extraction of scores and metrics from a Lighthouse result (LHR)."""

from datetime import datetime
from typing import Any

from lighthouse_audit.consts import METRIC_AUDIT_IDS
from lighthouse_audit.models.common import _utc_now
from lighthouse_audit.models.model_report import Metrics, Report, ScoreCategory, Scores


def _category_score(categories: dict[str, Any], category_id: str) -> int | None:
    """Convert a 0-1 category score to 0-100. None if absent or unscored."""
    score = (categories.get(category_id) or {}).get("score")
    if score is None:
        return None
    return round(score * 100)


def extract_scores(lhr: dict[str, Any]) -> Scores:
    """Extract category scores from an LHR.

    Args:
        lhr: Parsed Lighthouse JSON result

    Returns:
        Scores with each category on a 0-100 scale
    """
    categories = lhr.get("categories", {})
    values = {
        category.field_name: _category_score(categories, category.value) for category in ScoreCategory
    }
    return Scores(**values, pwa=_category_score(categories, "pwa"))


def extract_metrics(lhr: dict[str, Any]) -> Metrics:
    """Extract Core Web Vitals and key timings from an LHR.

    Missing audits count as 0.
    """
    audits = lhr.get("audits", {})
    values: dict[str, float] = {}
    for name, audit_ids in METRIC_AUDIT_IDS.items():
        values[name] = 0.0
        for audit_id in audit_ids:
            numeric = (audits.get(audit_id) or {}).get("numericValue")
            if numeric is not None:
                values[name] = float(numeric)
                break
    return Metrics(**values)


def build_report(url: str, lhr: dict[str, Any], timestamp: datetime | None = None) -> Report:
    """Build a Report from an LHR, keeping the LHR as the raw payload."""
    return Report(
        url=url,
        timestamp=timestamp or _utc_now(),
        scores=extract_scores(lhr),
        metrics=extract_metrics(lhr),
        raw_audits=lhr,
    )
