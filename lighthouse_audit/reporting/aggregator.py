"""Aggregation of the stored report history.

Reduces a list of reports into an AggregateSummary: the report count, one
mean per fixed score category and the reports ordered most recent first.
"""

from lighthouse_audit.models.common import _as_local
from lighthouse_audit.models.model_report import Report, ScoreCategory
from lighthouse_audit.models.model_summary import AggregateSummary, CategoryMeans


def _round_half_up(total: int, count: int) -> int:
    """Round total / count to the nearest integer, halves rounding up.

    Args:
        total: Sum of non-negative scores
        count: Number of contributing scores (> 0)
    """
    return (2 * total + count) // (2 * count)


def _category_mean(reports: list[Report], category: ScoreCategory) -> int | None:
    """Mean score for a category over the reports that carry it.

    Reports without the category are left out rather than counted as 0.
    """
    values = [s for s in (r.scores.get(category) for r in reports) if s is not None]
    if not values:
        return None
    return _round_half_up(sum(values), len(values))


def sort_most_recent_first(reports: list[Report]) -> list[Report]:
    """Return reports ordered by creation timestamp, newest first."""
    return sorted(reports, key=lambda r: _as_local(r.timestamp), reverse=True)


def summarize(reports: list[Report]) -> AggregateSummary:
    """Compute the aggregate summary for a set of reports.

    Args:
        reports: Reports in any order

    Returns:
        AggregateSummary. With no reports, count is 0 and all means are None.
    """
    means = CategoryMeans(
        **{category.field_name: _category_mean(reports, category) for category in ScoreCategory}
    )
    return AggregateSummary(
        count=len(reports),
        means=means,
        reports=sort_most_recent_first(reports),
    )
