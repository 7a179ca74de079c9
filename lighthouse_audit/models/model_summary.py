"""Aggregate models derived from the stored report history."""

from pydantic import BaseModel, Field

from lighthouse_audit.models.model_report import Report, ScoreCategory


class CategoryMeans(BaseModel):
    """Mean score per fixed category. None when no report carries the category."""

    performance: int | None = None
    accessibility: int | None = None
    best_practices: int | None = None
    seo: int | None = None

    def get(self, category: ScoreCategory) -> int | None:
        return getattr(self, category.field_name)


class AggregateSummary(BaseModel):
    """Summary statistics across all loaded reports.

    Recomputed on every rendering request, never persisted.
    """

    count: int = Field(ge=0, description="Number of reports")
    means: CategoryMeans = Field(default_factory=CategoryMeans)
    reports: list[Report] = Field(default_factory=list, description="Most recent first")
