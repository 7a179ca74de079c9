from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lighthouse_audit.models.common import _utc_now


class ScoreCategory(str, Enum):
    """The four fixed Lighthouse categories, keyed by Lighthouse category id."""

    PERFORMANCE = "performance"
    ACCESSIBILITY = "accessibility"
    BEST_PRACTICES = "best-practices"
    SEO = "seo"

    @property
    def field_name(self) -> str:
        """Attribute holding this category on Scores."""
        return self.value.replace("-", "_")

    @property
    def label(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ScoreCategory.PERFORMANCE: "Performance",
    ScoreCategory.ACCESSIBILITY: "Accessibility",
    ScoreCategory.BEST_PRACTICES: "Best Practices",
    ScoreCategory.SEO: "SEO",
}


class Scores(BaseModel):
    """Category scores (0-100) from a single audit.

    The fixed categories are optional only so that documents written before a
    category existed still load.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    performance: int | None = Field(default=None, ge=0, le=100)
    accessibility: int | None = Field(default=None, ge=0, le=100)
    best_practices: int | None = Field(default=None, ge=0, le=100, alias="bestPractices")
    seo: int | None = Field(default=None, ge=0, le=100)
    pwa: int | None = Field(default=None, ge=0, le=100, description="Only on older Lighthouse versions")

    def get(self, category: ScoreCategory) -> int | None:
        """Return the score for a category, None if the report lacks it."""
        return getattr(self, category.field_name)


class Metrics(BaseModel):
    """Core Web Vitals and timing metrics.

    Timings are milliseconds, CLS is a unitless ratio. Extra named metrics are
    kept as long as they are non-negative numbers.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    fcp: float = Field(default=0.0, ge=0.0, description="First Contentful Paint")
    lcp: float = Field(default=0.0, ge=0.0, description="Largest Contentful Paint")
    cls: float = Field(default=0.0, ge=0.0, description="Cumulative Layout Shift")
    fid: float = Field(default=0.0, ge=0.0, description="Max potential First Input Delay")
    inp: float = Field(default=0.0, ge=0.0, description="Interaction to Next Paint")
    ttfb: float = Field(default=0.0, ge=0.0, description="Time to First Byte")

    @model_validator(mode="after")
    def _check_extra_metrics(self) -> "Metrics":
        for name, value in (self.model_extra or {}).items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Metric '{name}' must be a number, got {value!r}")
            if value < 0:
                raise ValueError(f"Metric '{name}' must be non-negative, got {value}")
        return self


class Report(BaseModel):
    """One Lighthouse audit result for a single target.

    Stored as <root>/<YYYY-MM-DD>/<HH-MM-SS>/lighthouse-<millis>.json.
    Written once, never mutated.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: str = Field(description="Audited target URL")
    timestamp: datetime = Field(default_factory=_utc_now, description="Creation instant")
    scores: Scores
    metrics: Metrics = Field(default_factory=Metrics)
    raw_audits: Any = Field(default=None, alias="rawAudits", description="Raw LHR, kept verbatim")
