"""Data models for Lighthouse CLI runs."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AuditErrorType(Enum):
    """Classification of audit failures for retry decisions."""

    # Transient errors - retried with exponential backoff
    TIMEOUT = "timeout"
    CHROME_LAUNCH_FAILED = "chrome_launch_failed"

    # Permanent errors
    NAVIGATION_FAILED = "navigation_failed"
    INVALID_URL = "invalid_url"
    INVALID_OUTPUT = "invalid_output"
    NOT_INSTALLED = "not_installed"

    UNKNOWN = "unknown"


@dataclass
class AuditResult:
    """Result of a single Lighthouse CLI invocation."""

    success: bool
    url: str
    lhr: dict[str, Any] | None
    error: str | None
    duration_seconds: float
    error_type: AuditErrorType = AuditErrorType.UNKNOWN
    retry_count: int = 0
