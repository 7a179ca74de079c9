"""Pipeline orchestration for the audit and dashboard workflows.

Two independent actions, callable in any order:
1. Audit: run Lighthouse against a URL -> build Report -> save to time bucket
2. Dashboard: scan all buckets -> summarize -> render -> write HTML
"""

import asyncio
import logging
import os
from datetime import datetime
from pathlib import Path

from lighthouse_audit.consts import (
    DEFAULT_DASHBOARD_DIR,
    DEFAULT_PRESERVE_DIR,
    DEFAULT_REPORTS_DIR,
    ENV_DASHBOARD_DIR,
    ENV_LIGHTHOUSE_PATH,
    ENV_PRESERVE_DIR,
    ENV_REPORTS_DIR,
    LIGHTHOUSE_DEFAULT_PATH,
)
from lighthouse_audit.models.model_report import Report
from lighthouse_audit.reporting.aggregator import sort_most_recent_first
from lighthouse_audit.reporting.dashboard import (
    dashboard_filename,
    generate_dashboard,
    preserve_dashboards,
)
from lighthouse_audit.runner.lighthouse_runner import LighthouseRunner
from lighthouse_audit.storage.report_scanner import ReportScanner
from lighthouse_audit.storage.report_store import TimeBucketedStore

logger = logging.getLogger(__name__)


def _resolve_dir(explicit: Path | str | None, env_name: str, default: Path) -> Path:
    """Resolve a directory: explicit param > env var > default."""
    if explicit is not None:
        return Path(explicit)
    env_value = os.getenv(env_name, "").strip()
    if env_value:
        return Path(env_value)
    return default


def resolve_reports_dir(reports_dir: Path | str | None = None) -> Path:
    return _resolve_dir(reports_dir, ENV_REPORTS_DIR, DEFAULT_REPORTS_DIR)


def resolve_dashboard_dir(dashboard_dir: Path | str | None = None) -> Path:
    return _resolve_dir(dashboard_dir, ENV_DASHBOARD_DIR, DEFAULT_DASHBOARD_DIR)


def resolve_preserve_dir(preserve_dir: Path | str | None = None) -> Path:
    return _resolve_dir(preserve_dir, ENV_PRESERVE_DIR, DEFAULT_PRESERVE_DIR)


def default_runner() -> LighthouseRunner:
    """Create a runner, honoring the LIGHTHOUSE_PATH env var."""
    lighthouse_path = os.getenv(ENV_LIGHTHOUSE_PATH, "").strip() or LIGHTHOUSE_DEFAULT_PATH
    return LighthouseRunner(lighthouse_path=lighthouse_path)


def run_audit_pipeline(
    url: str,
    reports_dir: Path | str | None = None,
    runner: LighthouseRunner | None = None,
    created_at: datetime | None = None,
) -> tuple[Report, Path]:
    """Run a Lighthouse audit and save the report into its time bucket.

    Args:
        url: Target URL.
        reports_dir: Report root. Uses env or default if None.
        runner: Lighthouse runner. Uses default_runner() if None.
        created_at: Bucket timestamp. Defaults to the report's timestamp.

    Returns:
        Tuple of (report, saved_path).

    Raises:
        LighthouseError: If the audit fails.
        OSError: If the report cannot be written.
    """
    runner = runner or default_runner()
    store = TimeBucketedStore(resolve_reports_dir(reports_dir))

    report = asyncio.run(runner.generate_report(url))
    path = store.save(report, created_at=created_at)
    return report, path


def run_dashboard_pipeline(
    reports_dir: Path | str | None = None,
    dashboard_dir: Path | str | None = None,
    rendered_at: datetime | None = None,
    timestamped: bool = False,
) -> Path:
    """Aggregate all stored reports and render the dashboard.

    Args:
        reports_dir: Report root. Uses env or default if None.
        dashboard_dir: Output directory. Uses env or default if None.
        rendered_at: Render time. Defaults to now (local time).
        timestamped: Write a timestamped file instead of the fixed latest one.

    Returns:
        Path to the written dashboard.
    """
    rendered_at = rendered_at or datetime.now().astimezone()
    output_path = resolve_dashboard_dir(dashboard_dir) / dashboard_filename(rendered_at, timestamped)
    return generate_dashboard(resolve_reports_dir(reports_dir), output_path, rendered_at)


def run_preserve_pipeline(
    dashboard_dir: Path | str | None = None,
    preserve_dir: Path | str | None = None,
) -> list[Path]:
    """Copy rendered dashboards into the test runner's report folder."""
    return preserve_dashboards(resolve_dashboard_dir(dashboard_dir), resolve_preserve_dir(preserve_dir))


def load_history(reports_dir: Path | str | None = None) -> list[Report]:
    """Load every stored report, most recent first."""
    reports = ReportScanner(resolve_reports_dir(reports_dir)).scan_all()
    return sort_most_recent_first(reports)
