"""Dashboard generation and preservation.

generate_dashboard() is the "aggregate and render" action: scan the report
tree, summarize, render and write a single HTML file, replacing any previous
rendering at the same path. preserve_dashboards() copies rendered dashboards
into the test runner's report folder after a run.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from lighthouse_audit.consts import (
    DASHBOARD_FILE_PREFIX,
    DASHBOARD_LATEST_NAME,
    DASHBOARD_TIMESTAMP_FORMAT,
)
from lighthouse_audit.models.common import _as_local
from lighthouse_audit.reporting.aggregator import summarize
from lighthouse_audit.reporting.renderer import render
from lighthouse_audit.storage.report_scanner import ReportScanner
from lighthouse_audit.storage.report_store import write_atomic

logger = logging.getLogger(__name__)


def dashboard_filename(rendered_at: datetime, timestamped: bool = False) -> str:
    """Return the dashboard file name.

    Args:
        rendered_at: Render time, used for timestamped names.
        timestamped: If True, lighthouse-report-YYYY-MM-DD_HH-MM-SS.html,
            otherwise the fixed lighthouse-report-latest.html.
    """
    if not timestamped:
        return DASHBOARD_LATEST_NAME
    stamp = _as_local(rendered_at).strftime(DASHBOARD_TIMESTAMP_FORMAT)
    return f"{DASHBOARD_FILE_PREFIX}{stamp}.html"


def generate_dashboard(
    reports_dir: Path | str,
    output_path: Path | str,
    rendered_at: datetime,
) -> Path:
    """Scan, aggregate and render the report history into output_path.

    Zero stored reports is a normal state and still produces a dashboard.

    Args:
        reports_dir: Root of the time-bucketed report tree.
        output_path: Destination HTML file (overwritten).
        rendered_at: Render time shown in the document.

    Returns:
        Path to the written dashboard.
    """
    reports = ReportScanner(reports_dir).scan_all()
    summary = summarize(reports)
    html = render(summary, rendered_at)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_atomic(output_path, html)
    logger.info(f"Saved Lighthouse dashboard: {output_path} ({summary.count} reports)")
    return output_path


def preserve_dashboards(source_dir: Path | str, dest_dir: Path | str) -> list[Path]:
    """Copy rendered HTML dashboards into the test runner's report folder.

    Args:
        source_dir: Directory holding rendered dashboards.
        dest_dir: Destination directory, created if missing.

    Returns:
        Paths of the copied files. Empty if there was nothing to copy.
    """
    source_dir = Path(source_dir)
    dest_dir = Path(dest_dir)

    if not source_dir.is_dir():
        logger.info(f"No Lighthouse dashboards to preserve: {source_dir} does not exist")
        return []

    html_files = sorted(p for p in source_dir.glob("*.html") if p.is_file())
    if not html_files:
        logger.info(f"No Lighthouse HTML files to preserve in {source_dir}")
        return []

    dest_dir.mkdir(parents=True, exist_ok=True)
    copied = []
    for source in html_files:
        dest = dest_dir / source.name
        shutil.copy2(source, dest)
        logger.info(f"Preserved: {source.name}")
        copied.append(dest)

    return copied
