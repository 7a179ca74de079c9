"""Discovery and loading of stored Lighthouse reports.

Walks the two-level bucket tree written by TimeBucketedStore and loads every
document that looks like a report. Anything else in the tree is ignored so
that people can drop notes or exports next to the reports.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from pydantic import ValidationError

from lighthouse_audit.consts import DEFAULT_REPORTS_DIR, REPORT_FILE_PREFIX, REPORT_FILE_SUFFIX
from lighthouse_audit.models.model_report import Report

logger = logging.getLogger(__name__)


def is_report_document(path: Path) -> bool:
    """Check whether a path follows the report naming convention."""
    return (
        path.is_file()
        and path.name.startswith(REPORT_FILE_PREFIX)
        and path.name.endswith(REPORT_FILE_SUFFIX)
    )


class ReportScanner:
    """Loads every report under a bucket root.

    Malformed documents are logged and skipped so one corrupt file never
    hides the rest of the history.
    """

    def __init__(
        self,
        root: Path | str = DEFAULT_REPORTS_DIR,
        predicate: Callable[[Path], bool] = is_report_document,
    ):
        """Initialize the scanner.

        Args:
            root: Root directory of the bucket tree.
            predicate: Decides which files are report documents.
        """
        self.root = Path(root)
        self.predicate = predicate

    def iter_documents(self) -> Iterator[Path]:
        """Yield report document paths. Order is unspecified."""
        if not self.root.is_dir():
            return

        for day_dir in self.root.iterdir():
            if not day_dir.is_dir():
                continue
            for time_dir in day_dir.iterdir():
                if not time_dir.is_dir():
                    continue
                for path in time_dir.iterdir():
                    if self.predicate(path):
                        yield path

    def load(self, path: Path) -> Report | None:
        """Load a single report document.

        Returns:
            The report, or None if the document is malformed.
        """
        try:
            return Report.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping malformed report {path}: {e}")
            return None

    def scan_all(self) -> list[Report]:
        """Load all reports under the root.

        Returns:
            Reports in unspecified order. Empty if the root does not exist.
        """
        if not self.root.exists():
            logger.debug(f"Report root does not exist yet: {self.root}")
            return []

        reports = []
        for path in self.iter_documents():
            report = self.load(path)
            if report is not None:
                reports.append(report)

        logger.debug(f"Loaded {len(reports)} reports from {self.root}")
        return reports


def scan_all(root: Path | str) -> list[Report]:
    """Load all reports under root. Shortcut for ReportScanner(root).scan_all()."""
    return ReportScanner(root).scan_all()
