"""Time-bucketed file storage for Lighthouse reports.

Each report is written once to:
    <root>/<YYYY-MM-DD>/<HH-MM-SS>/lighthouse-<millis>.json

Bucket keys come from the caller-supplied creation timestamp, rendered in the
local time zone on a 24-hour clock.
"""

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from lighthouse_audit.consts import (
    DAY_KEY_FORMAT,
    DEFAULT_REPORTS_DIR,
    REPORT_FILE_PREFIX,
    REPORT_FILE_SUFFIX,
    TIME_KEY_FORMAT,
)
from lighthouse_audit.models.common import _as_local
from lighthouse_audit.models.model_report import Report
from lighthouse_audit.storage.base import ReportStore

logger = logging.getLogger(__name__)


def bucket_keys(created_at: datetime) -> tuple[str, str]:
    """Return (day_key, time_key) for a creation timestamp.

    Args:
        created_at: Creation instant. Naive values are treated as local time.

    Returns:
        Tuple like ("2025-01-31", "14-05-09").
    """
    local = _as_local(created_at)
    return local.strftime(DAY_KEY_FORMAT), local.strftime(TIME_KEY_FORMAT)


def report_filename(created_at: datetime) -> str:
    """Return the document name for a report, e.g. lighthouse-1738332309123.json."""
    millis = int(_as_local(created_at).timestamp() * 1000)
    return f"{REPORT_FILE_PREFIX}{millis}{REPORT_FILE_SUFFIX}"


def _default_file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_atomic(path: Path, content: str) -> None:
    """Write text to path via a temporary sibling and an atomic rename.

    Readers never observe a partially written file. The final file gets the
    same permissions as one created with open(). On failure the temporary
    file is removed and the error propagates.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        # mkstemp creates 0600 regardless of umask
        tmp_path.chmod(_default_file_mode())
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


class TimeBucketedStore(ReportStore):
    """File-based report store partitioned by day and time.

    Directory structure:
        root/
        ├── 2025-01-31/
        │   ├── 09-15-02/lighthouse-1738311302000.json
        │   └── 14-05-09/lighthouse-1738332309123.json
        └── 2025-02-01/
            └── 08-00-00/lighthouse-1738393200000.json

    No locking is done. Audit runs are expected to be serialized by the
    harness; two saves in the same second with the same name overwrite.
    """

    def __init__(self, root: Path | str = DEFAULT_REPORTS_DIR):
        """Initialize the store.

        Args:
            root: Root directory of the bucket tree.
        """
        self.root = Path(root)

    def bucket_dir(self, created_at: datetime) -> Path:
        """Get the time-bucket directory for a creation timestamp."""
        day_key, time_key = bucket_keys(created_at)
        return self.root / day_key / time_key

    def save(
        self,
        report: Report,
        created_at: datetime | None = None,
        filename: str | None = None,
    ) -> Path:
        """Save a report into its time bucket.

        Args:
            report: Report to persist.
            created_at: Timestamp deciding the bucket and default file name.
                Defaults to report.timestamp.
            filename: Optional document name. Must follow the report naming
                convention to be picked up by the scanner.

        Returns:
            Path to the written document.

        Raises:
            OSError: If the root cannot be created or written.
        """
        created_at = created_at or report.timestamp
        bucket = self.bucket_dir(created_at)
        bucket.mkdir(parents=True, exist_ok=True)

        path = bucket / (filename or report_filename(created_at))
        write_atomic(path, report.model_dump_json(by_alias=True, indent=2))
        logger.info(f"Saved Lighthouse report: {path} ({report.url})")
        return path


def save(report: Report, root: Path | str, created_at: datetime | None = None) -> Path:
    """Save a report under root. Shortcut for TimeBucketedStore(root).save()."""
    return TimeBucketedStore(root).save(report, created_at=created_at)
