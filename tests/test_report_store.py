"""Tests for the time-bucketed report store."""

import json
import os
import stat
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from lighthouse_audit.models.model_report import Report
from lighthouse_audit.storage.report_store import (
    TimeBucketedStore,
    bucket_keys,
    report_filename,
    save,
)


@pytest.fixture
def store(temp_dir: Path) -> TimeBucketedStore:
    """Create a store rooted in a temporary directory."""
    return TimeBucketedStore(root=temp_dir / "reports")


class TestBucketKeys:
    """Tests for day/time key derivation."""

    def test_zero_padded_keys(self) -> None:
        """Test keys are zero-padded on a 24-hour clock."""
        assert bucket_keys(datetime(2025, 3, 4, 7, 8, 9)) == ("2025-03-04", "07-08-09")

    def test_afternoon_uses_24_hour_clock(self) -> None:
        """Test afternoon hours are not folded to 12-hour."""
        assert bucket_keys(datetime(2025, 1, 31, 14, 5, 9)) == ("2025-01-31", "14-05-09")

    def test_aware_timestamp_uses_local_time(self) -> None:
        """Test aware timestamps are converted to local wall-clock time."""
        aware = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=5)))
        local = aware.astimezone()
        assert bucket_keys(aware) == (local.strftime("%Y-%m-%d"), local.strftime("%H-%M-%S"))

    def test_report_filename(self) -> None:
        """Test filenames embed the creation time in milliseconds."""
        created_at = datetime(2025, 1, 31, 14, 5, 9, 123000)
        millis = int(created_at.astimezone().timestamp() * 1000)
        name = report_filename(created_at)
        assert name == f"lighthouse-{millis}.json"
        assert name.startswith("lighthouse-")
        assert name.endswith(".json")


class TestTimeBucketedStore:
    """Tests for TimeBucketedStore class."""

    def test_save_creates_bucket_path(self, store: TimeBucketedStore, sample_report: Report) -> None:
        """Test the report lands in <root>/<day>/<time>/."""
        path = store.save(sample_report)

        assert path.exists()
        assert path.parent.name == "14-05-09"
        assert path.parent.parent.name == "2025-01-31"
        assert path.parent.parent.parent == store.root

    def test_saved_document_format(self, store: TimeBucketedStore, sample_report: Report) -> None:
        """Test the on-disk document fields."""
        path = store.save(sample_report)
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["url"] == "https://playwright.dev/"
        assert data["timestamp"].startswith("2025-01-31T14:05:09")
        assert data["scores"]["bestPractices"] == 100
        assert data["metrics"]["fcp"] == 1080.0
        assert data["rawAudits"]["lighthouseVersion"] == "12.2.1"

    def test_explicit_created_at_overrides_report_timestamp(
        self, store: TimeBucketedStore, sample_report: Report
    ) -> None:
        """Test the bucket comes from the explicit creation time."""
        path = store.save(sample_report, created_at=datetime(2024, 12, 25, 8, 30, 0))
        assert path.parent.name == "08-30-00"
        assert path.parent.parent.name == "2024-12-25"

    def test_custom_filename(self, store: TimeBucketedStore, sample_report: Report) -> None:
        """Test saving under an explicit document name."""
        path = store.save(sample_report, filename="lighthouse-audit-1.json")
        assert path.name == "lighthouse-audit-1.json"

    def test_save_is_idempotent_on_directories(
        self, store: TimeBucketedStore, make_report
    ) -> None:
        """Test saving twice into the same day reuses existing directories."""
        first = store.save(make_report(datetime(2025, 1, 31, 9, 0, 0)))
        second = store.save(make_report(datetime(2025, 1, 31, 10, 0, 0)))

        assert first.parent.parent == second.parent.parent
        assert first.parent != second.parent

    def test_same_second_last_write_wins(self, store: TimeBucketedStore, make_report) -> None:
        """Test two reports created in the same second collide."""
        created_at = datetime(2025, 1, 31, 9, 0, 0)
        store.save(make_report(created_at, url="https://first.example/"))
        path = store.save(make_report(created_at, url="https://second.example/"))

        assert len(list(path.parent.iterdir())) == 1
        assert json.loads(path.read_text())["url"] == "https://second.example/"

    def test_no_temporary_files_left(self, store: TimeBucketedStore, sample_report: Report) -> None:
        """Test the atomic write leaves only the final document."""
        path = store.save(sample_report)
        assert [p.name for p in path.parent.iterdir()] == [path.name]

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_saved_report_honors_umask(
        self, umask_022, store: TimeBucketedStore, sample_report: Report, temp_dir: Path
    ) -> None:
        """Test a saved report gets the same mode as a file made with write_text."""
        plain = temp_dir / "plain.json"
        plain.write_text("{}")

        path = store.save(sample_report)

        assert stat.S_IMODE(path.stat().st_mode) == stat.S_IMODE(plain.stat().st_mode)

    def test_failed_write_propagates_and_cleans_up(
        self, store: TimeBucketedStore, sample_report: Report
    ) -> None:
        """Test I/O errors propagate and no partial file remains."""
        with patch.object(Path, "replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError, match="disk full"):
                store.save(sample_report)

        bucket = store.bucket_dir(sample_report.timestamp)
        assert list(bucket.iterdir()) == []

    def test_unwritable_root_raises(self, temp_dir: Path, sample_report: Report) -> None:
        """Test a root that cannot be created raises an OSError."""
        blocker = temp_dir / "not-a-dir"
        blocker.write_text("file in the way")

        with pytest.raises(OSError):
            TimeBucketedStore(root=blocker / "reports").save(sample_report)

    def test_module_level_save(self, temp_dir: Path, sample_report: Report) -> None:
        """Test the save() shortcut."""
        path = save(sample_report, temp_dir)
        assert path.is_relative_to(temp_dir)
        assert path.exists()
