"""Storage for Lighthouse reports.

This module provides:
- ReportStore: Abstract base class for report persistence
- TimeBucketedStore: Day/time partitioned file store
- ReportScanner: Loads every report from a bucket tree
"""

from lighthouse_audit.storage.base import ReportStore
from lighthouse_audit.storage.report_scanner import ReportScanner, is_report_document, scan_all
from lighthouse_audit.storage.report_store import (
    TimeBucketedStore,
    bucket_keys,
    report_filename,
    save,
    write_atomic,
)

__all__ = [
    "ReportScanner",
    "ReportStore",
    "TimeBucketedStore",
    "bucket_keys",
    "is_report_document",
    "report_filename",
    "save",
    "scan_all",
    "write_atomic",
]
