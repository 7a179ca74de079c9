"""Abstract base class for report storage backends.

A report store persists each audit result exactly once. Reading the history
back is the scanner's job, so the write side stays minimal.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from lighthouse_audit.models.model_report import Report


class ReportStore(ABC):
    """Abstract base class for report store implementations."""

    @abstractmethod
    def save(
        self,
        report: Report,
        created_at: datetime | None = None,
        filename: str | None = None,
    ) -> Path:
        """Persist a report.

        Args:
            report: Report to store.
            created_at: Creation timestamp deciding where the report lands.
                Defaults to the report's own timestamp.
            filename: Optional document name overriding the default naming.

        Returns:
            Path where the report was stored.
        """
        ...
