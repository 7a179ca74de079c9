"""Lighthouse execution and result extraction."""

from lighthouse_audit.runner.extract import build_report, extract_metrics, extract_scores
from lighthouse_audit.runner.lighthouse_runner import LighthouseError, LighthouseRunner
from lighthouse_audit.runner.preflight import check_target_reachable

__all__ = [
    "LighthouseError",
    "LighthouseRunner",
    "build_report",
    "check_target_reachable",
    "extract_metrics",
    "extract_scores",
]
