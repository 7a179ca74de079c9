"""Lighthouse CLI wrapper for page performance audits."""

import asyncio
import json
import logging
import shutil
import time
from typing import Any

from lighthouse_audit.consts import (
    LIGHTHOUSE_CHROME_FLAGS,
    LIGHTHOUSE_DEFAULT_PATH,
    LIGHTHOUSE_DEFAULT_TIMEOUT,
    LIGHTHOUSE_MAX_RETRIES,
    LIGHTHOUSE_RETRY_BASE_DELAY,
)
from lighthouse_audit.models.model_report import Report
from lighthouse_audit.models.model_runner import AuditErrorType, AuditResult
from lighthouse_audit.runner.extract import build_report

logger = logging.getLogger(__name__)

TRANSIENT_ERRORS = [AuditErrorType.TIMEOUT, AuditErrorType.CHROME_LAUNCH_FAILED]


class LighthouseError(RuntimeError):
    """Raised when an audit cannot produce a report."""

    def __init__(self, result: AuditResult):
        super().__init__(f"Lighthouse audit failed for {result.url}: {result.error}")
        self.result = result


class LighthouseRunner:
    """Wraps the Lighthouse CLI for auditing a URL in headless Chrome."""

    def __init__(
        self,
        lighthouse_path: str = LIGHTHOUSE_DEFAULT_PATH,
        timeout: int = LIGHTHOUSE_DEFAULT_TIMEOUT,
        chrome_flags: list[str] | None = None,
        max_retries: int = LIGHTHOUSE_MAX_RETRIES,
        extra_args: list[str] | None = None,
    ):
        """Initialize LighthouseRunner.

        Args:
            lighthouse_path: Path to lighthouse executable (default: "lighthouse")
            timeout: Audit timeout in seconds
            chrome_flags: Flags passed to Chrome (default: headless, no sandbox, no GPU)
            max_retries: Retries for transient failures
            extra_args: Additional CLI arguments (e.g. ["--preset=desktop"])
        """
        self.lighthouse_path = lighthouse_path
        self.timeout = timeout
        self.chrome_flags = chrome_flags if chrome_flags is not None else list(LIGHTHOUSE_CHROME_FLAGS)
        self.max_retries = max_retries
        self.extra_args = extra_args or []

    def is_lighthouse_installed(self) -> bool:
        """Check if the Lighthouse CLI is installed and accessible."""
        return shutil.which(self.lighthouse_path) is not None

    def build_command(self, url: str) -> list[str]:
        """Build the CLI invocation for a URL."""
        return [
            self.lighthouse_path,
            url,
            "--output=json",
            "--output-path=stdout",
            f"--chrome-flags={' '.join(self.chrome_flags)}",
            "--quiet",
            *self.extra_args,
        ]

    def _classify_error(self, error_msg: str) -> AuditErrorType:
        """Classify error type based on Lighthouse stderr output.

        Args:
            error_msg: Error message from stderr

        Returns:
            AuditErrorType classification
        """
        error_lower = error_msg.lower()

        if "timeout" in error_lower or "timed out" in error_lower:
            return AuditErrorType.TIMEOUT
        if "chrome" in error_lower and ("launch" in error_lower or "connect" in error_lower):
            return AuditErrorType.CHROME_LAUNCH_FAILED
        if "invalid url" in error_lower or "invalid_url" in error_lower:
            return AuditErrorType.INVALID_URL
        if (
            "errored_document_request" in error_lower
            or "unable to reliably load" in error_lower
            or "failed_document_request" in error_lower
            or "dns_failure" in error_lower
        ):
            return AuditErrorType.NAVIGATION_FAILED

        return AuditErrorType.UNKNOWN

    def _parse_output(self, output: str) -> dict[str, Any] | None:
        """Parse Lighthouse JSON output. None if it is not a usable LHR."""
        try:
            lhr = json.loads(output)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse Lighthouse output: {e}")
            return None

        if not isinstance(lhr, dict) or "categories" not in lhr:
            logger.warning("Lighthouse output has no categories")
            return None
        return lhr

    async def _run_once(self, url: str) -> AuditResult:
        """Run a single Lighthouse invocation."""
        start_time = time.time()
        cmd = self.build_command(url)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return AuditResult(
                success=False,
                url=url,
                lhr=None,
                error=f"Lighthouse executable not found: {self.lighthouse_path}",
                duration_seconds=0,
                error_type=AuditErrorType.NOT_INSTALLED,
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except TimeoutError:
            process.kill()
            await process.wait()
            return AuditResult(
                success=False,
                url=url,
                lhr=None,
                error=f"Audit timeout ({self.timeout}s)",
                duration_seconds=self.timeout,
                error_type=AuditErrorType.TIMEOUT,
            )

        duration = time.time() - start_time
        if process.returncode != 0:
            error_msg = stderr.decode("utf-8", errors="replace")
            error_type = self._classify_error(error_msg)
            logger.debug(f"Lighthouse failed ({error_type.value}): {error_msg}")
            return AuditResult(
                success=False,
                url=url,
                lhr=None,
                error=f"Lighthouse error (code {process.returncode}): {error_msg[:1000]}",
                duration_seconds=duration,
                error_type=error_type,
            )

        lhr = self._parse_output(stdout.decode("utf-8", errors="replace"))
        if lhr is None:
            return AuditResult(
                success=False,
                url=url,
                lhr=None,
                error="Lighthouse produced no usable JSON result",
                duration_seconds=duration,
                error_type=AuditErrorType.INVALID_OUTPUT,
            )

        runtime_error = lhr.get("runtimeError")
        if runtime_error:
            error_code = str(runtime_error.get("code", ""))
            return AuditResult(
                success=False,
                url=url,
                lhr=lhr,
                error=f"{error_code}: {runtime_error.get('message', '')}",
                duration_seconds=duration,
                error_type=self._classify_error(error_code),
            )

        return AuditResult(success=True, url=url, lhr=lhr, error=None, duration_seconds=duration)

    async def run_audit(self, url: str) -> AuditResult:
        """Audit a URL, retrying transient failures with exponential backoff.

        Args:
            url: Target URL

        Returns:
            AuditResult with the parsed LHR on success
        """
        logger.info(f"Running Lighthouse audit for: {url}")
        retry_count = 0

        while True:
            result = await self._run_once(url)
            result.retry_count = retry_count

            if result.success:
                return result

            if result.error_type not in TRANSIENT_ERRORS:
                logger.debug(f"Non-retriable error type: {result.error_type.value}, giving up")
                return result

            if retry_count >= self.max_retries:
                logger.warning(
                    f"Max retries ({self.max_retries}) reached for {url}, error: {result.error_type.value}"
                )
                return result

            delay = LIGHTHOUSE_RETRY_BASE_DELAY * (2**retry_count)
            logger.info(
                f"Retry {retry_count + 1}/{self.max_retries} for {url} "
                f"after {delay:.1f}s (error: {result.error_type.value})"
            )
            await asyncio.sleep(delay)
            retry_count += 1

    async def generate_report(self, url: str) -> Report:
        """Audit a URL and build a Report from the result.

        Raises:
            LighthouseError: If the audit fails.
        """
        result = await self.run_audit(url)
        if not result.success or result.lhr is None:
            raise LighthouseError(result)
        return build_report(url, result.lhr)
