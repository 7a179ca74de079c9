from pathlib import Path

PROJECT_ROOT = Path.cwd().resolve()

# Report storage layout: <root>/<YYYY-MM-DD>/<HH-MM-SS>/lighthouse-<millis>.json
DEFAULT_REPORTS_DIR = PROJECT_ROOT / "test-results" / "lighthouse-reports"
DEFAULT_DASHBOARD_DIR = PROJECT_ROOT / "lighthouse-reports"
DEFAULT_PRESERVE_DIR = PROJECT_ROOT / "playwright-report" / "lighthouse-reports"

DAY_KEY_FORMAT = "%Y-%m-%d"
TIME_KEY_FORMAT = "%H-%M-%S"
REPORT_FILE_PREFIX = "lighthouse-"
REPORT_FILE_SUFFIX = ".json"

# Dashboard naming
DASHBOARD_FILE_PREFIX = "lighthouse-report-"
DASHBOARD_LATEST_NAME = "lighthouse-report-latest.html"
DASHBOARD_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

# Environment overrides (explicit param > env var > default)
ENV_REPORTS_DIR = "LIGHTHOUSE_REPORTS_DIR"
ENV_DASHBOARD_DIR = "LIGHTHOUSE_DASHBOARD_DIR"
ENV_PRESERVE_DIR = "LIGHTHOUSE_PRESERVE_DIR"
ENV_LIGHTHOUSE_PATH = "LIGHTHOUSE_PATH"
ENV_TARGET_URL = "STAGING_URL"

# Score tiers
SCORE_GOOD_MIN = 90  # >= 90 is "good"
SCORE_AVERAGE_MIN = 50  # 50-89 is "average", below is "poor"

# Default thresholds
DEFAULT_SCORE_THRESHOLD = 50
DEFAULT_METRIC_THRESHOLDS = {
    "fcp": 1800.0,  # 1.8 seconds
    "lcp": 2500.0,  # 2.5 seconds
    "cls": 0.1,
    "fid": 100.0,  # 100ms
    "inp": 200.0,  # 200ms
    "ttfb": 600.0,  # 600ms
}

# Lighthouse CLI
LIGHTHOUSE_DEFAULT_PATH = "lighthouse"
LIGHTHOUSE_DEFAULT_TIMEOUT = 120  # seconds per audit
LIGHTHOUSE_CHROME_FLAGS = ["--headless", "--no-sandbox", "--disable-gpu"]
LIGHTHOUSE_MAX_RETRIES = 2  # Only for transient errors (timeout, Chrome launch)
LIGHTHOUSE_RETRY_BASE_DELAY = 2.0  # Base delay in seconds for exponential backoff

# Preflight
PREFLIGHT_TIMEOUT = 15.0  # seconds

# Lighthouse audit ids for the extracted metrics
METRIC_AUDIT_IDS = {
    "fcp": ["first-contentful-paint"],
    "lcp": ["largest-contentful-paint"],
    "cls": ["cumulative-layout-shift"],
    "fid": ["max-potential-fid"],
    "inp": ["interaction-to-next-paint"],
    "ttfb": ["server-response-time", "time-to-first-byte"],
}
