"""Reachability check for audit targets."""

import logging

import httpx

from lighthouse_audit.consts import PREFLIGHT_TIMEOUT

logger = logging.getLogger(__name__)


def check_target_reachable(url: str, timeout: float = PREFLIGHT_TIMEOUT) -> bool:
    """Check that a target URL answers before spending a full audit on it.

    Args:
        url: Target URL
        timeout: Request timeout in seconds

    Returns:
        True if the final response (after redirects) has a status below 400
    """
    try:
        with httpx.Client(follow_redirects=True, timeout=timeout) as client:
            response = client.get(url)
    except httpx.HTTPError as e:
        logger.warning(f"Target unreachable: {url} ({e})")
        return False

    if response.status_code >= 400:
        logger.warning(f"Target returned HTTP {response.status_code}: {url}")
        return False

    logger.debug(f"Target reachable: {url} (HTTP {response.status_code})")
    return True
