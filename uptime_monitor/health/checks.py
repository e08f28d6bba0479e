"""
Health checks - Probes a single site and classifies it as up or down.

This module performs one GET per site and converts the outcome, including
network failures, into a CheckResult value.
"""

import logging

import requests  # type: ignore

from uptime_monitor.health.models import CheckResult, Site

logger = logging.getLogger(__name__)

# Seconds, applied to every outbound request
DEFAULT_TIMEOUT = 10


def check_site(site: Site, timeout: float = DEFAULT_TIMEOUT) -> CheckResult:
    """
    Probe a site once and compare its status code with the expected set.

    No retries are made. Any failure to obtain a response (DNS, connection
    refused, timeout, TLS, invalid URL) yields a down result without a
    status code.

    Args:
        site: Site to probe
        timeout: Request timeout in seconds

    Returns:
        CheckResult for the site
    """
    if site.config_error:
        return CheckResult.failure(site, site.config_error)

    try:
        response = requests.get(site.url, timeout=timeout)
    except Exception as e:  # pylint: disable=broad-except
        logger.debug("Request to %s failed: %s", site.url, e)
        return CheckResult.failure(site, str(e))

    return CheckResult.from_status(site, response.status_code)


def is_success_status(status_code: int) -> bool:
    """
    Check if HTTP status code is successful.

    Args:
        status_code: HTTP status code

    Returns:
        True if status code is 200-299
    """
    return 200 <= status_code < 300
