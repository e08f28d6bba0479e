"""
Health runner - Orchestrates one monitoring pass over all configured sites.

load -> check all sites concurrently -> evaluate results in site order,
notifying for each down site -> exit code.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from functools import partial
from typing import List, Optional, Sequence

from uptime_monitor.health import checks, config, notify
from uptime_monitor.health.models import (
    CheckResult,
    DeliveryResult,
    MonitorConfig,
    RunSummary,
    Site,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def utc_timestamp() -> str:
    """
    Current time as an ISO-8601 UTC string, e.g. 2025-06-05T08:00:00.000Z.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def check_all(
    sites: Sequence[Site],
    timeout: float = checks.DEFAULT_TIMEOUT,
    max_workers: Optional[int] = None,
) -> List[CheckResult]:
    """
    Check every site concurrently and wait for all of them.

    Args:
        sites: Sites to probe
        timeout: Per-request timeout in seconds
        max_workers: Worker thread cap (default: one worker per site)

    Returns:
        One CheckResult per site, in the order of ``sites``
    """
    if not sites:
        return []

    workers = max_workers or len(sites)
    check = partial(checks.check_site, timeout=timeout)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(check, sites))


def run_once(
    monitor_config: MonitorConfig,
    dry_run: bool = False,
    timeout: float = checks.DEFAULT_TIMEOUT,
) -> RunSummary:
    """
    Run one monitoring pass.

    All sites are checked concurrently. Results are then evaluated in
    configured order and each down site is notified before the next one is
    considered, so webhook calls never overlap.

    Args:
        monitor_config: Loaded configuration
        dry_run: If True, log webhook payloads instead of sending them
        timeout: Per-request timeout in seconds

    Returns:
        RunSummary with results and webhook deliveries
    """
    results = check_all(monitor_config.sites, timeout=timeout)

    # One timestamp for every notification of this run
    now = utc_timestamp()

    deliveries: List[DeliveryResult] = []
    for result in results:
        site = result.site
        if result.up:
            logger.info(
                "[%s] %s (%s) is UP -> code=%s",
                now,
                site.label,
                site.url,
                result.status_code,
            )
            continue

        logger.warning(
            "[%s] %s (%s) is DOWN -> code=%s",
            now,
            site.label,
            site.url,
            result.status_code,
        )
        if result.error:
            logger.debug("%s check error: %s", site.label, result.error)

        deliveries.append(
            notify.notify_down(
                monitor_config.webhook,
                result,
                now,
                dry_run=dry_run,
                timeout=timeout,
            )
        )

    summary = RunSummary(
        timestamp=now, results=tuple(results), deliveries=tuple(deliveries)
    )
    logger.info(
        "Run complete: %d up, %d down, %d webhooks delivered",
        summary.up_count,
        summary.down_count,
        sum(1 for delivery in deliveries if delivery.delivered),
    )
    return summary


def run_monitor(config_path: Optional[str] = None, dry_run: bool = False) -> int:
    """
    Load the configuration, run one pass and return the process exit code.

    Args:
        config_path: Path to config file (default: ./config.json)
        dry_run: If True, don't send webhook notifications

    Returns:
        Exit code: 0 on completion (however many sites are down),
        1 on config failure or unexpected error
    """
    try:
        monitor_config = config.load_config(config_path)
    except (OSError, ValueError) as e:
        logger.error("Failed to load config: %s", e)
        return EXIT_FAILURE

    try:
        run_once(monitor_config, dry_run=dry_run)
    except Exception as e:  # pylint: disable=broad-except
        logger.error("Fatal error during monitor run: %s", e, exc_info=True)
        return EXIT_FAILURE

    return EXIT_OK
