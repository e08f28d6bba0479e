#!/usr/bin/env python3
"""
Uptime Monitor CLI - Probe every configured site once and alert on failures.

Usage:
    python -m uptime_monitor.interface.monitor [--config config.json] [--dry-run]

Exit codes:
    0: Run completed (down sites are reported via webhook, not exit code)
    1: Config could not be loaded, or the run failed unexpectedly
"""

import argparse
import logging
import sys
from typing import List, Optional

from uptime_monitor.health import run_monitor


def setup_logging(verbose: bool = False) -> None:
    """
    Setup logging configuration.

    Args:
        verbose: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 (run completed), 1 (config or fatal error)
    """
    parser = argparse.ArgumentParser(
        description="Single-pass uptime checker with webhook alerts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exit codes:
  0  - Run completed
  1  - Config load failure or fatal error

Examples:
  uptime-monitor
  uptime-monitor --config /etc/uptime/config.json
  uptime-monitor --dry-run -v
        """,
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to config file (default: config.json in the working directory)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't send webhook notifications, just log the payloads",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose)

    logger = logging.getLogger(__name__)
    if args.dry_run:
        logger.info("Dry-run mode: No webhooks will be sent")

    try:
        exit_code = run_monitor(config_path=args.config, dry_run=args.dry_run)
        logger.debug("Monitor run completed with exit code: %d", exit_code)
        return exit_code
    except KeyboardInterrupt:
        logger.error("Monitor run interrupted by user")
        return 130
    except Exception as e:  # pylint: disable=broad-except
        logger.error("Monitor run failed: %s", e, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
