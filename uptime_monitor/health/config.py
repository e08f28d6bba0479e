"""
Health configuration - Loads and validates the monitor configuration.

This module loads the JSON config file naming the webhook URL and the sites
to probe.
"""

import json
import logging
from pathlib import Path
from typing import Any, FrozenSet, List, Optional

from uptime_monitor.health.models import MonitorConfig, Site

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "config.json"


# Configuration schema structure
# {
#   "webhook": str,
#   "sites": [
#     {"name": str, "url": str, "expectedStatus": List[int]},
#     ...
#   ]
# }


def load_config(config_path: Optional[str] = None) -> MonitorConfig:
    """
    Load monitor configuration from a JSON file.

    Only the top-level fields are validated here. Site entries are parsed
    leniently: a malformed entry is recorded on its Site and fails that
    site's check later, it never fails the load.

    Args:
        config_path: Path to config file. If None, uses config.json in the
                     current working directory

    Returns:
        Immutable MonitorConfig

    Raises:
        FileNotFoundError: If the config file does not exist
        OSError: If the config file cannot be read
        ValueError: If the config is malformed JSON or misses required fields
    """
    if config_path is None:
        config_file = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object with 'webhook' and 'sites'")

    webhook = data.get("webhook")
    if not webhook or not isinstance(webhook, str):
        raise ValueError("Config must contain a non-empty 'webhook' string")

    raw_sites = data.get("sites")
    if not isinstance(raw_sites, list):
        raise ValueError("Config must contain a 'sites' array")

    sites = tuple(site_from_dict(entry) for entry in raw_sites)
    for site in sites:
        if site.config_error:
            logger.warning(
                "Invalid config for site %s: %s", site.label, site.config_error
            )

    logger.info(
        "Loaded monitor config: %d sites configured from %s",
        len(sites),
        config_file,
    )

    return MonitorConfig(webhook=webhook, sites=sites, source=str(config_file))


def site_from_dict(entry: Any) -> Site:
    """
    Build a Site from one raw config entry.

    Args:
        entry: Raw entry from the 'sites' array

    Returns:
        Site, with config_error set to the first problem found if the
        entry is malformed
    """
    if not isinstance(entry, dict):
        return Site(name=None, url=None, config_error="Site entry must be an object")

    name = entry.get("name")
    url = entry.get("url")
    raw_expected = entry.get("expectedStatus")

    problems: List[str] = []
    if name is not None and not isinstance(name, str):
        name = str(name)
    if url is None:
        problems.append("Missing required field 'url'")
    elif not isinstance(url, str):
        problems.append("Field 'url' must be a string")
        url = None

    expected: FrozenSet[int] = frozenset()
    if raw_expected is None:
        problems.append("Missing required field 'expectedStatus'")
    else:
        expected = _status_codes(raw_expected)
        if not isinstance(raw_expected, list) or any(
            _as_status_code(code) is None for code in raw_expected
        ):
            # Still probed; unusable members just never match
            logger.warning(
                "Site %s: 'expectedStatus' has non-numeric entries: %r",
                name or url,
                raw_expected,
            )

    return Site(
        name=name,
        url=url,
        expected_status=expected,
        config_error=problems[0] if problems else None,
    )


def _status_codes(raw: Any) -> FrozenSet[int]:
    """
    Numeric members of a raw expectedStatus value.

    Args:
        raw: Raw expectedStatus value from the config entry

    Returns:
        Set of integer status codes; empty if raw is not a list
    """
    if not isinstance(raw, list):
        return frozenset()
    codes = (_as_status_code(value) for value in raw)
    return frozenset(code for code in codes if code is not None)


def _as_status_code(value: Any) -> Optional[int]:
    # bool is an int subclass; true/false are not status codes
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
