"""
Health module - Single-pass uptime checks for configured sites.

This module probes each configured site once, compares the observed status
code against the expected set, and posts a webhook notification for every
site that is down.
"""

from uptime_monitor.health.config import load_config
from uptime_monitor.health.runner import run_monitor, run_once

__all__ = ["load_config", "run_monitor", "run_once"]
