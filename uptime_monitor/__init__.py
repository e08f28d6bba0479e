"""
Uptime monitor - Single-pass HTTP(S) uptime checker with webhook alerts.
"""

__version__ = "0.1.0"
