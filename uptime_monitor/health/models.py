"""
Health models - Value types shared by the loader, checker, notifier and runner.

All types are frozen dataclasses: a config is loaded once and passed
explicitly, and results are built per run and never mutated.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional, Tuple

STATUS_UP = "UP"
STATUS_DOWN = "DOWN"


@dataclass(frozen=True)
class Site:
    """
    A site descriptor: a URL to probe and the status codes considered healthy.

    ``config_error`` is set when the raw config entry was malformed. Such a
    site is never probed; its check fails with that message instead.
    """

    name: Optional[str]
    url: Optional[str]
    expected_status: FrozenSet[int] = field(default_factory=frozenset)
    config_error: Optional[str] = None

    @property
    def label(self) -> str:
        """Human-readable name for log lines."""
        if self.name:
            return self.name
        return self.url or "<unnamed site>"


@dataclass(frozen=True)
class MonitorConfig:
    """Immutable monitor configuration."""

    webhook: str
    sites: Tuple[Site, ...] = ()
    source: Optional[str] = None


@dataclass(frozen=True)
class CheckResult:
    """
    Outcome of probing one site.

    ``status_code`` is None exactly when no response was obtained.
    ``up`` is True only if a response was received and its code is in
    ``site.expected_status``.
    """

    site: Site
    up: bool
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def from_status(cls, site: Site, status_code: int) -> "CheckResult":
        return cls(
            site=site,
            up=status_code in site.expected_status,
            status_code=status_code,
        )

    @classmethod
    def failure(cls, site: Site, error: str) -> "CheckResult":
        return cls(site=site, up=False, status_code=None, error=error)


@dataclass(frozen=True)
class WebhookPayload:
    """Notification body posted to the webhook for a down event."""

    site_name: Optional[str]
    site_url: Optional[str]
    status: str
    http_code: Optional[int]
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the JSON wire format.

        Returns:
            Dict with siteName, siteUrl, status, httpCode and timestamp keys
        """
        return {
            "siteName": self.site_name,
            "siteUrl": self.site_url,
            "status": self.status,
            "httpCode": self.http_code,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of one webhook POST."""

    delivered: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class RunSummary:
    """Everything one run produced, in site order."""

    timestamp: str
    results: Tuple[CheckResult, ...] = ()
    deliveries: Tuple[DeliveryResult, ...] = ()

    @property
    def up_count(self) -> int:
        return sum(1 for result in self.results if result.up)

    @property
    def down_count(self) -> int:
        return sum(1 for result in self.results if not result.up)
