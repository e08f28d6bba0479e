"""
Health notifications - Webhook delivery of down events.

This module builds the JSON payload describing a down site and posts it to
the configured webhook. Delivery problems are logged and returned, never
raised.
"""

import logging
from typing import Optional

import requests  # type: ignore

from uptime_monitor.health.checks import DEFAULT_TIMEOUT, is_success_status
from uptime_monitor.health.models import (
    STATUS_DOWN,
    CheckResult,
    DeliveryResult,
    Site,
    WebhookPayload,
)

logger = logging.getLogger(__name__)


def build_payload(
    site: Site,
    status_code: Optional[int],
    timestamp: str,
    status: str = STATUS_DOWN,
) -> WebhookPayload:
    """
    Build the webhook payload for a site event.

    Args:
        site: Site the event is about
        status_code: Observed HTTP status code, or None if no response
        timestamp: ISO-8601 UTC timestamp of the run
        status: "UP" or "DOWN"

    Returns:
        WebhookPayload ready to send
    """
    return WebhookPayload(
        site_name=site.name,
        site_url=site.url,
        status=status,
        http_code=status_code,
        timestamp=timestamp,
    )


def send_webhook(
    webhook_url: str, payload: WebhookPayload, timeout: float = DEFAULT_TIMEOUT
) -> DeliveryResult:
    """
    POST a payload to the webhook once.

    A non-2xx answer is logged as a warning with the response status and
    body. A transport failure is logged as an error. Neither is retried.

    Args:
        webhook_url: Webhook endpoint URL
        payload: Payload to send as JSON
        timeout: Request timeout in seconds

    Returns:
        DeliveryResult describing the outcome
    """
    try:
        response = requests.post(
            webhook_url,
            json=payload.to_dict(),
            headers={"Content-Type": "application/json"},
            timeout=timeout,
        )
    except Exception as e:  # pylint: disable=broad-except
        logger.error("Failed to send webhook for %s: %s", payload.site_name, e)
        return DeliveryResult(delivered=False, error=str(e))

    if not is_success_status(response.status_code):
        logger.warning(
            "Webhook responded with status %d: %s",
            response.status_code,
            response.text,
        )
        return DeliveryResult(
            delivered=False,
            status_code=response.status_code,
            error=response.text,
        )

    logger.debug("Sent webhook notification for %s", payload.site_name)
    return DeliveryResult(delivered=True, status_code=response.status_code)


def notify_down(
    webhook_url: str,
    result: CheckResult,
    timestamp: str,
    dry_run: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> DeliveryResult:
    """Send the down notification for a failed check."""
    payload = build_payload(result.site, result.status_code, timestamp)

    if dry_run:
        logger.info("Dry-run: would POST to %s: %s", webhook_url, payload.to_dict())
        return DeliveryResult(delivered=False)

    return send_webhook(webhook_url, payload, timeout=timeout)
