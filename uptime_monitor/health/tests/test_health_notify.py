"""
Tests for health notify module.
"""

import logging
from unittest.mock import MagicMock, patch

import requests
from urllib3.exceptions import LocationParseError

from uptime_monitor.health import notify
from uptime_monitor.health.models import CheckResult, Site

TIMESTAMP = "2025-06-05T08:00:00.000Z"


def _site():
    return Site(name="A", url="http://a.test", expected_status=frozenset({200}))


class TestBuildPayload:
    """Tests for build_payload function."""

    def test_build_payload_with_code(self):
        """Test payload carries the observed code."""
        payload = notify.build_payload(_site(), 503, TIMESTAMP)

        assert payload.to_dict() == {
            "siteName": "A",
            "siteUrl": "http://a.test",
            "status": "DOWN",
            "httpCode": 503,
            "timestamp": TIMESTAMP,
        }

    def test_build_payload_without_code(self):
        """Test payload has a null code when no response was received."""
        payload = notify.build_payload(_site(), None, TIMESTAMP)

        assert payload.to_dict()["httpCode"] is None


class TestSendWebhook:
    """Tests for send_webhook function."""

    @patch("uptime_monitor.health.notify.requests.post")
    def test_send_webhook_success(self, mock_post):
        """Test successful delivery posts JSON once."""
        mock_post.return_value = MagicMock(status_code=200, text="ok")
        payload = notify.build_payload(_site(), 503, TIMESTAMP)

        delivery = notify.send_webhook("http://hook.test", payload)

        assert delivery.delivered is True
        mock_post.assert_called_once_with(
            "http://hook.test",
            json=payload.to_dict(),
            headers={"Content-Type": "application/json"},
            timeout=10,
        )

    @patch("uptime_monitor.health.notify.requests.post")
    def test_send_webhook_error_status_logs_warning(self, mock_post, caplog):
        """Test non-2xx webhook answer is logged with status and body."""
        mock_post.return_value = MagicMock(status_code=500, text="boom")
        payload = notify.build_payload(_site(), 503, TIMESTAMP)

        with caplog.at_level(logging.WARNING):
            delivery = notify.send_webhook("http://hook.test", payload)

        assert delivery.delivered is False
        assert delivery.status_code == 500
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "500" in warnings[0].getMessage()
        assert "boom" in warnings[0].getMessage()

    @patch("uptime_monitor.health.notify.requests.post")
    def test_send_webhook_network_error_logs_error(self, mock_post, caplog):
        """Test transport failure is logged and not raised."""
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")
        payload = notify.build_payload(_site(), None, TIMESTAMP)

        with caplog.at_level(logging.ERROR):
            delivery = notify.send_webhook("http://hook.test", payload)

        assert delivery.delivered is False
        assert delivery.status_code is None
        assert any(r.levelno == logging.ERROR for r in caplog.records)
        mock_post.assert_called_once()


    @patch("uptime_monitor.health.notify.requests.post")
    def test_send_webhook_unparsable_host(self, mock_post, caplog):
        """Test an error outside the requests hierarchy is logged and not raised."""
        long_url = "http://" + "a" * 64 + ".test/"
        mock_post.side_effect = LocationParseError(long_url)
        payload = notify.build_payload(_site(), 503, TIMESTAMP)

        with caplog.at_level(logging.ERROR):
            delivery = notify.send_webhook(long_url, payload)

        assert delivery.delivered is False
        assert delivery.error
        assert any(r.levelno == logging.ERROR for r in caplog.records)


class TestNotifyDown:
    """Tests for notify_down function."""

    @patch("uptime_monitor.health.notify.requests.post")
    def test_notify_down_sends_payload(self, mock_post):
        """Test down result is posted with its code."""
        mock_post.return_value = MagicMock(status_code=204, text="")
        result = CheckResult(site=_site(), up=False, status_code=503)

        delivery = notify.notify_down("http://hook.test", result, TIMESTAMP)

        assert delivery.delivered is True
        sent = mock_post.call_args.kwargs["json"]
        assert sent["httpCode"] == 503
        assert sent["timestamp"] == TIMESTAMP

    @patch("uptime_monitor.health.notify.requests.post")
    def test_notify_down_dry_run(self, mock_post):
        """Test dry-run does not post."""
        result = CheckResult(site=_site(), up=False)

        delivery = notify.notify_down(
            "http://hook.test", result, TIMESTAMP, dry_run=True
        )

        assert delivery.delivered is False
        mock_post.assert_not_called()
