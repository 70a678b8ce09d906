"""
Slack notification sink. One incoming-webhook POST per delivered item.

This is the audit trail of what was published, so failures are never
swallowed here.
"""

import logging

import requests

from delivery.base import DeliveryError, NotificationSink
from models import NormalizedItem, Notification

log = logging.getLogger(__name__)


def build_notification(item: NormalizedItem, summary: str, source_id: str) -> Notification:
    who = item.display_name or source_id
    return Notification(
        title=f"New post from {who}",
        summary=summary,
        link=item.url,
        created_at=item.created_at,
        item_id=item.id,
    )


def _escape(text: str) -> str:
    """Slack mrkdwn control characters."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def render_payload(notification: Notification) -> dict:
    """Webhook body: plain fallback text plus Block Kit blocks."""
    quoted = "\n".join(f"> {line}" for line in _escape(notification.summary).splitlines())
    meta = (
        f"Posted {notification.created_at or 'unknown'} · "
        f"id {notification.item_id} · <{notification.link}|view post>"
    )
    return {
        "text": f"{notification.title}: {notification.summary}\n{notification.link}",
        "blocks": [
            {
                "type": "header",
                "text": {"type": "plain_text", "text": notification.title[:150]},
            },
            {
                "type": "section",
                "text": {"type": "mrkdwn", "text": quoted or "> (no summary)"},
            },
            {
                "type": "context",
                "elements": [{"type": "mrkdwn", "text": meta}],
            },
        ],
    }


class SlackNotifier(NotificationSink):
    def __init__(self, webhook_url: str, timeout: int = 20, session: requests.Session | None = None):
        if not webhook_url:
            raise DeliveryError("SLACK_URL not set")
        self._webhook_url = webhook_url
        self._timeout = timeout
        self._session = session or requests.Session()

    def name(self) -> str:
        return "slack"

    def notify(self, notification: Notification):
        try:
            resp = self._session.post(
                self._webhook_url,
                json=render_payload(notification),
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.RequestException as e:
            raise DeliveryError(f"Slack notification failed for {notification.item_id}: {e}") from e
        log.debug(f"Slack notified for {notification.item_id}")
