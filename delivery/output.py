"""
Console sink. Stands in for both real sinks on dry runs.
"""

from delivery.base import NotificationSink, PrimarySink
from models import Notification, PreparedPost

SEPARATOR = "─" * 60


class ConsoleSink(PrimarySink, NotificationSink):
    """Print to stdout. That's it."""

    def name(self) -> str:
        return "console"

    def publish(self, post: PreparedPost) -> str:
        print(f"\n{SEPARATOR}")
        print(f"  POST ({len(post.text)} chars, link at {post.link_start}-{post.link_end})")
        print(SEPARATOR)
        print(post.text)
        return "console:"

    def notify(self, notification: Notification):
        print(SEPARATOR)
        print(f"  {notification.title}")
        print(f"  {notification.created_at}  id={notification.item_id}")
        print(SEPARATOR)
        print(f"> {notification.summary}")
        print(notification.link)
        print(SEPARATOR)
