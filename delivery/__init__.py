from delivery.base import DeliveryError, NotificationSink, PrimarySink
from delivery.bluesky import BlueskyClient, prepare_post
from delivery.output import ConsoleSink
from delivery.slack import SlackNotifier, build_notification

__all__ = [
    "DeliveryError",
    "NotificationSink",
    "PrimarySink",
    "BlueskyClient",
    "prepare_post",
    "ConsoleSink",
    "SlackNotifier",
    "build_notification",
]
