"""
Sink interfaces. The pipeline only talks to these.
"""

from abc import ABC, abstractmethod

from models import Notification, PreparedPost


class DeliveryError(Exception):
    """Raised when a sink did not accept a message."""
    pass


class PrimarySink(ABC):
    @abstractmethod
    def publish(self, post: PreparedPost) -> str:
        """Publish a post. Returns a sink-side reference (URI, id). Raises DeliveryError."""
        ...

    @abstractmethod
    def name(self) -> str:
        ...


class NotificationSink(ABC):
    @abstractmethod
    def notify(self, notification: Notification):
        """Send a notification. Raises DeliveryError."""
        ...

    @abstractmethod
    def name(self) -> str:
        ...
