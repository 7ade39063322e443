"""Aggregate application use cases."""

from .notifications import NotificationDispatcher, NotificationHub

__all__ = ["NotificationDispatcher", "NotificationHub"]
