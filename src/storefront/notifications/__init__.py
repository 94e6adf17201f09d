"""Notifier access.

Provides get_notifier() / set_notifier() so handlers share one
NotificationService and tests can install one with a fake channel.
"""

from storefront.notifications.service import NotificationService

_current_notifier: NotificationService | None = None


def get_notifier() -> NotificationService:
    """Return the shared notification service, creating it on first use."""
    global _current_notifier
    if _current_notifier is None:
        _current_notifier = NotificationService()
    return _current_notifier


def set_notifier(notifier: NotificationService) -> None:
    global _current_notifier
    _current_notifier = notifier


def reset_notifier() -> None:
    global _current_notifier
    _current_notifier = None
