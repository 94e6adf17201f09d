"""Notification service — renders templates and dispatches them by email.

Sending is fire-and-forget: missing credentials, template errors and channel
failures are logged and reported through the boolean return value, never
raised, so the checkout or lifecycle step that triggered the email always
completes.

The SMTP channel is cached together with the credentials it was built from.
Current email settings are read before every send and a change rebuilds the
channel, so admin edits apply without a restart. ``reconfigure()`` drops the
cached channel explicitly.
"""

import structlog

from storefront.notifications.channel import build_email_channel
from storefront.notifications.kinds import NotificationKind
from storefront.notifications.templates import get_template
from storefront.settings.provider import email_settings

logger = structlog.get_logger(__name__)


class NotificationService:
    def __init__(self, channel_factory=None):
        self._channel_factory = channel_factory or build_email_channel
        self._channel = None
        self._credentials = None

    @property
    def channel(self):
        """The channel built for the last send, if any."""
        return self._channel

    def reconfigure(self) -> None:
        self._channel = None
        self._credentials = None
        logger.info("Email channel invalidated; rebuilding on next send")

    def _channel_for(self, settings):
        if self._channel is None or self._credentials != settings.credentials:
            self._channel = self._channel_factory(settings)
            self._credentials = settings.credentials
            logger.info("Email channel rebuilt", sender=settings.email_user, host=settings.smtp_host)
        return self._channel

    def send(self, kind: NotificationKind | str, recipients: list[str], context: dict) -> bool:
        """Render ``kind`` with ``context`` and email it to each recipient.

        Returns True only when every recipient's message was accepted.
        """
        kind = kind.value if isinstance(kind, NotificationKind) else kind
        try:
            return self._dispatch(email_settings(), kind, recipients, context)
        except Exception as exc:
            logger.error("Notification dispatch failed", kind=kind, error=str(exc), exc_info=True)
            return False

    def notify_seller(self, context: dict) -> bool:
        """Send a seller alert to the configured alert recipient."""
        kind = NotificationKind.SELLER_ALERT.value
        try:
            settings = email_settings()
            if not settings.seller_email:
                logger.error("Seller alert address not configured, alert dropped", order_id=context.get("order_id"))
                return False
            return self._dispatch(settings, kind, [settings.seller_email], context)
        except Exception as exc:
            logger.error("Notification dispatch failed", kind=kind, error=str(exc), exc_info=True)
            return False

    def _dispatch(self, settings, kind: str, recipients: list[str], context: dict) -> bool:
        if not settings.has_credentials:
            logger.error("Email credentials not configured, notification dropped", kind=kind)
            return False

        rendered = get_template(kind).render(context)
        channel = self._channel_for(settings)

        delivered = True
        for recipient in recipients:
            result = channel.send(
                sender=settings.email_user,
                to=recipient,
                subject=rendered["subject"],
                body=rendered["body"],
                html_body=rendered.get("html_body"),
            )
            if result.get("status") != "sent":
                delivered = False
                logger.error(
                    "Notification delivery failed",
                    kind=kind,
                    to=recipient,
                    error=result.get("error", "Unknown dispatch error"),
                )
        return delivered
