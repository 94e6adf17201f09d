"""Email channel factory.

Builds the adapter for the current email settings. SMTP in production; the fake
adapter records messages in memory when ``EMAIL_ADAPTER=fake``.
"""

import os

from storefront.notifications.channel.email_port import EmailPort


def build_email_channel(settings) -> EmailPort:
    """Return a channel adapter authenticated with ``settings``' credentials."""
    adapter = os.environ.get("EMAIL_ADAPTER", "smtp")
    if adapter == "fake":
        from storefront.notifications.channel.fake_email import FakeEmailAdapter

        return FakeEmailAdapter(username=settings.email_user, password=settings.email_password)
    if adapter == "smtp":
        from storefront.notifications.channel.smtp_email import SMTPEmailAdapter

        return SMTPEmailAdapter(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.email_user,
            password=settings.email_password,
        )
    raise ValueError(f"Unknown email adapter: {adapter}")
