"""SMTP email adapter backed by aiosmtplib.

The rest of the storefront is synchronous, so each send drives a short-lived
event loop. Callers must not already be inside a running loop; the HTTP routes
that send email are sync and run in the threadpool.
"""

import asyncio
import os
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

import aiosmtplib
import structlog

from storefront.notifications.channel.email_port import EmailPort

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 20.0

# Implicit TLS port; everything else negotiates STARTTLS
_SSL_PORT = 465


class SMTPEmailAdapter(EmailPort):
    """Delivers mail through an authenticated SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        timeout: float | None = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout or float(os.getenv("SMTP_TIMEOUT", DEFAULT_TIMEOUT))

    def _build_message(self, sender, to, subject, body, html_body):
        message = EmailMessage()
        message["From"] = sender
        message["To"] = to
        message["Subject"] = subject
        message["Date"] = formatdate(localtime=True)
        message["Message-ID"] = make_msgid()
        message.set_content(body)
        if html_body:
            message.add_alternative(html_body, subtype="html")
        return message

    def send(
        self,
        sender: str,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        message = self._build_message(sender, to, subject, body, html_body)
        implicit_tls = self.port == _SSL_PORT

        try:
            asyncio.run(
                aiosmtplib.send(
                    message,
                    hostname=self.host,
                    port=self.port,
                    username=self.username,
                    password=self.password,
                    use_tls=implicit_tls,
                    start_tls=not implicit_tls,
                    timeout=self.timeout,
                )
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            logger.error(
                "SMTP delivery failed",
                host=self.host,
                port=self.port,
                to=to,
                error=str(exc),
            )
            return {"message_id": None, "status": "failed", "error": str(exc)}

        return {"message_id": message["Message-ID"], "status": "sent"}
