"""Configuration singletons for payment provider keys and outbound email.

Each record exists at most once. Both are seeded from environment defaults on
first access and then live in the database, where admin edits supersede the
environment. Concurrent edits are last-writer-wins.
"""

import os
from datetime import UTC, datetime

from protean.fields import DateTime, Integer, String

from storefront.domain import storefront

DEFAULT_SMTP_HOST = "smtp.gmail.com"
DEFAULT_SMTP_PORT = 587


@storefront.aggregate
class PaymentSettings:
    publishable_key = String(max_length=255)
    secret_key = String(max_length=255)
    updated_at = DateTime()

    @classmethod
    def from_environment(cls):
        return cls(
            publishable_key=os.getenv("STRIPE_PUBLISHABLE_KEY", ""),
            secret_key=os.getenv("STRIPE_SECRET_KEY", ""),
            updated_at=datetime.now(UTC),
        )

    @property
    def has_secret(self) -> bool:
        return bool(self.secret_key)

    def update(self, publishable_key, secret_key):
        self.publishable_key = publishable_key
        self.secret_key = secret_key
        self.updated_at = datetime.now(UTC)


@storefront.aggregate
class EmailSettings:
    email_user = String(max_length=255)
    email_password = String(max_length=255)
    seller_email = String(max_length=255)
    smtp_host = String(max_length=255, default=DEFAULT_SMTP_HOST)
    smtp_port = Integer(default=DEFAULT_SMTP_PORT)
    updated_at = DateTime()

    @classmethod
    def from_environment(cls):
        return cls(
            email_user=os.getenv("EMAIL_USER", ""),
            email_password=os.getenv("EMAIL_PASS", ""),
            seller_email=os.getenv("SELLER_EMAIL", ""),
            smtp_host=os.getenv("SMTP_HOST", DEFAULT_SMTP_HOST),
            smtp_port=int(os.getenv("SMTP_PORT", DEFAULT_SMTP_PORT)),
            updated_at=datetime.now(UTC),
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.email_user and self.email_password)

    @property
    def credentials(self) -> tuple:
        """Everything the SMTP channel is built from; a change means rebuild."""
        return (self.email_user, self.email_password, self.smtp_host, self.smtp_port)

    def update(self, email_user, email_password, seller_email, smtp_host=None, smtp_port=None):
        self.email_user = email_user
        self.email_password = email_password
        self.seller_email = seller_email
        if smtp_host:
            self.smtp_host = smtp_host
        if smtp_port:
            self.smtp_port = smtp_port
        self.updated_at = datetime.now(UTC)
