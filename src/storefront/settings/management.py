"""Settings management — admin commands and handlers."""

from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notifications import get_notifier
from storefront.settings.provider import email_settings, payment_settings
from storefront.settings.settings import EmailSettings, PaymentSettings


@storefront.command(part_of="PaymentSettings")
class UpdatePaymentSettings:
    publishable_key = String(max_length=255)
    secret_key = String(max_length=255)


@storefront.command(part_of="EmailSettings")
class UpdateEmailSettings:
    email_user = String(max_length=255)
    email_password = String(max_length=255)
    seller_email = String(max_length=255)
    smtp_host = String(max_length=255)
    smtp_port = Integer(min_value=1, max_value=65535)


@storefront.command_handler(part_of=PaymentSettings)
class PaymentSettingsHandler:
    @handle(UpdatePaymentSettings)
    def update_payment_settings(self, command):
        settings = payment_settings()
        settings.update(
            publishable_key=command.publishable_key or "",
            secret_key=command.secret_key or "",
        )
        current_domain.repository_for(PaymentSettings).add(settings)


@storefront.command_handler(part_of=EmailSettings)
class EmailSettingsHandler:
    @handle(UpdateEmailSettings)
    def update_email_settings(self, command):
        settings = email_settings()
        settings.update(
            email_user=command.email_user or "",
            email_password=command.email_password or "",
            seller_email=command.seller_email or "",
            smtp_host=command.smtp_host,
            smtp_port=command.smtp_port,
        )
        current_domain.repository_for(EmailSettings).add(settings)

        # Drop the cached SMTP channel; the next send rebuilds it from these values
        get_notifier().reconfigure()
