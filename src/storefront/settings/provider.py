"""Read-on-demand access to the configuration singletons.

Every caller reads the current record from the repository, so admin edits take
effect on the next request without a restart.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.settings.settings import EmailSettings, PaymentSettings

logger = structlog.get_logger(__name__)


def _find_or_seed(aggregate_cls):
    repo = current_domain.repository_for(aggregate_cls)
    existing = repo._dao.query.all().items
    if existing:
        return existing[0]

    record = aggregate_cls.from_environment()
    repo.add(record)
    logger.info("Settings seeded from environment", settings=aggregate_cls.__name__)
    return record


def payment_settings() -> PaymentSettings:
    return _find_or_seed(PaymentSettings)


def email_settings() -> EmailSettings:
    return _find_or_seed(EmailSettings)
