"""Storefront bounded context.

Handles product browsing, session-scoped carts, checkout through a hosted
payment session, post-payment reconciliation, buyer/admin confirm and cancel
actions with compensating refunds, and transactional email.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
