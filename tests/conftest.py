import os
from pathlib import Path

import pytest

# Settings singletons are seeded from these on first read in every test
_TEST_ENVIRONMENT = {
    "PAYMENT_ADAPTER": "fake",
    "EMAIL_ADAPTER": "fake",
    "STRIPE_PUBLISHABLE_KEY": "pk_test_storefront",
    "STRIPE_SECRET_KEY": "sk_test_storefront",
    "EMAIL_USER": "shop@example.com",
    "EMAIL_PASS": "app-password",
    "SELLER_EMAIL": "seller@example.com",
    "ADMIN_USERNAME": "admin",
    "ADMIN_PASSWORD": "password",
    "SESSION_SECRET": "test-session-secret",
}


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pin the config environment and the fake adapters before anything imports the domain."""
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.update(_TEST_ENVIRONMENT)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
