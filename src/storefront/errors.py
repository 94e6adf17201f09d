"""Errors surfaced by storefront workflows to their callers."""


class ConfigurationMissing(Exception):
    """Required credentials are not configured (payment secret key, SMTP login)."""


class ExternalProviderFailure(Exception):
    """The payment provider rejected or failed a request."""
