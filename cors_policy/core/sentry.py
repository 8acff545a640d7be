from sentry_sdk.integrations.aiohttp import AioHttpIntegration

from cors_policy import config


def get_sentry_kwargs():
    """
    Returns Sentry configuration kwargs.

    The integration is created fresh each time so it hooks into aiohttp
    when sentry_sdk.init() is called, not at module import time.
    """
    return {
        "dsn": config.SENTRY_DSN or None,
        "integrations": [AioHttpIntegration()],
        "environment": config.SERVER_NAME or "unknown",
        "traces_sample_rate": config.SENTRY_SAMPLE_RATE or 1.0,
    }
