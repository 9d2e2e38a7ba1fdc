"""Sentry integration for iTunes search and artwork failures."""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)

ITUNES_CATEGORY = "itunes"


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    release: str | None = None,
) -> None:
    """Initialize Sentry with the FastAPI integration.

    An empty DSN (the usual value when SENTRY_DSN is set but blank) is treated
    the same as a missing one.
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[FastApiIntegration()],
        traces_sample_rate=1.0,
        sample_rate=1.0,
    )

    logger.info(f"Sentry initialized (environment: {environment}, release: {release})")


def add_itunes_breadcrumb(
    operation: str,
    data: dict[str, Any] | None = None,
    level: str = "info",
) -> None:
    """Record an iTunes call as a breadcrumb on the current scope.

    The service records:
        search: a search request is about to be sent (data: keyword)
        search_error: the search request failed at the transport level (data: error)
        artwork_error: an artwork fetch yielded no image (data: url, error)
    """
    sentry_sdk.add_breadcrumb(
        category=ITUNES_CATEGORY,
        message=operation,
        data=data or {},
        level=level,
    )


def capture_exception(
    error: Exception,
    context: dict[str, Any] | None = None,
) -> None:
    """Report an unexpected error, e.g. a search router failure outside the taxonomy.

    Args:
        error: The exception to report
        context: Request details (such as the keyword) attached under "itunes"
    """
    if context:
        sentry_sdk.set_context(ITUNES_CATEGORY, context)

    sentry_sdk.capture_exception(error)
