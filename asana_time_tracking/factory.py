"""Wiring — builds configured clients and facades from Settings.

Invariants:
    - Settings default to get_settings() (environment + .env)
    - A missing access token fails fast with InvalidArgumentError, before any request
"""

import logging

import httpx

from asana_time_tracking.config import Settings, get_settings
from asana_time_tracking.core.errors import InvalidArgumentError
from asana_time_tracking.infrastructure.asana_api_client import AsanaApiClient
from asana_time_tracking.infrastructure.observability import setup_logging
from asana_time_tracking.services.time_tracking_entries import TimeTrackingEntriesService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings | None = None) -> logging.Logger:
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)


def build_api_client(
    settings: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> AsanaApiClient:
    """AsanaApiClient configured from settings."""
    settings = settings or get_settings()
    if not settings.asana_access_token.strip():
        raise InvalidArgumentError(
            "ASANA_ACCESS_TOKEN is not set.", field="asana_access_token",
        )
    logger.debug(f"Building Asana API client for {settings.asana_base_url}")
    return AsanaApiClient(
        settings.asana_access_token,
        base_url=settings.asana_base_url,
        max_retries=settings.asana_max_retries,
        initial_backoff_seconds=settings.asana_initial_backoff_seconds,
        timeout_seconds=settings.asana_timeout_seconds,
        transport=transport,
    )


def build_time_tracking_service(
    settings: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> TimeTrackingEntriesService:
    return TimeTrackingEntriesService(build_api_client(settings, transport))
