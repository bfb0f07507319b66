"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from identity_store.config import Settings
from identity_store.persistence.session import CqlSession
from identity_store.util.di import PROVIDERS, get_provider
from identity_store.util.logging import get_logger, setup_logging
from identity_store.util.observability import configure_logfire

logger = get_logger(__name__)


def create_container(session: CqlSession) -> AsyncContainer:
    """Build production container (all prod implementations).

    Args:
        session: CQL session owned by the application

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances, context={CqlSession: session})


def bootstrap(session: CqlSession) -> AsyncContainer:
    """Configure logging and observability, then build the container.

    Logging is configured from the same environment the container's
    settings are loaded from.

    Args:
        session: CQL session owned by the application

    Returns:
        Configured DI container
    """
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)
    logger.info(f"Identity store using keyspace {settings.database.keyspace}")
    return create_container(session)
