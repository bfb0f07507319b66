"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from identity_store.config import DatabaseSettings, Settings
from identity_store.persistence.schema import UserStatements
from identity_store.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        """Provide database settings."""
        return settings.database

    @provide(scope=Scope.APP)
    def provide_statements(self, database: DatabaseSettings) -> UserStatements:
        """Provide statement text for the configured keyspace."""
        return UserStatements.for_keyspace(database.keyspace)
