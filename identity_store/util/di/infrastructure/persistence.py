"""Persistence infrastructure providers."""

from dishka import Scope, from_context, provide

from identity_store.domain.repository import UserRepository
from identity_store.persistence.repository import CqlUserRepository
from identity_store.persistence.schema import UserStatements
from identity_store.persistence.session import CqlSession
from identity_store.util.di.base import ProviderBase


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider.

    The CQL session is owned by the application and passed in as container
    context; this provider never opens or closes it.
    """

    __is_mock__ = False

    session = from_context(provides=CqlSession, scope=Scope.APP)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(
        self, session: CqlSession, statements: UserStatements
    ) -> UserRepository:
        """Provide User repository."""
        return CqlUserRepository(session, statements)
