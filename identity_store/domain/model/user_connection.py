"""User connection entity.

One row of the ``user_connections`` table: the subject id a provider issued
for a user. The table is keyed by (user_id, provider), so a user has at most
one connection per provider.
"""

from identity_store.domain.model.common import DomainModel
from identity_store.domain.value import IdentityProvider, UserId


class UserConnection(DomainModel):
    """External provider identity linked to a user account."""

    user_id: UserId
    provider: IdentityProvider
    id_for_provider: str  # Subject id issued by the provider
