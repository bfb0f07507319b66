"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from identity_store.domain.model import User, UserConnection
from identity_store.domain.value import UserId


class UserRepository(ABC):
    """Repository for User records.

    Defines the contract for user persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def create_prerequisite_objects(self) -> None:
        """Create the tables and indexes users are stored in."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert a user and its provider connections.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The user's username

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_connections(self, user_id: UserId) -> list[UserConnection]:
        """Find all provider connections of a user.

        Args:
            user_id: The user's unique identifier

        Returns:
            List of connections (may be empty)
        """
        pass
