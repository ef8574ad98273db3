"""
User repository interface.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from users_api.domain.models.entities import User


class IUserRepository(ABC):
    """Gateway through which user records are read and written."""

    @abstractmethod
    async def get_all(self) -> List[User]:
        """Return every stored user."""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """Return the user with the given id, or None."""
        pass

    @abstractmethod
    async def create(self, user: User) -> bool:
        """Store a new user. Returns True when the user was stored."""
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        """Delete a user. Returns False when no user had that id."""
        pass
