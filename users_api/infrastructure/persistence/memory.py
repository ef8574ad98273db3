"""
In-memory user repository.
"""

import asyncio
import uuid
from typing import Dict, Iterable, List, Optional

from users_api.domain.interfaces.user_repository import IUserRepository
from users_api.domain.models.entities import User


class InMemoryUserRepository(IUserRepository):
    """Dict-backed repository that keeps users in insertion order."""

    def __init__(self, users: Optional[Iterable[User]] = None):
        self._users: Dict[uuid.UUID, User] = {}
        self._lock = asyncio.Lock()
        for user in users or ():
            self._users.setdefault(user.id, user)

    async def get_all(self) -> List[User]:
        async with self._lock:
            return list(self._users.values())

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        async with self._lock:
            return self._users.get(user_id)

    async def create(self, user: User) -> bool:
        async with self._lock:
            if user.id in self._users:
                return False
            self._users[user.id] = user
            return True

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        async with self._lock:
            return self._users.pop(user_id, None) is not None

    def __len__(self) -> int:
        return len(self._users)
