"""
User service: repository access wrapped with logging and timing.
"""

import time
import uuid
from typing import List, Optional

from users_api.domain.interfaces.base import ILoggerAdapter
from users_api.domain.interfaces.user_repository import IUserRepository
from users_api.domain.models.entities import User


class UserService:
    """Application service for user records.

    Each wrapped operation logs before calling the repository and, if the
    repository raises, logs the exception and re-raises it unchanged.
    delete_by_id has no logging around it.
    """

    def __init__(self, user_repository: IUserRepository, logger: ILoggerAdapter):
        self._user_repository = user_repository
        self._logger = logger

    async def get_all(self) -> List[User]:
        """Return all users, logging how long the lookup took."""
        self._logger.log_information("Retrieving all users")
        started = time.perf_counter()
        try:
            users = await self._user_repository.get_all()
        except Exception as e:
            self._logger.log_error(e, "Something went wrong while retrieving all users")
            raise

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        self._logger.log_information("All users retrieved in {}ms", elapsed_ms)
        return list(users)

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        self._logger.log_information("Retrieving user with id: {}", user_id)
        try:
            return await self._user_repository.get_by_id(user_id)
        except Exception as e:
            self._logger.log_error(e, "Something went wrong while retrieving user with id {}", user_id)
            raise

    async def create(self, user: User) -> bool:
        self._logger.log_information("Creating user with id {} and name: {}", user.id, user.full_name)
        try:
            return await self._user_repository.create(user)
        except Exception as e:
            self._logger.log_error(e, "Something went wrong while creating a user")
            raise

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        return await self._user_repository.delete_by_id(user_id)
