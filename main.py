"""
Users API - composition root.
Wires configuration, logging, persistence and the user service together.
"""

import asyncio
import os
import sys
from typing import Any, Dict, List

from users_api.domain.models.entities import User
from users_api.infrastructure.configuration.manager import ConfigurationManager
from users_api.infrastructure.logging.logger import LoggerAdapter, LoggerFactory
from users_api.infrastructure.persistence.sqlite import (
    DatabaseInitializer,
    SqliteConnectionFactory,
    SqliteUserRepository,
)
from users_api.application.services.user_service import UserService


DEFAULT_CONFIG_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json")


class UsersApplication:
    """Builds and owns every component of the users API."""

    def __init__(self, config_file: str = DEFAULT_CONFIG_FILE):
        self.config_file = config_file
        self._initialize_components()

    def _initialize_components(self):
        """Create all components."""
        self.logger = LoggerFactory.create_logger("users_api.app", "INFO")

        self.config_manager = ConfigurationManager(self.config_file, self.logger)
        self.api_config = self.config_manager.get_api_config()
        self.logger.set_level(self.api_config.log_level)

        self.service_logger = LoggerFactory.create_component_logger(
            "user_service", self.api_config.to_dict()
        )
        self._loggers = [self.logger, self.service_logger]

        self.connection_factory = SqliteConnectionFactory(self.api_config)
        self.database_initializer = DatabaseInitializer(self.connection_factory, self.logger)
        self.user_repository = SqliteUserRepository(self.connection_factory)

        self.user_service = UserService(
            self.user_repository,
            LoggerAdapter(self.service_logger, component="user_service")
        )

        self.config_manager.add_change_callback(self._on_config_changed)

        self.logger.info("All components initialized")

    def start(self) -> None:
        """Initialize storage and start configuration hot-reload."""
        self.database_initializer.initialize()
        self.config_manager.start_hot_reload()
        self.logger.info("Users API started", database=self.api_config.database_path)

    def stop(self) -> None:
        """Stop background services and release resources."""
        self.config_manager.stop_hot_reload()
        self.connection_factory.close()
        self.logger.info("Users API stopped")
        for logger in self._loggers:
            logger.close()

    def _on_config_changed(self, config: Dict[str, Any]) -> None:
        """Apply the parts of a configuration change that take effect live."""
        level = config.get('log_level')
        if level:
            for logger in self._loggers:
                logger.set_level(level)
            self.logger.info(f"Log level changed to {level}")

        if config.get('database_path', self.api_config.database_path) != self.api_config.database_path:
            self.logger.warning("database_path changes take effect after restart")

    async def __aenter__(self) -> 'UsersApplication':
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.stop()


async def run_demo(app: UsersApplication) -> List[User]:
    """Create, list, fetch and delete a user through the service."""
    service = app.user_service

    user = User(full_name="Nick Chapsas")
    await service.create(user)

    users = await service.get_all()
    for existing in users:
        print(f"{existing.id}  {existing.full_name}")

    found = await service.get_by_id(user.id)
    print(f"Found: {found.full_name if found else None}")

    deleted = await service.delete_by_id(user.id)
    print(f"Deleted: {deleted}")

    return users


async def _main(config_file: str) -> None:
    async with UsersApplication(config_file) as app:
        await run_demo(app)


def main() -> None:
    config_file = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_FILE
    asyncio.run(_main(config_file))


if __name__ == "__main__":
    main()
