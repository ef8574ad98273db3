"""
Configuration models and validation schemas.
"""

from dataclasses import dataclass
from typing import Dict, Any, Optional
import os
from users_api.domain.interfaces.base import ValueObject


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class UsersApiConfiguration(ValueObject):
    """Configuration for the users API."""

    # Persistence
    database_path: str = "users.db"
    connection_timeout: float = 30.0  # seconds

    # Logging configuration
    log_level: str = "INFO"
    log_dir: Optional[str] = "logs"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_database()
        self._validate_logging()

    def _validate_database(self) -> None:
        """Validate persistence configurations."""
        if not self.database_path or not isinstance(self.database_path, str):
            raise ValueError("database_path must be a non-empty string")

        if self.connection_timeout <= 0:
            raise ValueError("connection_timeout must be positive")

    def _validate_logging(self) -> None:
        """Validate logging configurations."""
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}")

        if self.log_dir is not None and not isinstance(self.log_dir, str):
            raise ValueError("log_dir must be a string or None")

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'UsersApiConfiguration':
        """Create configuration from dictionary with environment variable support."""
        config_dict = dict(config_dict)

        env_overrides = {
            'database_path': os.getenv('USERS_API_DATABASE_PATH'),
            'log_level': os.getenv('USERS_API_LOG_LEVEL'),
            'log_dir': os.getenv('USERS_API_LOG_DIR'),
        }

        for key, env_value in env_overrides.items():
            if env_value is not None:
                config_dict[key] = env_value

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'database_path': self.database_path,
            'connection_timeout': self.connection_timeout,
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'log_format': self.log_format,
        }
