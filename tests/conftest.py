"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import Mock

from users_api.domain.interfaces.base import ILogger
from users_api.domain.interfaces.user_repository import IUserRepository
from users_api.domain.models.configuration import UsersApiConfiguration
from users_api.domain.models.entities import User


@dataclass
class LogEntry:
    """One recorded call on the logger adapter."""

    level: str
    template: str
    args: Tuple[Any, ...]
    exception: Optional[BaseException] = None


class RecordingLoggerAdapter:
    """Logger adapter that records every call for later assertions."""

    def __init__(self):
        self.entries: List[LogEntry] = []

    def log_information(self, template: str, *args: Any) -> None:
        self.entries.append(LogEntry("information", template, args))

    def log_error(self, exception: BaseException, template: str, *args: Any) -> None:
        self.entries.append(LogEntry("error", template, args, exception))

    @property
    def information(self) -> List[LogEntry]:
        return [entry for entry in self.entries if entry.level == "information"]

    @property
    def errors(self) -> List[LogEntry]:
        return [entry for entry in self.entries if entry.level == "error"]

    def received(self, template: str, level: str = "information") -> List[LogEntry]:
        return [e for e in self.entries if e.template == template and e.level == level]


@dataclass
class StubUserRepository(IUserRepository):
    """Repository stub returning fixed values or raising a fixed error.

    Every call is appended to ``calls`` as (method, args).
    """

    all_users: List[User] = field(default_factory=list)
    user: Optional[User] = None
    create_result: bool = True
    delete_result: bool = True
    error: Optional[BaseException] = None
    calls: List[Tuple[str, Tuple[Any, ...]]] = field(default_factory=list)

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        if self.error is not None:
            raise self.error

    async def get_all(self) -> List[User]:
        self._record("get_all")
        return self.all_users

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        self._record("get_by_id", user_id)
        return self.user

    async def create(self, user: User) -> bool:
        self._record("create", user)
        return self.create_result

    async def delete_by_id(self, user_id: uuid.UUID) -> bool:
        self._record("delete_by_id", user_id)
        return self.delete_result


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_logger():
    """Create a mock structured logger for testing."""
    logger = Mock(spec=ILogger)
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def recording_logger():
    """Create a recording logger adapter."""
    return RecordingLoggerAdapter()


@pytest.fixture
def user_repository():
    """Create a stub user repository."""
    return StubUserRepository()


@pytest.fixture
def sample_user():
    """Create a sample user."""
    return User(id=uuid.uuid4(), full_name="Nick Chapsas")


@pytest.fixture
def sample_api_config(temp_dir):
    """Create a sample configuration backed by a temporary database."""
    return UsersApiConfiguration(
        database_path=str(temp_dir / "users.db"),
        connection_timeout=5.0,
        log_level="DEBUG",
        log_dir=None
    )


@pytest.fixture
def sample_config_dict(temp_dir) -> Dict[str, Any]:
    """Create a sample configuration dictionary for testing."""
    return {
        'database_path': str(temp_dir / "users.db"),
        'connection_timeout': 5.0,
        'log_level': "DEBUG",
        'log_dir': None
    }


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Keep environment overrides from leaking into configuration tests."""
    for name in ('USERS_API_DATABASE_PATH', 'USERS_API_LOG_LEVEL', 'USERS_API_LOG_DIR'):
        monkeypatch.delenv(name, raising=False)
