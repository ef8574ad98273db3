"""
JSON configuration file with validation and watchdog-driven hot-reload.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Callable
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
import threading
import time

from users_api.domain.exceptions import ConfigurationError
from users_api.domain.interfaces.base import ILogger
from users_api.domain.models.configuration import UsersApiConfiguration


class ConfigurationFileHandler(FileSystemEventHandler):
    """Reloads the configuration when its file is written or replaced."""

    def __init__(self, config_manager: 'ConfigurationManager', debounce_seconds: float = 1.0):
        self.config_manager = config_manager
        self.debounce_seconds = debounce_seconds
        self._last_reload = float('-inf')

    def on_modified(self, event):
        if not event.is_directory:
            self._maybe_reload(event.src_path)

    def on_created(self, event):
        if not event.is_directory:
            self._maybe_reload(event.src_path)

    def on_moved(self, event):
        # Editors that save atomically rename a temp file over the target
        if not event.is_directory:
            self._maybe_reload(event.dest_path)

    def _maybe_reload(self, path: str) -> None:
        if not self.config_manager.watches(path):
            return

        now = time.monotonic()
        if now - self._last_reload < self.debounce_seconds:
            return
        self._last_reload = now
        self.config_manager.reload()


class ConfigurationManager:
    """Owns the raw configuration mapping and its typed view.

    A new mapping only replaces the current one after it builds a valid
    UsersApiConfiguration, so a bad edit or a bad set() leaves the
    previous configuration in place.
    """

    def __init__(self, config_file_path: str, logger: ILogger):
        self.config_file_path = Path(config_file_path)
        self.logger = logger
        self._config_data: Dict[str, Any] = {}
        self._api_config: Optional[UsersApiConfiguration] = None
        self._observer: Optional[Observer] = None
        self._change_callbacks: list[Callable[[Dict[str, Any]], None]] = []
        self._lock = threading.RLock()

        self._load()

    @property
    def is_watching(self) -> bool:
        return self._observer is not None

    def watches(self, path: str) -> bool:
        """True when path points at the configuration file."""
        return Path(path).resolve() == self.config_file_path.resolve()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._config_data.get(key, default)

    def get_all(self) -> Dict[str, Any]:
        with self._lock:
            return self._config_data.copy()

    def get_api_config(self) -> UsersApiConfiguration:
        with self._lock:
            return self._api_config

    def set(self, key: str, value: Any) -> None:
        """Change one value. Raises ConfigurationError and keeps the old
        configuration when the result would be invalid."""
        with self._lock:
            candidate = {**self._config_data, key: value}
            self._api_config = self._build(candidate)
            self._config_data = candidate

    def validate(self) -> bool:
        try:
            with self._lock:
                self._build(self._config_data)
        except ConfigurationError as e:
            self.logger.error(f"Configuration validation failed: {e}")
            return False
        return True

    def reload(self) -> bool:
        """Re-read the file. Returns False and keeps the current
        configuration when the file is unreadable or invalid."""
        try:
            new_data = self._read_file()
            new_config = self._build(new_data)
        except ConfigurationError as e:
            self.logger.error(f"Configuration reload rejected: {e}")
            return False

        with self._lock:
            self._config_data = new_data
            self._api_config = new_config

        self.logger.info("Configuration reloaded", path=str(self.config_file_path))
        self._notify(new_data)
        return True

    def add_change_callback(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        self._change_callbacks.append(callback)

    def start_hot_reload(self) -> None:
        """Watch the configuration file's directory for edits."""
        if self._observer is not None:
            return

        if not self.config_file_path.exists():
            self.logger.warning("Configuration file does not exist, hot-reload disabled",
                                path=str(self.config_file_path))
            return

        observer = Observer()
        observer.schedule(
            ConfigurationFileHandler(self),
            str(self.config_file_path.resolve().parent),
            recursive=False
        )
        observer.start()
        self._observer = observer

        self.logger.info("Started configuration hot-reload", path=str(self.config_file_path))

    def stop_hot_reload(self) -> None:
        observer, self._observer = self._observer, None
        if observer is None:
            return

        observer.stop()
        observer.join()
        self.logger.info("Stopped configuration hot-reload")

    def _load(self) -> None:
        if self.config_file_path.exists():
            data = self._read_file()
        else:
            self.logger.info("Configuration file not found, writing defaults",
                             path=str(self.config_file_path))
            data = UsersApiConfiguration().to_dict()
            self._write_file(data)

        self._api_config = self._build(data)
        self._config_data = data

    def _build(self, data: Dict[str, Any]) -> UsersApiConfiguration:
        try:
            return UsersApiConfiguration.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                {'path': str(self.config_file_path)}
            ) from e

    def _read_file(self) -> Dict[str, Any]:
        context = {'path': str(self.config_file_path)}
        try:
            with open(self.config_file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON: {e}", context) from e
        except OSError as e:
            raise ConfigurationError(f"Unable to read configuration file: {e}", context) from e

        if not isinstance(data, dict):
            raise ConfigurationError("Configuration file must hold a JSON object", context)
        return data

    def _write_file(self, data: Dict[str, Any]) -> None:
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=4)
        except OSError as e:
            self.logger.error(f"Failed to save configuration: {e}",
                              path=str(self.config_file_path))

    def _notify(self, data: Dict[str, Any]) -> None:
        for callback in self._change_callbacks:
            try:
                callback(data.copy())
            except Exception as e:
                self.logger.error(f"Configuration change callback failed: {e}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop_hot_reload()
