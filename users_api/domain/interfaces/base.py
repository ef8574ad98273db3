"""
Base interfaces and abstract classes for the domain layer.
"""

from abc import ABC
from typing import Any, Protocol


class ILogger(Protocol):
    """Logger interface for dependency injection."""

    def debug(self, message: str, **kwargs: Any) -> None: ...
    def info(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def critical(self, message: str, **kwargs: Any) -> None: ...


class ILoggerAdapter(Protocol):
    """Templated logging interface consumed by application services.

    Templates use positional ``str.format`` placeholders; arguments are
    passed separately so implementations can keep them structured.
    """

    def log_information(self, template: str, *args: Any) -> None: ...
    def log_error(self, exception: BaseException, template: str, *args: Any) -> None: ...


class ValueObject(ABC):
    """Base class for value objects."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.__dict__.items())))
