"""Abstract base classes for settings backends and their handles."""

from abc import ABC, abstractmethod
from typing import Iterator, Optional

from ..types import DEFAULT_SESSION, BackendType, SettingValue


def canonical_session_name(name: Optional[str]) -> str:
    """Empty or missing session names mean the default session."""
    return name or DEFAULT_SESSION


class SettingsWriter(ABC):
    """Write handle for one session. Nothing is guaranteed stored until close()."""

    @abstractmethod
    def set(self, key: str, value: SettingValue) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def __enter__(self) -> "SettingsWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SettingsReader(ABC):
    """Read handle for one session."""

    @abstractmethod
    def get_string(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def get_int(self, key: str, default: int) -> int:
        ...

    def close(self) -> None:
        pass

    def __enter__(self) -> "SettingsReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class SessionCursor(ABC):
    """One-shot iterator over stored session names."""

    @abstractmethod
    def next(self) -> Optional[str]:
        """Next session name, or None once exhausted."""
        ...

    def finish(self) -> None:
        pass

    def __iter__(self) -> Iterator[str]:
        while True:
            name = self.next()
            if name is None:
                return
            yield name


class SettingsBackend(ABC):
    """Capability interface every persistence backend implements."""

    kind: BackendType

    @abstractmethod
    def open_write(self, session_name: Optional[str]) -> SettingsWriter:
        """Open a session for writing. Raises BackendUnavailableError."""
        ...

    @abstractmethod
    def open_read(self, session_name: Optional[str]) -> Optional[SettingsReader]:
        """Open a session for reading, or None if it does not exist."""
        ...

    @abstractmethod
    def delete(self, session_name: Optional[str]) -> None:
        ...

    @abstractmethod
    def enumerate_start(self) -> SessionCursor:
        ...
