"""
Settings store facade.

``SettingsStore`` is what the rest of an application talks to. It holds
the one backend chosen at construction and forwards every call to it, so
callers never care whether sessions live in the structured store or in
files.

Handles may be None (a failed open). Setters then do nothing and getters
return the default, so one missing setting never aborts loading a
configuration.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional

from .backends import (
    SessionCursor,
    SettingsBackend,
    SettingsReader,
    SettingsWriter,
    canonical_session_name,
)
from .errors import RecentListError
from .types import BackendType, FontSpec, SettingValue

if TYPE_CHECKING:
    from .recent import RecentList

logger = logging.getLogger(__name__)

INT_MIN = -(2 ** 31)


class SettingsStore:
    """Backend independent access to saved sessions."""

    def __init__(self, backend: SettingsBackend, recent: Optional["RecentList"] = None):
        self._backend = backend
        self._recent = recent

    @property
    def backend(self) -> SettingsBackend:
        return self._backend

    @property
    def kind(self) -> BackendType:
        return self._backend.kind

    # Writing

    def open_write(self, session_name: Optional[str]) -> SettingsWriter:
        """Open a session for writing. Raises BackendUnavailableError."""
        return self._backend.open_write(session_name)

    def set(self, handle: Optional[SettingsWriter], key: str, value: SettingValue) -> None:
        if handle is not None:
            handle.set(key, value)

    def close_write(self, handle: Optional[SettingsWriter]) -> None:
        """Flush and release a write handle. Raises PersistenceError."""
        if handle is not None:
            handle.close()

    # Reading

    def open_read(self, session_name: Optional[str]) -> Optional[SettingsReader]:
        return self._backend.open_read(session_name)

    def get_string(self, handle: Optional[SettingsReader], key: str) -> Optional[str]:
        if handle is None:
            return None
        return handle.get_string(key)

    def get_int(self, handle: Optional[SettingsReader], key: str, default: int) -> int:
        if handle is None:
            return default
        return handle.get_int(key, default)

    def close_read(self, handle: Optional[SettingsReader]) -> None:
        if handle is not None:
            handle.close()

    def session_exists(self, session_name: str) -> bool:
        handle = self.open_read(session_name)
        if handle is None:
            return False
        handle.close()
        return True

    # Composite settings

    def get_fontspec(self, handle: Optional[SettingsReader], name: str) -> Optional[FontSpec]:
        """Read a font stored as four sub-settings; all four must be present."""
        fontname = self.get_string(handle, name)
        if fontname is None:
            return None
        isbold = self.get_int(handle, name + "IsBold", -1)
        if isbold == -1:
            return None
        charset = self.get_int(handle, name + "CharSet", -1)
        if charset == -1:
            return None
        height = self.get_int(handle, name + "Height", INT_MIN)
        if height == INT_MIN:
            return None
        return FontSpec(name=fontname, isbold=isbold, height=height, charset=charset)

    def set_fontspec(self, handle: Optional[SettingsWriter], name: str, font: FontSpec) -> None:
        self.set(handle, name, font.name)
        self.set(handle, name + "IsBold", font.isbold)
        self.set(handle, name + "CharSet", font.charset)
        self.set(handle, name + "Height", font.height)

    def get_filename(self, handle: Optional[SettingsReader], name: str) -> Optional[Path]:
        text = self.get_string(handle, name)
        return None if text is None else Path(text)

    def set_filename(self, handle: Optional[SettingsWriter], name: str, path: Path) -> None:
        self.set(handle, name, str(path))

    # Deleting

    def delete(self, session_name: Optional[str]) -> None:
        session_name = canonical_session_name(session_name)
        self._backend.delete(session_name)
        if self.kind == BackendType.REGISTRY and self._recent is not None:
            try:
                self._recent.remove_entry(session_name)
            except RecentListError as exc:
                logger.warning(f"Could not update recent sessions after deleting {session_name!r}: {exc}")

    # Enumeration

    def enumerate_start(self) -> SessionCursor:
        return self._backend.enumerate_start()

    def enumerate_next(self, cursor: Optional[SessionCursor]) -> Optional[str]:
        if cursor is None:
            return None
        return cursor.next()

    def enumerate_finish(self, cursor: Optional[SessionCursor]) -> None:
        if cursor is not None:
            cursor.finish()

    def iter_sessions(self) -> Iterator[str]:
        """Yield every stored session name once."""
        cursor = self.enumerate_start()
        try:
            yield from cursor
        finally:
            cursor.finish()
