"""Settings backend on top of a hierarchical store.

Layout below the configured root::

    <root>\\Sessions\\<escaped session name>   one key per session,
                                             one typed value per setting
"""

import logging
from typing import Optional

from ..codec import escape_key, unescape_key
from ..errors import BackendUnavailableError, HiveError
from ..hive import Hive, HiveKey, RegValue, ValueType, join_path
from ..types import BackendType, SettingValue
from ._base import (
    SessionCursor,
    SettingsBackend,
    SettingsReader,
    SettingsWriter,
    canonical_session_name,
)

logger = logging.getLogger(__name__)


class RegistryWriter(SettingsWriter):
    """Writes go straight to the open session key."""

    def __init__(self, key: HiveKey):
        self._key = key

    def set(self, key: str, value: SettingValue) -> None:
        if isinstance(value, int):
            reg_value = RegValue.dword(int(value))
        else:
            reg_value = RegValue.sz(value)
        try:
            self._key.set_value(key, reg_value)
        except HiveError as exc:
            logger.warning(f"Failed to write setting {key!r}: {exc}")

    def close(self) -> None:
        self._key.close()


class RegistryReader(SettingsReader):
    """Typed lookups; a value of the wrong type counts as missing."""

    def __init__(self, key: HiveKey):
        self._key = key

    def get_string(self, key: str) -> Optional[str]:
        value = self._key.query_value(key)
        if value is None or value.type != ValueType.SZ:
            return None
        return str(value.data)

    def get_int(self, key: str, default: int) -> int:
        value = self._key.query_value(key)
        if value is None or value.type != ValueType.DWORD:
            return default
        return int(value.data)

    def close(self) -> None:
        self._key.close()


class RegistryCursor(SessionCursor):

    def __init__(self, key: Optional[HiveKey]):
        self._key = key
        self._index = 0

    def next(self) -> Optional[str]:
        if self._key is None:
            return None
        name = self._key.subkey_at(self._index)
        if name is None:
            return None
        self._index += 1
        return unescape_key(name)

    def finish(self) -> None:
        if self._key is not None:
            self._key.close()
            self._key = None


class RegistryBackend(SettingsBackend):
    """Sessions as keys of a Hive."""

    kind = BackendType.REGISTRY

    def __init__(self, hive: Hive, root: str):
        self._hive = hive
        self._root = root

    @property
    def sessions_path(self) -> str:
        return join_path(self._root, "Sessions")

    def open_write(self, session_name: Optional[str]) -> SettingsWriter:
        encoded = escape_key(canonical_session_name(session_name))
        try:
            parent = self._hive.create_key(self.sessions_path)
        except HiveError as exc:
            raise BackendUnavailableError(
                f"Unable to create registry key\nHKEY_CURRENT_USER\\{self.sessions_path}"
            ) from exc
        parent.close()

        path = join_path(self.sessions_path, encoded)
        try:
            key = self._hive.create_key(path)
        except HiveError as exc:
            raise BackendUnavailableError(
                f"Unable to create registry key\nHKEY_CURRENT_USER\\{path}"
            ) from exc
        return RegistryWriter(key)

    def open_read(self, session_name: Optional[str]) -> Optional[SettingsReader]:
        encoded = escape_key(canonical_session_name(session_name))
        key = self._hive.open_key(join_path(self.sessions_path, encoded))
        if key is None:
            return None
        return RegistryReader(key)

    def delete(self, session_name: Optional[str]) -> None:
        parent = self._hive.open_key(self.sessions_path)
        if parent is None:
            return
        with parent:
            if not parent.delete_subkey(escape_key(canonical_session_name(session_name))):
                logger.debug(f"No registry session to delete: {session_name!r}")

    def enumerate_start(self) -> SessionCursor:
        return RegistryCursor(self._hive.open_key(self.sessions_path))
