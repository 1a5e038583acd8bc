"""Windows registry hive (HKEY_CURRENT_USER) using winreg."""

import logging
import sys
from typing import Optional

from ..errors import HiveError
from ._base import Hive, HiveKey, RegValue, ValueType

if sys.platform == "win32":
    import winreg

logger = logging.getLogger(__name__)

REG_RESERVED_ALWAYS_ZERO = 0


def _to_signed(number: int) -> int:
    number &= 0xFFFFFFFF
    return number - 0x100000000 if number & 0x80000000 else number


def _blob_to_list(blob: str) -> list:
    items = []
    for part in blob.split("\0"):
        if not part:
            break
        items.append(part)
    return items


class WinregHiveKey(HiveKey):

    def __init__(self, handle: "winreg.HKEYType"):
        self._handle = handle

    def query_value(self, name: str) -> Optional[RegValue]:
        try:
            data, kind = winreg.QueryValueEx(self._handle, name)
        except OSError:
            return None

        if kind == winreg.REG_SZ:
            return RegValue.sz(str(data))
        elif kind == winreg.REG_DWORD:
            return RegValue.dword(_to_signed(int(data)))
        elif kind == winreg.REG_MULTI_SZ:
            return RegValue.multi_sz("".join(f"{item}\0" for item in data) + "\0")

        logger.debug(f"registry value {name!r} has unsupported type {kind}")
        return None

    def set_value(self, name: str, value: RegValue) -> None:
        if value.type == ValueType.SZ:
            kind, data = winreg.REG_SZ, value.data
        elif value.type == ValueType.DWORD:
            kind, data = winreg.REG_DWORD, int(value.data) & 0xFFFFFFFF
        else:
            kind, data = winreg.REG_MULTI_SZ, _blob_to_list(str(value.data))
        try:
            winreg.SetValueEx(self._handle, name, REG_RESERVED_ALWAYS_ZERO, kind, data)
        except OSError as exc:
            raise HiveError(f"Unable to set registry value {name!r}: {exc}") from exc

    def delete_value(self, name: str) -> bool:
        try:
            winreg.DeleteValue(self._handle, name)
        except OSError:
            return False
        return True

    def subkey_at(self, index: int) -> Optional[str]:
        try:
            return winreg.EnumKey(self._handle, index)
        except OSError:
            return None

    def delete_subkey(self, name: str) -> bool:
        try:
            winreg.DeleteKey(self._handle, name)
        except OSError:
            return False
        return True

    def close(self) -> None:
        self._handle.Close()


class WinregHive(Hive):
    """Keys below HKEY_CURRENT_USER."""

    def __init__(self) -> None:
        if sys.platform != "win32":
            raise HiveError("The Windows registry is only available on Windows")

    def open_key(self, path: str) -> Optional[HiveKey]:
        try:
            return WinregHiveKey(winreg.OpenKey(winreg.HKEY_CURRENT_USER, path, 0, winreg.KEY_ALL_ACCESS))
        except OSError:
            return None

    def create_key(self, path: str) -> HiveKey:
        try:
            return WinregHiveKey(winreg.CreateKey(winreg.HKEY_CURRENT_USER, path))
        except OSError as exc:
            raise HiveError(f"Unable to create registry key HKEY_CURRENT_USER\\{path}") from exc
