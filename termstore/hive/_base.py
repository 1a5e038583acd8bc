"""Abstract interface for hierarchical (registry-like) key-value stores."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Union

SEPARATOR = "\\"


class ValueType(Enum):
    """Typed scalar kinds a hive value can hold."""
    SZ = "sz"              # text
    DWORD = "dword"        # 32-bit integer
    MULTI_SZ = "multi_sz"  # NUL-separated strings, held as one text blob


@dataclass(frozen=True)
class RegValue:
    type: ValueType
    data: Union[str, int]

    @classmethod
    def sz(cls, text: str) -> "RegValue":
        return cls(ValueType.SZ, text)

    @classmethod
    def dword(cls, number: int) -> "RegValue":
        return cls(ValueType.DWORD, number)

    @classmethod
    def multi_sz(cls, blob: str) -> "RegValue":
        return cls(ValueType.MULTI_SZ, blob)


def split_path(path: str) -> List[str]:
    """Split a backslash separated key path into its segments."""
    return [part for part in path.split(SEPARATOR) if part]


def join_path(*parts: str) -> str:
    return SEPARATOR.join(part.strip(SEPARATOR) for part in parts if part)


class HiveKey(ABC):
    """An open key. Must be closed; usable as a context manager."""

    @abstractmethod
    def query_value(self, name: str) -> Optional[RegValue]:
        """Return the named value, or None if it does not exist."""
        ...

    @abstractmethod
    def set_value(self, name: str, value: RegValue) -> None:
        """Create or replace a value. Raises HiveError on failure."""
        ...

    @abstractmethod
    def delete_value(self, name: str) -> bool:
        ...

    @abstractmethod
    def subkey_at(self, index: int) -> Optional[str]:
        """Name of the index-th child key, or None past the end."""
        ...

    @abstractmethod
    def delete_subkey(self, name: str) -> bool:
        """Delete a child key that has no children of its own."""
        ...

    def close(self) -> None:
        pass

    def subkeys(self) -> Iterator[str]:
        index = 0
        while True:
            name = self.subkey_at(index)
            if name is None:
                return
            yield name
            index += 1

    def __enter__(self) -> "HiveKey":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class Hive(ABC):
    """A tree of keys rooted at the current user's hive."""

    @abstractmethod
    def open_key(self, path: str) -> Optional[HiveKey]:
        """Open an existing key, or return None."""
        ...

    @abstractmethod
    def create_key(self, path: str) -> HiveKey:
        """Open a key, creating it and its parents. Raises HiveError."""
        ...

    def delete_tree(self, path: str) -> None:
        """Remove a key and everything below it. Missing keys are ignored."""
        key = self.open_key(path)
        if key is None:
            return
        with key:
            for name in list(key.subkeys()):
                self.delete_tree(join_path(path, name))
        parts = split_path(path)
        if not parts:
            return
        parent = self.open_key(join_path(*parts[:-1]))
        if parent is not None:
            with parent:
                parent.delete_subkey(parts[-1])
