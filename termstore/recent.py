"""
Recently used session list.

The list is one multi-string value in the structured store: each entry
followed by a NUL, the whole list closed by one more NUL. Every change
rebuilds the value from scratch and drops entries whose session no
longer opens, so stale names disappear the next time the list changes.
"""

import logging
from typing import Callable, List, Optional

from .errors import HiveError, RecentListError
from .hive import Hive, RegValue, ValueType, join_path

logger = logging.getLogger(__name__)

JUMPLIST_KEY = "Jumplist"
JUMPLIST_VALUE = "Recent sessions"


def parse_multi_sz(blob: str) -> List[str]:
    """Entries of a multi-string blob, up to the first empty string.

    A blob without the end marker is empty.
    """
    if "\0\0" not in blob:
        return []
    entries = blob.split("\0")
    return entries[:entries.index("")]


def build_multi_sz(entries: List[str]) -> str:
    if not entries:
        return "\0\0"
    return "".join(f"{entry}\0" for entry in entries) + "\0"


class RecentList:
    """Ordered, duplicate-free list of recently used session names."""

    def __init__(self, hive: Hive, root: str, session_exists: Callable[[str], bool]):
        self._hive = hive
        self._key_path = join_path(root, JUMPLIST_KEY)
        self._session_exists = session_exists

    def add_entry(self, name: str) -> List[str]:
        """Put ``name`` at the front, removing any older occurrence."""
        return self._transform(add=name, rem=name)

    def remove_entry(self, name: str) -> List[str]:
        return self._transform(add=None, rem=name)

    def get_entries(self) -> List[str]:
        """Current list; any failure yields an empty list."""
        try:
            return self._transform(add=None, rem=None)
        except RecentListError as exc:
            logger.warning(f"Recent session list unavailable: {exc}")
            return []

    def _transform(self, add: Optional[str], rem: Optional[str]) -> List[str]:
        try:
            key = self._hive.create_key(self._key_path)
        except HiveError as exc:
            raise RecentListError(f"Unable to open {self._key_path}") from exc

        with key:
            current = key.query_value(JUMPLIST_VALUE)
            if current is None:
                entries = []
            elif current.type != ValueType.MULTI_SZ:
                logger.debug("Recent session list has the wrong type, discarding it")
                if not key.delete_value(JUMPLIST_VALUE):
                    raise RecentListError("Unable to discard malformed recent session list")
                entries = []
            else:
                entries = parse_multi_sz(str(current.data))

            if add is None and rem is None:
                return entries

            rebuilt = [add] if add is not None else []
            for entry in entries:
                if entry == rem or entry in rebuilt:
                    continue
                if not self._session_exists(entry):
                    logger.debug(f"Dropping stale recent session {entry!r}")
                    continue
                rebuilt.append(entry)

            try:
                key.set_value(JUMPLIST_VALUE, RegValue.multi_sz(build_multi_sz(rebuilt)))
            except HiveError as exc:
                raise RecentListError("Unable to write recent session list") from exc
            return rebuilt
