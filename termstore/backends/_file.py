"""Settings backend keeping one flat file per session.

Session ``name`` lives in ``<sessions dir>/<escape_filename(escape_key(name))><suffix>``
using the record format from ``termstore.records``. Write handles collect
settings in memory and only touch the disk on close; read handles load and
parse the whole file once.
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, List, Optional

from ..codec import MAX_VALUE_LENGTH, escape_key, session_filename, unescape_key
from ..errors import PersistenceError
from ..records import Record, parse_records, serialize_records
from ..reporting import ErrorReporter, log_reporter
from ..types import DEFAULT_SESSION, BackendType, SettingValue, StorePaths
from ._base import (
    SessionCursor,
    SettingsBackend,
    SettingsReader,
    SettingsWriter,
    canonical_session_name,
)

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"-?[0-9]+")


class FileWriter(SettingsWriter):
    """Accumulates settings; last write per key wins."""

    def __init__(self, path: Path, reporter: ErrorReporter):
        self._path = path
        self._reporter = reporter
        self._items: Dict[str, str] = {}
        self._closed = False

    @property
    def path(self) -> Path:
        return self._path

    def set(self, key: str, value: SettingValue) -> None:
        self._items[key] = str(int(value)) if isinstance(value, int) else value

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._flush()
        finally:
            self._items.clear()

    def _flush(self) -> None:
        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self._reporter("Unable to create directory for storing sessions", str(directory))
            raise PersistenceError("Unable to create directory for storing sessions", str(directory)) from exc

        data = serialize_records(self._items.items()).encode("ascii")
        try:
            with open(self._path, "wb") as f:
                f.write(data)
        except OSError as exc:
            self._reporter("Unable to save settings", str(self._path))
            raise PersistenceError("Unable to save settings", str(self._path)) from exc
        logger.debug(f"Saved {len(self._items)} setting(s) to {self._path}")


class FileReader(SettingsReader):
    """Parsed session file; keys and values stay encoded until looked up."""

    def __init__(self, records: List[Record]):
        self._records = records

    def _lookup(self, key: str) -> Optional[str]:
        wanted = escape_key(key)
        for stored_key, stored_value in self._records:
            if stored_key == wanted:
                return unescape_key(stored_value, limit=MAX_VALUE_LENGTH)
        return None

    def get_string(self, key: str) -> Optional[str]:
        return self._lookup(key)

    def get_int(self, key: str, default: int) -> int:
        text = self._lookup(key)
        if text is None:
            return default
        text = text.strip()
        if not _DECIMAL.fullmatch(text):
            return default
        return int(text)

    def close(self) -> None:
        self._records = []


class FileCursor(SessionCursor):
    """Walks the sessions directory, skipping directories and dot files."""

    def __init__(self, directory: Path, suffix: str):
        self._suffix = suffix
        try:
            self._entries = os.scandir(directory)
        except OSError:
            logger.debug(f"No sessions directory at {directory}")
            self._entries = None

    def next(self) -> Optional[str]:
        if self._entries is None:
            return None
        for entry in self._entries:
            try:
                if entry.is_dir():
                    continue
            except OSError:
                continue
            filename = entry.name
            if filename.startswith("."):
                continue
            if self._suffix:
                if not filename.endswith(self._suffix):
                    continue
                filename = filename[:-len(self._suffix)]
            name = unescape_key(filename)
            if not name or name.startswith("."):
                continue
            return name
        return None

    def finish(self) -> None:
        if self._entries is not None:
            self._entries.close()
            self._entries = None


class FileBackend(SettingsBackend):
    """Sessions as files.

    The default session is looked up in the sessions directory first and,
    when no file exists for it, in the structured store, so a default
    session saved before switching to files keeps working.
    """

    kind = BackendType.FILE

    def __init__(
        self,
        paths: StorePaths,
        structured: SettingsBackend,
        reporter: ErrorReporter = log_reporter,
    ):
        self._paths = paths
        self._structured = structured
        self._reporter = reporter

    @property
    def paths(self) -> StorePaths:
        return self._paths

    def session_path(self, session_name: str) -> Path:
        return self._paths.sessions / session_filename(session_name, self._paths.session_suffix)

    def open_write(self, session_name: Optional[str]) -> SettingsWriter:
        return FileWriter(self.session_path(canonical_session_name(session_name)), self._reporter)

    def open_read(self, session_name: Optional[str]) -> Optional[SettingsReader]:
        name = canonical_session_name(session_name)
        path = self.session_path(name)

        if name == DEFAULT_SESSION and not path.is_file():
            return self._structured.open_read(name)

        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as exc:
            logger.debug(f"Unable to read session from file {path}: {exc}")
            return None

        return FileReader(parse_records(data.decode("utf-8", errors="replace")))

    def delete(self, session_name: Optional[str]) -> None:
        path = self.session_path(canonical_session_name(session_name))
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"No session file to delete: {path}")
        except OSError as exc:
            logger.warning(f"Unable to delete {path}: {exc}")
            self._reporter("Unable to delete settings.", str(path))

    def enumerate_start(self) -> SessionCursor:
        return FileCursor(self._paths.sessions, self._paths.session_suffix)
