"""Settings backends: one capability interface, two variants.

Usage:
    from termstore.backends import get_backend

    backend = get_backend(BackendType.FILE, hive, root, paths)
    with backend.open_write("My Server") as w:
        w.set("HostName", "example.com")
"""

from typing import Optional

from ..hive import Hive
from ..reporting import ErrorReporter, log_reporter
from ..types import BackendType, StorePaths
from ._base import (
    SessionCursor,
    SettingsBackend,
    SettingsReader,
    SettingsWriter,
    canonical_session_name,
)
from ._file import FileBackend, FileCursor, FileReader, FileWriter
from ._registry import RegistryBackend, RegistryCursor, RegistryReader, RegistryWriter

__all__ = [
    "SessionCursor",
    "SettingsBackend",
    "SettingsReader",
    "SettingsWriter",
    "canonical_session_name",
    "FileBackend",
    "FileCursor",
    "FileReader",
    "FileWriter",
    "RegistryBackend",
    "RegistryCursor",
    "RegistryReader",
    "RegistryWriter",
    "get_backend",
]


def get_backend(
    kind: BackendType,
    hive: Hive,
    root: str,
    paths: Optional[StorePaths] = None,
    reporter: ErrorReporter = log_reporter,
) -> SettingsBackend:
    """Build the backend for ``kind``.

    The file backend wraps a registry backend on the same hive so it can
    fall back to it for the default session.
    """
    registry = RegistryBackend(hive, root)
    if kind == BackendType.REGISTRY:
        return registry
    if paths is None:
        raise ValueError("The file backend needs StorePaths")
    return FileBackend(paths, registry, reporter)
