"""
Termstore type definitions.

This module contains the public enums and value types shared by the
storage facilities.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

# A single stored setting: text or a 32-bit signed integer.
SettingValue = Union[str, int]

DEFAULT_SESSION = "Default Settings"


class BackendType(Enum):
    """Which persistence backend a Storage dispatches to."""
    REGISTRY = "registry"
    FILE = "file"


class KeyStatus(Enum):
    """Outcome of a host key verification."""
    MATCH = "match"
    ABSENT = "absent"
    MISMATCH = "mismatch"


class SeedIntent(Enum):
    """What the caller wants to do with the random seed file."""
    READ = "read"
    WRITE = "write"
    DELETE = "delete"


class Confirmation(Enum):
    """Answer from the confirmation collaborator.

    For host key migration: AFFIRM moves the key to a file, DECLINE copies
    it and CANCEL leaves everything as it is.
    """
    AFFIRM = "affirm"
    DECLINE = "decline"
    CANCEL = "cancel"


@dataclass
class FontSpec:
    """Font setting stored as four sub-settings."""
    name: str
    isbold: int = 0
    height: int = 10
    charset: int = 0


@dataclass
class StorePaths:
    """Locations used by the file backend."""
    sessions: Path
    host_keys: Path
    seed_file: Path
    session_suffix: str = ""
    key_suffix: str = ""

    @classmethod
    def beside(cls, directory: Path) -> "StorePaths":
        """Default layout: everything next to the given directory."""
        return cls(
            sessions=directory / "sessions",
            host_keys=directory / "sshhostkeys",
            seed_file=directory / "putty.rnd",
        )
