"""Hierarchical key-value stores used by the registry backend.

Usage:
    from termstore.hive import open_hive

    hive = open_hive(config)
    with hive.create_key("Software\\\\SimonTatham\\\\PuTTY\\\\Sessions") as key:
        ...
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ._base import Hive, HiveKey, RegValue, ValueType, join_path, split_path
from ._memory import MemoryHive, YamlHive
from ._winreg import WinregHive

if TYPE_CHECKING:
    from ..config import StoreConfig

__all__ = [
    "Hive",
    "HiveKey",
    "RegValue",
    "ValueType",
    "MemoryHive",
    "YamlHive",
    "WinregHive",
    "join_path",
    "split_path",
    "open_hive",
    "default_hive_file",
]


def default_hive_file() -> Path:
    return Path.home() / ".config" / "termstore" / "hive.yaml"


def open_hive(config: "StoreConfig") -> Hive:
    """Pick the hive for a configuration.

    An explicit hive file always wins. Otherwise Windows gets the real
    registry and every other platform a YAML file in the user config dir.
    """
    if config.hive_file:
        return YamlHive(Path(config.hive_file).expanduser())
    if sys.platform == "win32":
        return WinregHive()
    return YamlHive(default_hive_file())
