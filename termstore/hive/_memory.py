"""In-process hive, plus a variant persisted to a YAML document."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..errors import HiveError
from ._base import Hive, HiveKey, RegValue, ValueType, split_path

logger = logging.getLogger(__name__)


class _Node:
    __slots__ = ("values", "children")

    def __init__(self) -> None:
        self.values: Dict[str, RegValue] = {}
        self.children: Dict[str, "_Node"] = {}


class MemoryHiveKey(HiveKey):
    """Handle on one node of a MemoryHive."""

    def __init__(self, hive: "MemoryHive", node: _Node):
        self._hive = hive
        self._node = node

    def query_value(self, name: str) -> Optional[RegValue]:
        return self._node.values.get(name)

    def set_value(self, name: str, value: RegValue) -> None:
        if value.type == ValueType.DWORD and not isinstance(value.data, int):
            raise HiveError(f"DWORD value {name!r} must be an integer")
        if value.type != ValueType.DWORD and not isinstance(value.data, str):
            raise HiveError(f"{value.type.value} value {name!r} must be text")
        self._node.values[name] = value
        self._hive._changed()

    def delete_value(self, name: str) -> bool:
        if self._node.values.pop(name, None) is None:
            return False
        self._hive._changed()
        return True

    def subkey_at(self, index: int) -> Optional[str]:
        names = list(self._node.children)
        if 0 <= index < len(names):
            return names[index]
        return None

    def delete_subkey(self, name: str) -> bool:
        child = self._node.children.get(name)
        if child is None or child.children:
            return False
        del self._node.children[name]
        self._hive._changed()
        return True


class MemoryHive(Hive):
    """Hive kept entirely in memory."""

    def __init__(self) -> None:
        self._root = _Node()

    def _walk(self, path: str, create: bool) -> Optional[_Node]:
        node = self._root
        for part in split_path(path):
            child = node.children.get(part)
            if child is None:
                if not create:
                    return None
                child = node.children[part] = _Node()
            node = child
        return node

    def open_key(self, path: str) -> Optional[HiveKey]:
        node = self._walk(path, create=False)
        return None if node is None else MemoryHiveKey(self, node)

    def create_key(self, path: str) -> HiveKey:
        before = self._walk(path, create=False)
        node = self._walk(path, create=True)
        if before is None:
            self._changed()
        return MemoryHiveKey(self, node)

    def _changed(self) -> None:
        """Hook called after every mutation."""

    # Serialization helpers shared with YamlHive

    def to_dict(self) -> Dict[str, Any]:
        return _node_to_dict(self._root)

    def load_dict(self, data: Dict[str, Any]) -> None:
        self._root = _node_from_dict(data)


def _node_to_dict(node: _Node) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if node.values:
        out["values"] = {
            name: {"type": value.type.value, "data": value.data}
            for name, value in node.values.items()
        }
    if node.children:
        out["keys"] = {name: _node_to_dict(child) for name, child in node.children.items()}
    return out


def _node_from_dict(data: Any) -> _Node:
    node = _Node()
    if not isinstance(data, dict):
        return node
    for name, raw in (data.get("values") or {}).items():
        try:
            node.values[str(name)] = RegValue(ValueType(raw["type"]), raw["data"])
        except (KeyError, TypeError, ValueError):
            logger.warning(f"Skipping malformed hive value {name!r}")
    for name, child in (data.get("keys") or {}).items():
        node.children[str(name)] = _node_from_dict(child)
    return node


class YamlHive(MemoryHive):
    """Hive persisted to a YAML file after every change.

    Stands in for the Windows registry on other platforms. A missing or
    unreadable file starts an empty hive.
    """

    def __init__(self, path: Path):
        super().__init__()
        self._path = Path(path)
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as exc:
            logger.warning(f"Ignoring unreadable hive file {self._path}: {exc}")
            return
        self.load_dict(data)

    def _changed(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True)
        except OSError as exc:
            raise HiveError(f"Unable to write hive file {self._path}: {exc}") from exc
