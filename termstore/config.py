"""
Termstore configuration handling.

Provides YAML configuration loading and validation.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

from .errors import ConfigError
from .types import BackendType, StorePaths

DEFAULT_REGISTRY_ROOT = "Software\\SimonTatham\\PuTTY"
DEFAULT_SEED_FILENAME = "PUTTY.RND"
MAX_SUFFIX_LENGTH = 15


def program_dir() -> Path:
    """Directory of the running program; file store defaults live here."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return Path.cwd()


def resolve_path(value: str, base: Path) -> Path:
    """Expand ``~`` and environment variables; relative paths hang off base."""
    path = Path(os.path.expandvars(os.path.expanduser(value.strip())))
    if not path.is_absolute():
        path = base / path
    return path


@dataclass
class StoreConfig:
    """
    Termstore configuration.

    Can be loaded from a YAML file or created programmatically. Empty
    path fields mean "beside the running program".
    """
    backend: BackendType = BackendType.REGISTRY

    # File backend
    sessions_dir: str = ""
    host_keys_dir: str = ""
    seed_file: str = ""
    session_suffix: str = ""
    key_suffix: str = ""

    # Structured store
    registry_root: str = DEFAULT_REGISTRY_ROOT
    hive_file: str = ""

    # Random seed
    seed_filename: str = DEFAULT_SEED_FILENAME

    # Logging
    log_level: str = "INFO"
    log_file: str = ""
    log_format: str = "%(asctime)s %(name)s %(levelname)s %(message)s"
    log_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 3

    def __post_init__(self) -> None:
        if isinstance(self.backend, str):
            self.backend = _parse_backend(self.backend)
        for label, suffix in (("session_suffix", self.session_suffix), ("key_suffix", self.key_suffix)):
            if len(suffix) > MAX_SUFFIX_LENGTH:
                raise ConfigError(f"{label} is longer than {MAX_SUFFIX_LENGTH} characters: {suffix!r}")

    @classmethod
    def load(cls, path: str) -> "StoreConfig":
        """
        Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file

        Returns:
            StoreConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid YAML
            ConfigError: If a value is invalid
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreConfig":
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            StoreConfig instance
        """
        paths_cfg = data.get("paths", {}) or {}
        registry_cfg = data.get("registry", {}) or {}
        seed_cfg = data.get("seed", {}) or {}
        logging_cfg = data.get("logging", {}) or {}

        return cls(
            backend=_parse_backend(data.get("backend", "registry")),
            sessions_dir=str(paths_cfg.get("sessions", "") or ""),
            host_keys_dir=str(paths_cfg.get("host_keys", "") or ""),
            seed_file=str(paths_cfg.get("seed_file", "") or ""),
            session_suffix=str(paths_cfg.get("session_suffix", "") or ""),
            key_suffix=str(paths_cfg.get("key_suffix", "") or ""),
            registry_root=registry_cfg.get("root", DEFAULT_REGISTRY_ROOT),
            hive_file=str(registry_cfg.get("hive_file", "") or ""),
            seed_filename=seed_cfg.get("filename", DEFAULT_SEED_FILENAME),
            log_level=logging_cfg.get("level", "INFO"),
            log_file=logging_cfg.get("file", ""),
            log_format=logging_cfg.get("format", "%(asctime)s %(name)s %(levelname)s %(message)s"),
            log_max_bytes=logging_cfg.get("max_bytes", 10485760),
            log_backup_count=logging_cfg.get("backup_count", 3),
        )

    def get_paths(self) -> StorePaths:
        """
        Resolve the file backend locations.

        Returns:
            StorePaths with absolute directories and the two suffixes
        """
        base = program_dir()
        defaults = StorePaths.beside(base)
        return StorePaths(
            sessions=resolve_path(self.sessions_dir, base) if self.sessions_dir else defaults.sessions,
            host_keys=resolve_path(self.host_keys_dir, base) if self.host_keys_dir else defaults.host_keys,
            seed_file=resolve_path(self.seed_file, base) if self.seed_file else defaults.seed_file,
            session_suffix=self.session_suffix,
            key_suffix=self.key_suffix,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        return {
            "backend": self.backend.value,
            "paths": {
                "sessions": self.sessions_dir,
                "host_keys": self.host_keys_dir,
                "seed_file": self.seed_file,
                "session_suffix": self.session_suffix,
                "key_suffix": self.key_suffix,
            },
            "registry": {
                "root": self.registry_root,
                "hive_file": self.hive_file,
            },
            "seed": {
                "filename": self.seed_filename,
            },
            "logging": {
                "level": self.log_level,
                "file": self.log_file,
                "format": self.log_format,
                "max_bytes": self.log_max_bytes,
                "backup_count": self.log_backup_count,
            },
        }

    def save(self, path: str) -> None:
        """
        Save configuration to a YAML file.

        Args:
            path: Path to save the configuration file
        """
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, allow_unicode=True)


def _parse_backend(value: Any) -> BackendType:
    if isinstance(value, BackendType):
        return value
    try:
        return BackendType(str(value).lower())
    except ValueError:
        raise ConfigError(f"Unknown backend: {value!r}") from None
