"""
Termstore: persistent configuration store for a terminal/SSH client.

Saves and loads named session profiles, cached host keys, the random seed
and the recent session list, either in a registry-like hierarchical store
or in plain files (one file per session, one per host key).

Basic Usage:
    from termstore import Storage, StoreConfig, BackendType

    storage = Storage(StoreConfig(backend=BackendType.FILE))
    settings = storage.settings

    handle = settings.open_write("My Server")
    settings.set(handle, "HostName", "example.com")
    settings.set(handle, "PortNumber", 22)
    settings.close_write(handle)

    handle = settings.open_read("My Server")
    print(settings.get_string(handle, "HostName"))
    settings.close_read(handle)

Host Keys:
    status = storage.host_keys.verify("example.com", 22, "ssh-ed25519", key)
    if status is KeyStatus.ABSENT:
        storage.host_keys.store("example.com", 22, "ssh-ed25519", key)
"""

__version__ = "0.2.0"

# Backends
from .backends import (
    FileBackend,
    RegistryBackend,
    SessionCursor,
    SettingsBackend,
    SettingsReader,
    SettingsWriter,
)

# Name encoding
from .codec import escape_filename, escape_key, unescape_filename, unescape_key

# Configuration
from .config import StoreConfig

# Errors
from .errors import (
    BackendUnavailableError,
    ConfigError,
    HiveError,
    PersistenceError,
    RecentListError,
    StoreError,
)

# Structured store
from .hive import Hive, MemoryHive, WinregHive, YamlHive, open_hive

# Facilities
from .hostkeys import HostKeyVault, permute_legacy_digits, transcode_legacy_key
from .recent import RecentList
from .seed import SeedLocator
from .storage import Storage
from .store import SettingsStore

# Type definitions
from .types import (
    DEFAULT_SESSION,
    BackendType,
    Confirmation,
    FontSpec,
    KeyStatus,
    SeedIntent,
    StorePaths,
)

__all__ = [
    # Version
    "__version__",
    # Main classes
    "Storage",
    "SettingsStore",
    "HostKeyVault",
    "RecentList",
    "SeedLocator",
    # Configuration
    "StoreConfig",
    # Types
    "DEFAULT_SESSION",
    "BackendType",
    "Confirmation",
    "FontSpec",
    "KeyStatus",
    "SeedIntent",
    "StorePaths",
    # Backends
    "SettingsBackend",
    "SettingsReader",
    "SettingsWriter",
    "SessionCursor",
    "FileBackend",
    "RegistryBackend",
    # Structured store
    "Hive",
    "MemoryHive",
    "YamlHive",
    "WinregHive",
    "open_hive",
    # Codec
    "escape_key",
    "unescape_key",
    "escape_filename",
    "unescape_filename",
    "permute_legacy_digits",
    "transcode_legacy_key",
    # Errors
    "StoreError",
    "BackendUnavailableError",
    "PersistenceError",
    "RecentListError",
    "HiveError",
    "ConfigError",
]
