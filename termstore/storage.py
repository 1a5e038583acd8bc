"""
Storage: wires every facility to one configuration.

Usage:
    from termstore import Storage, StoreConfig

    storage = Storage(StoreConfig.load("termstore.yaml"))
    handle = storage.settings.open_write("My Server")
    storage.settings.set(handle, "HostName", "example.com")
    storage.settings.close_write(handle)
    storage.recent.add_entry("My Server")
"""

import logging
from typing import Optional

from .backends import get_backend
from .config import StoreConfig
from .hive import Hive, open_hive
from .hostkeys import HostKeyVault
from .recent import RecentList
from .reporting import ConfirmCallback, ErrorReporter, cancel_all, log_reporter
from .seed import SeedLocator
from .store import SettingsStore
from .types import BackendType

logger = logging.getLogger(__name__)


class Storage:
    """Settings, host keys, recent sessions and the random seed.

    The backend is fixed at construction; two Storage objects with
    different backends can live side by side in one process.
    """

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        hive: Optional[Hive] = None,
        confirm: ConfirmCallback = cancel_all,
        reporter: ErrorReporter = log_reporter,
    ):
        self.config = config or StoreConfig()
        self.hive = hive if hive is not None else open_hive(self.config)
        self.paths = self.config.get_paths()
        root = self.config.registry_root
        kind = self.config.backend

        backend = get_backend(kind, self.hive, root, self.paths, reporter)
        self.recent = RecentList(self.hive, root, lambda name: self.settings.session_exists(name))
        self.settings = SettingsStore(backend, recent=self.recent)
        self.host_keys = HostKeyVault(kind, self.hive, root, self.paths, confirm, reporter)
        self.seed = SeedLocator(
            self.hive,
            root,
            filename=self.config.seed_filename,
            fallback_override=self.paths.seed_file if kind == BackendType.FILE else None,
            reporter=reporter,
        )
        logger.debug(f"Storage ready (backend: {kind.value})")

    @property
    def backend_type(self) -> BackendType:
        return self.config.backend

    def cleanup_all(self) -> None:
        """Remove the random seed everywhere and the whole structured store tree.

        Session and host key files of the file backend are left alone.
        """
        self.seed.delete_everywhere()
        self.hive.delete_tree(self.config.registry_root)
        logger.info(f"Removed {self.config.registry_root} and all random seed files")
