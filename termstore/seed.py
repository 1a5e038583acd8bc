"""
Random seed file location.

The seed is a single file that may live in one of several places. They
are tried in a fixed order, separately for reading and for writing, so a
seed read from an old location gets written to the best location that
currently accepts it:

1. the path stored in the structured store (``RandSeedFile``), or for the
   file backend the configured seed file when no such value is set
2. the per-user local application data directory
3. the per-user roaming application data directory
4. ``%HOMEDRIVE%%HOMEPATH%``
5. the system directory

Deleting removes the seed from every location.
"""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Callable, List, Mapping, Optional

import platformdirs

from .hive import Hive, ValueType
from .reporting import ErrorReporter, log_reporter
from .types import SeedIntent

logger = logging.getLogger(__name__)

SEED_PATH_VALUE = "RandSeedFile"
MAX_PATH = 260
CHUNK_SIZE = 1024


class SeedLocator:
    """Finds, opens and deletes the random seed file."""

    def __init__(
        self,
        hive: Hive,
        root: str,
        filename: str = "PUTTY.RND",
        fallback_override: Optional[Path] = None,
        reporter: ErrorReporter = log_reporter,
        environ: Optional[Mapping[str, str]] = None,
        local_dir: Optional[Path] = None,
        roaming_dir: Optional[Path] = None,
        system_dir: Optional[Path] = None,
    ):
        self._hive = hive
        self._root = root
        self._filename = filename
        self._fallback_override = fallback_override
        self._reporter = reporter
        self._environ = os.environ if environ is None else environ
        self._local_dir = local_dir
        self._roaming_dir = roaming_dir
        self._system_dir = system_dir

    def _override_path(self) -> Optional[Path]:
        key = self._hive.open_key(self._root)
        if key is not None:
            with key:
                value = key.query_value(SEED_PATH_VALUE)
            if value is not None and value.type == ValueType.SZ and value.data:
                return Path(str(value.data))
        return self._fallback_override

    def _home_path(self) -> Optional[Path]:
        drive = self._environ.get("HOMEDRIVE", "")
        path = self._environ.get("HOMEPATH", "")
        # An empty drive is fine, an empty or overlong path is not.
        if len(drive) >= MAX_PATH or not 0 < len(path) < MAX_PATH:
            return None
        return Path(drive + path) / self._filename

    def _default_system_dir(self) -> Path:
        windir = self._environ.get("SystemRoot") or self._environ.get("windir")
        if windir:
            return Path(windir)
        return Path(platformdirs.site_data_dir())

    def candidate_paths(self) -> List[Path]:
        """Every place the seed may live, best first."""
        candidates: List[Optional[Path]] = [self._override_path()]

        local_dir = self._local_dir or Path(platformdirs.user_data_dir(roaming=False))
        roaming_dir = self._roaming_dir or Path(platformdirs.user_data_dir(roaming=True))
        candidates.append(local_dir / self._filename)
        candidates.append(roaming_dir / self._filename)
        candidates.append(self._home_path())

        system_dir = self._system_dir or self._default_system_dir()
        if len(str(system_dir)) < MAX_PATH:
            candidates.append(system_dir / self._filename)

        return [path for path in candidates if path is not None]

    def resolve(self, intent: SeedIntent) -> Optional[BinaryIO]:
        """Open the seed for reading or writing, or delete it everywhere.

        Returns the open file for READ/WRITE, None when no location works
        and always None for DELETE.
        """
        for path in self.candidate_paths():
            handle = self._try(path, intent)
            if handle is not None:
                logger.debug(f"Random seed {intent.value}: {path}")
                return handle
        return None

    def _try(self, path: Path, intent: SeedIntent) -> Optional[BinaryIO]:
        if intent == SeedIntent.DELETE:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.warning(f"Unable to delete '{path}': {exc}")
                self._reporter(f"Unable to delete '{path}'", str(exc))
            return None

        try:
            return open(path, "wb" if intent == SeedIntent.WRITE else "rb")
        except OSError:
            return None

    def read_random_seed(self, consumer: Callable[[bytes], None]) -> bool:
        """Feed the seed to ``consumer`` in chunks. False if none was found."""
        handle = self.resolve(SeedIntent.READ)
        if handle is None:
            return False
        with handle:
            while True:
                chunk = handle.read(CHUNK_SIZE)
                if not chunk:
                    break
                consumer(chunk)
        return True

    def write_random_seed(self, data: bytes) -> bool:
        """Replace the seed. False if no location accepted it."""
        handle = self.resolve(SeedIntent.WRITE)
        if handle is None:
            logger.warning("No writable location for the random seed")
            return False
        with handle:
            try:
                handle.write(data)
            except OSError as exc:
                logger.warning(f"Unable to write random seed: {exc}")
                return False
        return True

    def delete_everywhere(self) -> None:
        self.resolve(SeedIntent.DELETE)
