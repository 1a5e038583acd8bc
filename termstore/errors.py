"""Exception hierarchy for termstore."""


class StoreError(Exception):
    """Base class for all storage errors."""


class BackendUnavailableError(StoreError):
    """The structured store root or the file store directory cannot be used."""


class PersistenceError(StoreError):
    """Writing data out failed; the save must be treated as lost."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message if path is None else f"{message}: {path}")
        self.path = path


class RecentListError(StoreError):
    """The recent session list could not be read or written."""


class HiveError(StoreError):
    """A structured store primitive failed."""


class ConfigError(StoreError):
    """Invalid configuration value."""
