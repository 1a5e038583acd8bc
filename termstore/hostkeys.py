"""
Cached host keys.

Each key is identified by ``"{keytype}@{port}:" + escape_key(hostname)``.
The registry backend keeps them as text values under ``<root>\\SshHostKeys``;
the file backend keeps one file per key (raw key text, nothing else) and
still consults the structured store for keys cached before the switch,
offering to move them over.

Very old installations stored RSA keys under the bare host name in a
scrambled hex layout. Those are transcoded on lookup and written back in
the current layout, but only when the result is exactly the key being
verified.
"""

import logging
from pathlib import Path
from typing import Optional

from .codec import escape_filename, escape_key
from .errors import HiveError, PersistenceError
from .hive import Hive, HiveKey, RegValue, ValueType, join_path
from .reporting import ConfirmCallback, ErrorReporter, cancel_all, log_reporter
from .types import BackendType, Confirmation, KeyStatus, StorePaths

logger = logging.getLogger(__name__)

HOSTKEYS_KEY = "SshHostKeys"

MIGRATION_PROMPT = (
    "The host key is cached in the Windows registry. "
    "Do you want to move it to a file? \n\n"
    "Yes \t-> Move to file (and delete from registry)\n"
    "No \t-> Copy to file (and keep in registry)\n"
    "Cancel \t-> Do nothing and continue this session\n"
)


def host_key_id(hostname: str, port: int, keytype: str) -> str:
    return f"{keytype}@{port}:{escape_key(hostname)}"


def permute_legacy_digits(digits: str) -> str:
    """Reorder one old-style bignum into ordinary most-significant-first hex.

    Old-style bignums are groups of four hex digits, most significant
    digit first inside a group but least significant group first. Leading
    zeros are dropped, keeping at least one digit.
    """
    if not digits or len(digits) % 4:
        raise ValueError(f"not a legacy bignum: {digits!r}")
    ndigits = len(digits)
    while ndigits > 1 and digits[(ndigits - 1) ^ 3] == "0":
        ndigits -= 1
    return "".join(digits[j ^ 3] for j in range(ndigits - 1, -1, -1))


def transcode_legacy_key(old: str) -> Optional[str]:
    """Convert ``"<bignum>/<bignum>"`` into ``"0x<hex>,0x<hex>"``.

    Returns None when the value is not in the legacy layout.
    """
    parts = old.split("/")
    if len(parts) < 2:
        return None
    try:
        exponent = permute_legacy_digits(parts[0])
        modulus = permute_legacy_digits(parts[1])
    except ValueError:
        return None
    return f"0x{exponent},0x{modulus}"


class HostKeyVault:
    """Verify and store host keys for the active backend."""

    def __init__(
        self,
        kind: BackendType,
        hive: Hive,
        root: str,
        paths: Optional[StorePaths] = None,
        confirm: ConfirmCallback = cancel_all,
        reporter: ErrorReporter = log_reporter,
    ):
        if kind == BackendType.FILE and paths is None:
            raise ValueError("The file backend needs StorePaths")
        self._kind = kind
        self._hive = hive
        self._key_path = join_path(root, HOSTKEYS_KEY)
        self._paths = paths
        self._confirm = confirm
        self._reporter = reporter

    def key_file(self, hostname: str, port: int, keytype: str) -> Path:
        return self._key_file(host_key_id(hostname, port, keytype))

    def _key_file(self, ident: str) -> Path:
        return self._paths.host_keys / (escape_filename(ident) + self._paths.key_suffix)

    def verify(self, hostname: str, port: int, keytype: str, key: str) -> KeyStatus:
        ident = host_key_id(hostname, port, keytype)
        if self._kind == BackendType.REGISTRY:
            return self._verify_structured(ident, keytype, key)
        return self._verify_file(ident, keytype, key)

    def has_key(self, hostname: str, port: int, keytype: str) -> bool:
        """Whether any key is cached, checked against an impossible candidate."""
        return self.verify(hostname, port, keytype, "") != KeyStatus.ABSENT

    def store(self, hostname: str, port: int, keytype: str, key: str) -> None:
        ident = host_key_id(hostname, port, keytype)
        if self._kind == BackendType.REGISTRY:
            self._store_structured(ident, key)
            return
        path = self._key_file(ident)
        if not self._write_key_file(path, key, "Unable to create file", "Unable to save key to file"):
            raise PersistenceError("Unable to save host key", str(path))

    def _verify_structured(self, ident: str, keytype: str, key: str) -> KeyStatus:
        rkey = self._hive.open_key(self._key_path)
        if rkey is None:
            return KeyStatus.ABSENT

        with rkey:
            stored = rkey.query_value(ident)
            if stored is None and keytype == "rsa":
                return self._verify_legacy(rkey, ident, key)

        if stored is None or stored.type != ValueType.SZ:
            return KeyStatus.ABSENT
        return KeyStatus.MATCH if stored.data == key else KeyStatus.MISMATCH

    def _verify_legacy(self, rkey: HiveKey, ident: str, key: str) -> KeyStatus:
        justhost = ident.split(":", 1)[1]
        old = rkey.query_value(justhost)
        if old is None or old.type != ValueType.SZ:
            return KeyStatus.ABSENT

        transcoded = transcode_legacy_key(str(old.data))
        if transcoded is None:
            logger.debug(f"Legacy host key for {justhost!r} could not be transcoded")
            return KeyStatus.MISMATCH
        if transcoded != key:
            return KeyStatus.MISMATCH

        try:
            rkey.set_value(ident, RegValue.sz(transcoded))
        except HiveError as exc:
            logger.warning(f"Could not upgrade legacy host key for {justhost!r}: {exc}")
        return KeyStatus.MATCH

    def _verify_file(self, ident: str, keytype: str, key: str) -> KeyStatus:
        path = self._key_file(ident)
        try:
            with open(path, "rb") as f:
                stored = f.read()
        except OSError:
            stored = None

        if stored is not None:
            return KeyStatus.MATCH if stored == key.encode("utf-8") else KeyStatus.MISMATCH

        status = self._verify_structured(ident, keytype, key)
        if status != KeyStatus.MATCH:
            return status

        self._offer_migration(ident, key)
        return KeyStatus.MATCH

    def _offer_migration(self, ident: str, key: str) -> None:
        answer = self._confirm(MIGRATION_PROMPT)
        if answer in (Confirmation.AFFIRM, Confirmation.DECLINE):
            written = self._write_key_file(
                self._key_file(ident),
                key,
                "Unable to create file (key won't be deleted from registry)",
                "Unable to save key to file (key won't be deleted from registry)",
            )
            if not written:
                answer = Confirmation.DECLINE

        if answer != Confirmation.AFFIRM:
            return

        rkey = self._hive.open_key(self._key_path)
        if rkey is None:
            return
        with rkey:
            if not rkey.delete_value(ident):
                self._reporter("Unable to delete registry value", ident)
            else:
                logger.info(f"Moved host key {ident} from the registry to a file")

    def _write_key_file(self, path: Path, key: str, create_error: str, write_error: str) -> bool:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            f = open(path, "wb")
        except OSError as exc:
            logger.warning(f"{create_error}: {path}: {exc}")
            self._reporter(create_error, str(path))
            return False
        with f:
            try:
                f.write(key.encode("utf-8"))
            except OSError as exc:
                logger.warning(f"{write_error}: {path}: {exc}")
                self._reporter(write_error, None)
                return False
        return True

    def _store_structured(self, ident: str, key: str) -> None:
        try:
            rkey = self._hive.create_key(self._key_path)
        except HiveError as exc:
            logger.warning(f"Host key store unavailable: {exc}")
            return
        with rkey:
            try:
                rkey.set_value(ident, RegValue.sz(key))
            except HiveError as exc:
                logger.warning(f"Could not store host key {ident}: {exc}")
