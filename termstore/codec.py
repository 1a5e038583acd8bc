"""
Reversible name encoding.

Session and host names are arbitrary text, but they end up as structured
store key names and as bare file names. Two escaping layers make that
safe, both using ``%XY`` (two uppercase hex digits of the byte value):

1. ``escape_key`` makes a name usable as one structured store key segment.
   It escapes bytes outside printable ASCII, space, ``\\ * ? %`` and every
   ``.`` except a leading one.
2. ``escape_filename`` is applied on top of layer 1 for the file backend
   and escapes the characters a filesystem rejects: ``< > : " / |``.

Layer 1 never emits any layer-2 character escaped, so a single
``unescape_key`` pass inverts both layers.
"""

from typing import Optional

HEX_DIGITS = "0123456789ABCDEF"

# Maximum decoded length of a single value read back from a session file.
MAX_VALUE_LENGTH = 16 * 1024 - 1

_KEY_SPECIALS = frozenset(b" \\*?%")
_FILENAME_SPECIALS = frozenset('<>:"/|')
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def _escape_byte(byte: int) -> str:
    return "%" + HEX_DIGITS[byte >> 4] + HEX_DIGITS[byte & 15]


def escape_key(name: str) -> str:
    """Layer 1: encode a name as a structured store key segment."""
    out = []
    for index, byte in enumerate(name.encode("utf-8")):
        if (byte in _KEY_SPECIALS or byte < 0x20 or byte > 0x7E
                or (byte == 0x2E and index > 0)):
            out.append(_escape_byte(byte))
        else:
            out.append(chr(byte))
    return "".join(out)


def unescape_key(token: str, limit: Optional[int] = None) -> str:
    """Inverse of ``escape_key`` (and of ``escape_filename`` on top of it).

    Never fails: a ``%`` not followed by two hex digits is kept as is.
    With ``limit`` the decoded result is truncated to that many bytes.
    """
    raw = bytearray()
    i = 0
    while i < len(token):
        if limit is not None and len(raw) >= limit:
            break
        digits = token[i + 1:i + 3]
        if token[i] == "%" and len(digits) == 2 and set(digits) <= _HEX_CHARS:
            raw.append(int(digits, 16))
            i += 3
        else:
            raw.extend(token[i].encode("utf-8"))
            i += 1
    if limit is not None:
        del raw[limit:]
    return raw.decode("utf-8", errors="replace")


def escape_filename(token: str) -> str:
    """Layer 2: escape characters that are illegal in file names."""
    return "".join(
        _escape_byte(ord(ch)) if ch in _FILENAME_SPECIALS else ch
        for ch in token
    )


def unescape_filename(filename: str) -> str:
    """Undo only layer 2, giving back the layer-1 token."""
    out = []
    i = 0
    while i < len(filename):
        chunk = filename[i:i + 3]
        if len(chunk) == 3 and chunk[0] == "%" and chunk[1:] in _FILENAME_ESCAPES:
            out.append(_FILENAME_ESCAPES[chunk[1:]])
            i += 3
        else:
            out.append(filename[i])
            i += 1
    return "".join(out)


_FILENAME_ESCAPES = {_escape_byte(ord(ch))[1:]: ch for ch in _FILENAME_SPECIALS}


def session_filename(name: str, suffix: str = "") -> str:
    """File name of a session in the file store. The suffix is not escaped."""
    return escape_filename(escape_key(name)) + suffix
