"""
Session file record format.

A session file is a flat list of records::

    ENC(key) "\\" ENC(value) "\\" "\\n"

where ENC is ``escape_key``. There is no header and no ordering. Files
that went through a line ending conversion may carry ``\\r`` before the
newline. A trailing record without both separators is ignored.
"""

from typing import Iterable, List, Tuple

from .codec import escape_key

Record = Tuple[str, str]


def serialize_records(items: Iterable[Record]) -> str:
    """Render raw (key, value) pairs as session file text."""
    return "".join(f"{escape_key(key)}\\{escape_key(value)}\\\n" for key, value in items)


def parse_records(text: str) -> List[Record]:
    """Split session file text into (encoded key, encoded value) pairs.

    Keys and values are returned still encoded; lookups encode the wanted
    key and decode only the value they return.
    """
    records: List[Record] = []
    pos = 0
    end = len(text)
    while pos < end:
        key_end = text.find("\\", pos)
        if key_end < 0:
            break
        value_end = text.find("\\", key_end + 1)
        if value_end < 0:
            break
        records.append((text[pos:key_end], text[key_end + 1:value_end]))
        pos = value_end + 1
        if text.startswith("\r", pos):
            pos += 1
        if text.startswith("\n", pos):
            pos += 1
    return records
