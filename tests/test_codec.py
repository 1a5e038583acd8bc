"""Tests for termstore.codec and termstore.records."""

import pytest

from termstore.codec import (
    MAX_VALUE_LENGTH,
    escape_filename,
    escape_key,
    session_filename,
    unescape_filename,
    unescape_key,
)
from termstore.records import parse_records, serialize_records


# =============================================================================
# Layer 1: key encoding
# =============================================================================


class TestEscapeKey:
    """Tests for escape_key()."""

    def test_plain_name_unchanged(self):
        assert escape_key("Server01") == "Server01"

    def test_space_escaped(self):
        assert escape_key("My Server") == "My%20Server"

    def test_specials_escaped(self):
        assert escape_key("a*b?c%d\\e") == "a%2Ab%3Fc%25d%5Ce"

    def test_leading_dot_kept(self):
        assert escape_key(".hidden") == ".hidden"

    def test_inner_dots_escaped(self):
        assert escape_key("a.b.c") == "a%2Eb%2Ec"
        assert escape_key("..x") == ".%2Ex"

    def test_control_and_non_ascii_escaped(self):
        assert escape_key("a\tb") == "a%09b"
        assert escape_key("\x7f") == "%7F"
        assert escape_key("é") == "%C3%A9"

    def test_filesystem_characters_not_escaped(self):
        """Layer 1 leaves < > : \" / | alone."""
        assert escape_key('<>:"/|') == '<>:"/|'

    def test_output_is_printable_ascii(self):
        encoded = escape_key("naïve \x00 host.example\\com")
        assert all(0x21 <= ord(ch) <= 0x7E for ch in encoded)
        assert " " not in encoded

    @pytest.mark.parametrize("first, second", [
        (".a", "%2Ea"),
        ("a.b", "a%2Eb"),
        ("a b", "a%20b"),
        ("x:y", "x%3Ay"),
        ("%", "%25"),
    ])
    def test_distinct_names_stay_distinct(self, first, second):
        assert escape_key(first) != escape_key(second)
        assert session_filename(first) != session_filename(second)
        assert session_filename(first, ".ses") != session_filename(second, ".ses")


class TestUnescapeKey:
    """Tests for unescape_key()."""

    @pytest.mark.parametrize("name", [
        "My Server",
        ".hidden",
        "a.b.c",
        "100% sure?",
        "back\\slash*",
        "Grüße aus Köln",
        "",
    ])
    def test_inverts_escape_key(self, name):
        assert unescape_key(escape_key(name)) == name

    def test_lowercase_hex_accepted(self):
        assert unescape_key("a%2eb") == "a.b"

    def test_invalid_sequences_pass_through(self):
        assert unescape_key("%zz") == "%zz"
        assert unescape_key("100%") == "100%"
        assert unescape_key("%4") == "%4"

    def test_limit_truncates(self):
        assert unescape_key("abcdef", limit=3) == "abc"
        assert unescape_key("%41%42%43", limit=2) == "AB"

    def test_max_value_length(self):
        assert len(unescape_key("x" * (MAX_VALUE_LENGTH + 10), limit=MAX_VALUE_LENGTH)) == MAX_VALUE_LENGTH


# =============================================================================
# Layer 2: file names
# =============================================================================


class TestEscapeFilename:
    """Tests for escape_filename() and unescape_filename()."""

    def test_filesystem_characters_escaped(self):
        assert escape_filename('a<b>c:d"e/f|g') == "a%3Cb%3Ec%3Ad%22e%2Ff%7Cg"

    def test_single_unescape_inverts_both_layers(self):
        name = 'ssh://host:22/x "quoted" | more'
        assert unescape_key(escape_filename(escape_key(name))) == name

    def test_unescape_filename_only_undoes_layer_two(self):
        assert unescape_filename("host%3A22%2520") == "host:22%2520"

    def test_session_filename_appends_suffix_unescaped(self):
        assert session_filename("a b", ".ses") == "a%20b.ses"
        assert session_filename("host:1") == "host%3A1"


# =============================================================================
# Session file records
# =============================================================================


class TestSerializeRecords:
    """Tests for serialize_records()."""

    def test_layout(self):
        text = serialize_records([("HostName", "example.com"), ("PortNumber", "22")])
        assert text == "HostName\\example%2Ecom\\\nPortNumber\\22\\\n"

    def test_backslash_in_value_escaped(self):
        assert serialize_records([("k", "x\\y")]) == "k\\x%5Cy\\\n"

    def test_empty(self):
        assert serialize_records([]) == ""


class TestParseRecords:
    """Tests for parse_records()."""

    def test_pairs_stay_encoded(self):
        assert parse_records("My%20Key\\a%2Eb\\\n") == [("My%20Key", "a%2Eb")]

    def test_crlf_tolerated(self):
        assert parse_records("a\\b\\\r\nc\\d\\\r\n") == [("a", "b"), ("c", "d")]

    def test_truncated_tail_ignored(self):
        assert parse_records("a\\b\\\nc\\d") == [("a", "b")]
        assert parse_records("a\\b\\\nc") == [("a", "b")]

    def test_empty_value(self):
        assert parse_records("k\\\\\n") == [("k", "")]

    def test_empty_text(self):
        assert parse_records("") == []

    def test_round_trip(self):
        items = [("Font", "Courier New"), ("Path", "C:\\tmp\\x.log"), ("Empty", "")]
        parsed = parse_records(serialize_records(items))
        assert [(unescape_key(k), unescape_key(v)) for k, v in parsed] == items
