"""Tests for the diff-index record parser."""

import pytest

from stagefmt.git.diff_parser import ParseError, parse_diff_index, parse_diff_line
from stagefmt.git.models import DiffStatus
from stagefmt.git.quoting import quote_path, unquote_path

from conftest import DST_HASH, SRC_HASH, ZERO


class TestBasicParsing:
    def test_modified_record(self, sample_modified_line):
        record = parse_diff_line(sample_modified_line)
        assert record.src_mode == "100644"
        assert record.dst_mode == "100644"
        assert record.src_hash == SRC_HASH
        assert record.dst_hash == DST_HASH
        assert record.status == DiffStatus.MODIFIED
        assert record.score is None
        assert record.src_path == "src/app.js"
        assert record.dst_path == ""
        assert record.path == "src/app.js"

    def test_added_record_keeps_zero_sentinels(self, sample_added_line):
        record = parse_diff_line(sample_added_line)
        assert record.src_mode == "000000"
        assert record.src_hash == ZERO
        assert record.status == DiffStatus.ADDED
        assert record.has_content is True

    def test_rename_with_score(self, sample_rename_line):
        record = parse_diff_line(sample_rename_line)
        assert record.status == DiffStatus.RENAMED
        assert record.score == 86
        assert record.src_path == "old name.py"
        assert record.dst_path == "new name.py"
        assert record.path == "new name.py"

    def test_space_separated_form(self):
        """The path may follow the status after a single space."""
        line = f"100644 100644 {SRC_HASH} {DST_HASH} M src/with space/a b.js"
        record = parse_diff_line(line)
        assert record.src_path == "src/with space/a b.js"
        assert record.dst_path == ""

    def test_copy_with_zero_score(self):
        line = f":100644 100644 {SRC_HASH} {DST_HASH} C000\ta.txt\tb.txt"
        record = parse_diff_line(line)
        assert record.status == DiffStatus.COPIED
        assert record.score == 0

    def test_trailing_newline_ignored(self, sample_modified_line):
        record = parse_diff_line(sample_modified_line + "\n")
        assert record.src_path == "src/app.js"


class TestQuotedPaths:
    def test_quote_and_backslash_unescaped(self):
        line = f':000000 100644 {ZERO} {DST_HASH} A\t"we\\"ird\\\\name.txt"'
        record = parse_diff_line(line)
        assert record.path == 'we"ird\\name.txt'

    def test_rename_both_sides_unescaped(self):
        line = f':100644 100644 {SRC_HASH} {DST_HASH} R100\t"a\\tb.txt"\t"c\\"d.txt"'
        record = parse_diff_line(line)
        assert record.src_path == "a\tb.txt"
        assert record.dst_path == 'c"d.txt'

    def test_octal_escapes_decoded_as_utf8(self):
        assert unquote_path('"caf\\303\\251.txt"') == "café.txt"

    def test_plain_path_untouched(self):
        assert unquote_path("plain name.txt") == "plain name.txt"
        assert unquote_path('"') == '"'

    def test_quote_path_matches_git(self):
        assert quote_path(b"a/plain.txt") == b"a/plain.txt"
        assert quote_path(b'a/we"ird.txt') == b'"a/we\\"ird.txt"'
        assert quote_path(b"a/new\nline") == b'"a/new\\nline"'
        assert quote_path(b"a/\x01x") == b'"a/\\001x"'

    def test_line_separator_in_path_is_not_a_record_break(self):
        output = f":000000 100644 {ZERO} {DST_HASH} A\tnotes\u2028draft.txt\n"
        records = list(parse_diff_index(output))
        assert [r.path for r in records] == ["notes\u2028draft.txt"]


class TestRecordProperties:
    def test_symlink_detected(self, sample_symlink_line):
        record = parse_diff_line(sample_symlink_line)
        assert record.is_symlink is True

    def test_regular_file_not_symlink(self, sample_modified_line):
        assert parse_diff_line(sample_modified_line).is_symlink is False

    def test_deleted_has_no_content(self):
        line = f":100644 000000 {SRC_HASH} {ZERO} D\tgone.py"
        record = parse_diff_line(line)
        assert record.status == DiffStatus.DELETED
        assert record.has_content is False

    def test_unhashed_worktree_content(self):
        line = f":100644 100644 {SRC_HASH} {ZERO} M\tdirty.py"
        assert parse_diff_line(line).has_content is False


class TestMalformedLines:
    @pytest.mark.parametrize(
        "line",
        [
            "",
            "not a record",
            f":10064 100644 {SRC_HASH} {DST_HASH} M\tshort-mode",
            f":100644 100644 {SRC_HASH[:7]} {DST_HASH} M\tshort-hash",
            f":100644 100644 {SRC_HASH} {DST_HASH} Z\tbad-status",
            f":100644 100644 {SRC_HASH} {DST_HASH} M",
            f":100644 100644 {SRC_HASH.upper()} {DST_HASH} M\tupper-hex",
        ],
    )
    def test_rejected(self, line):
        with pytest.raises(ParseError):
            parse_diff_line(line)


class TestParseOutput:
    def test_multiple_lines(self, sample_modified_line, sample_added_line):
        output = f"{sample_modified_line}\n{sample_added_line}\n\n"
        records = list(parse_diff_index(output))
        assert [r.path for r in records] == ["src/app.js", "docs/new file.md"]

    def test_empty_output(self):
        assert list(parse_diff_index("")) == []

    def test_malformed_line_raises(self, sample_modified_line):
        with pytest.raises(ParseError):
            list(parse_diff_index(f"{sample_modified_line}\ngarbage\n"))
