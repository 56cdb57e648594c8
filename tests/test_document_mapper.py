"""Unit tests for the document mapper."""

from datetime import datetime
from pathlib import PurePosixPath

import pytest

from cfgsync.errors import MalformedHeaderError
from cfgsync.models import IncludedFile
from cfgsync.sync.document_mapper import (
    README_FILE,
    document_name,
    parse_document,
    render_document,
    render_readme,
)


class TestRenderDocument:
    """Tests for document rendering."""

    def test_header_then_contents(self):
        included = IncludedFile(relative_path=PurePosixPath("binds/buy.cfg"), contents="a\nb\n")
        assert render_document(included) == "// binds/buy.cfg\na\nb\n"

    def test_document_name_is_basename(self):
        assert document_name(PurePosixPath("binds/buy.cfg")) == "buy.cfg"

    def test_readme(self):
        assert render_readme(datetime(2024, 1, 2, 3, 4, 5)) == "# Compiled on 2024-01-02 03:04:05\n\n"

    def test_readme_name(self):
        assert README_FILE == "README.md"


class TestParseDocument:
    """Tests for parse_document."""

    def test_parses_path_and_body(self):
        doc = parse_document("buy.cfg", "// binds/buy.cfg\nbind x\n")
        assert doc.relative_path == PurePosixPath("binds/buy.cfg")
        assert doc.body == "bind x\n"

    def test_body_kept_verbatim(self):
        """Blank lines and CRLF endings in the body survive."""
        doc = parse_document("a.cfg", "// a.cfg\r\none\r\n\r\ntwo")
        assert doc.relative_path == PurePosixPath("a.cfg")
        assert doc.body == "one\r\n\r\ntwo"

    def test_header_only(self):
        """A header with no newline is an empty file."""
        doc = parse_document("a.cfg", "// a.cfg")
        assert doc.body == ""

    def test_round_trip(self):
        included = IncludedFile(relative_path=PurePosixPath("x/y.cfg"), contents="z\n\n")
        doc = parse_document("y.cfg", render_document(included))
        assert doc.relative_path == included.relative_path
        assert doc.body == included.contents

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "//",
            "// ",
            "//a.cfg\nx",
            "fps_max 0\n",
            "# a.cfg\nx",
        ],
    )
    def test_malformed_headers(self, content):
        """Missing or short headers raise instead of slicing garbage."""
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_document("bad.cfg", content)
        assert exc_info.value.name == "bad.cfg"

    @pytest.mark.parametrize("path", ["/etc/passwd", "../outside.cfg", "a/../../b.cfg"])
    def test_paths_outside_tree_rejected(self, path):
        with pytest.raises(MalformedHeaderError):
            parse_document("x.cfg", f"// {path}\nx")

    @pytest.mark.parametrize("header", ["//  a.cfg", "// a.cfg ", "// a.cfg\t"])
    def test_surrounding_whitespace_rejected(self, header):
        """A path is never silently trimmed into a different file name."""
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_document("a.cfg", f"{header}\nx")
        assert "whitespace" in exc_info.value.reason

    def test_nul_byte_rejected(self):
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_document("bad.cfg", "// a\x00b.cfg\nx")
        assert "NUL" in exc_info.value.reason

    def test_inner_spaces_kept(self):
        doc = parse_document("my binds.cfg", "// binds/my binds.cfg\nx")
        assert doc.relative_path == PurePosixPath("binds/my binds.cfg")
