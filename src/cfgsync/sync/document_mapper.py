"""Mapping between local config files and remote documents.

Every config file is stored as one document named after its basename, with
the file's relative path on the first line:

    // binds/buy.cfg
    bind "F1" "buy ak47"

The reserved ``README.md`` document carries only a generation summary and is
never turned back into a config file.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath

from ..errors import MalformedHeaderError
from ..models import IncludedFile
from ..utils.datetime import format_timestamp

README_FILE = "README.md"

PATH_HEADER_PREFIX = "// "


@dataclass
class ParsedDocument:
    """A remote document split into its path header and body."""

    relative_path: PurePosixPath
    body: str


def document_name(relative_path: PurePosixPath) -> str:
    """Remote document name for a config file (its basename).

    Examples:
        >>> document_name(PurePosixPath("binds/buy.cfg"))
        'buy.cfg'
    """
    return relative_path.name


def render_document(included: IncludedFile) -> str:
    """Document content for a config file: path header, then raw contents."""
    return f"{PATH_HEADER_PREFIX}{included.relative_path.as_posix()}\n{included.contents}"


def render_readme(compiled_at: datetime) -> str:
    """Content of the reserved README.md summary document."""
    return f"# Compiled on {format_timestamp(compiled_at)}\n\n"


def parse_document(name: str, content: str) -> ParsedDocument:
    """Split a remote document into relative path and body.

    The body is everything after the first newline, unchanged, so a pushed
    file comes back byte for byte.

    Args:
        name: Document name (used in error messages)
        content: Full document content

    Returns:
        ParsedDocument with the relative path and original file contents

    Raises:
        MalformedHeaderError: If the first line is not ``// <relative path>``
            or the path points outside the config tree

    Examples:
        >>> doc = parse_document("video.cfg", "// video.cfg\\nfps_max 0")
        >>> doc.relative_path, doc.body
        (PurePosixPath('video.cfg'), 'fps_max 0')
    """
    header, _, body = content.partition("\n")
    header = header.rstrip("\r")

    if not header.startswith(PATH_HEADER_PREFIX):
        raise MalformedHeaderError(name, f"first line must start with '{PATH_HEADER_PREFIX}'")

    raw_path = header[len(PATH_HEADER_PREFIX) :]
    if not raw_path.strip():
        raise MalformedHeaderError(name, "header does not name a path")
    if raw_path != raw_path.strip():
        raise MalformedHeaderError(name, f"path '{raw_path}' has leading or trailing whitespace")
    if "\x00" in raw_path:
        raise MalformedHeaderError(name, "path contains a NUL byte")

    relative_path = PurePosixPath(raw_path)
    if relative_path.is_absolute() or ".." in relative_path.parts:
        raise MalformedHeaderError(name, f"path '{raw_path}' is outside the config directory")

    return ParsedDocument(relative_path=relative_path, body=body)
