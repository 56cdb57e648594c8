"""Enumerate the files of an exec-linked config tree."""

import logging
from pathlib import Path, PurePosixPath

from ..errors import CyclicIncludeError
from ..models import IncludedFile
from .includes import include_path, parse_include, read_config, split_lines

logger = logging.getLogger(__name__)


def walk_included_files(cfg_dir: Path, root_file: PurePosixPath | str) -> list[IncludedFile]:
    """List every file reachable from ``root_file``, depth-first preorder.

    Each file comes before the files it includes, and each included subtree
    is emitted whole before the next include line of the parent is followed.
    A file reached through two different branches appears twice.

    Args:
        cfg_dir: Root of the config tree
        root_file: Path of the starting file, relative to ``cfg_dir``

    Returns:
        Ordered list of included files, starting with ``root_file``

    Raises:
        ConfigFileNotFoundError: If any referenced file is missing
        CyclicIncludeError: If an include chain loops back on itself
    """
    files: list[IncludedFile] = []
    _walk(cfg_dir, PurePosixPath(root_file), [], files)
    logger.debug("Walked %d file(s) from %s", len(files), root_file)
    return files


def _walk(
    cfg_dir: Path,
    relative_path: PurePosixPath,
    ancestors: list[PurePosixPath],
    files: list[IncludedFile],
) -> None:
    if relative_path in ancestors:
        raise CyclicIncludeError([*ancestors, relative_path])

    contents = read_config(cfg_dir, relative_path)
    files.append(IncludedFile(relative_path=relative_path, contents=contents))

    chain = [*ancestors, relative_path]
    for line in split_lines(contents):
        name = parse_include(line)
        if name is not None:
            _walk(cfg_dir, include_path(name), chain, files)
