"""Include-line detection and config file reading.

An include line starts with ``exec "<name>"`` and pulls in ``<name>.cfg``,
resolved relative to the root of the config tree (not to the including file):

    exec "video"          -> video.cfg
    exec "binds/buy"      -> binds/buy.cfg

Anything after the closing quote is ignored. Lines that do not start with the
directive, including indented ones, are plain config.
"""

import re
from pathlib import Path, PurePosixPath

from ..errors import ConfigDecodeError, ConfigFileNotFoundError

INCLUDE_PATTERN = re.compile(r'^exec "(?P<name>[^"]+)"')

CONFIG_SUFFIX = ".cfg"


def parse_include(line: str) -> str | None:
    """Return the included name if ``line`` is an include line.

    Examples:
        >>> parse_include('exec "video"')
        'video'
        >>> parse_include('exec "binds/buy" // buy binds')
        'binds/buy'
        >>> parse_include('fps_max 0') is None
        True
    """
    match = INCLUDE_PATTERN.match(line)
    if not match:
        return None
    return match.group("name")


def include_path(name: str) -> PurePosixPath:
    """Relative path of the file an include name refers to."""
    return PurePosixPath(name + CONFIG_SUFFIX)


def split_lines(text: str) -> list[str]:
    """Split text into lines.

    Lines end at ``\\n``; a trailing ``\\r`` is dropped from each line and a
    trailing newline does not produce an extra empty line.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_config(cfg_dir: Path, relative_path: PurePosixPath) -> str:
    """Read a config file verbatim (no newline translation).

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigDecodeError: If the file is not valid UTF-8
    """
    full_path = cfg_dir / relative_path
    try:
        with open(full_path, encoding="utf-8", newline="") as f:
            return f.read()
    except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
        raise ConfigFileNotFoundError(full_path) from e
    except UnicodeDecodeError as e:
        raise ConfigDecodeError(full_path, e) from e
