"""Flatten an exec-linked config tree into a single file."""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path, PurePosixPath

from ..errors import CyclicIncludeError, WriteFailureError
from ..utils.datetime import format_timestamp, now_local
from .includes import include_path, parse_include, read_config, split_lines

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "compiled.cfg"


@dataclass
class CompileResult:
    """Result of a compile operation."""

    output_path: Path
    size: int  # Bytes written, or that would be written on a dry run
    dry_run: bool = False


def compile_config(cfg_dir: Path, root_file: PurePosixPath | str) -> str:
    """Resolve ``root_file`` into one text with every include substituted.

    Each include line is replaced, in place, by the compiled text of the file
    it names. All other lines are kept as they are. Lines are joined with
    ``\\n``.

    Raises:
        ConfigFileNotFoundError: If any referenced file is missing
        CyclicIncludeError: If an include chain loops back on itself
    """
    return _compile(cfg_dir, PurePosixPath(root_file), [])


def _compile(cfg_dir: Path, relative_path: PurePosixPath, ancestors: list[PurePosixPath]) -> str:
    if relative_path in ancestors:
        raise CyclicIncludeError([*ancestors, relative_path])

    logger.debug("Compiling %s", relative_path)
    chain = [*ancestors, relative_path]

    lines: list[str] = []
    for line in split_lines(read_config(cfg_dir, relative_path)):
        name = parse_include(line)
        if name is None:
            lines.append(line)
        else:
            lines.append(_compile(cfg_dir, include_path(name), chain))
    return "\n".join(lines)


def render_compiled(body: str, compiled_at: datetime) -> str:
    """Prefix compiled text with its generation header."""
    return f"// Compiled on {format_timestamp(compiled_at)}\n\n{body}"


def compile_and_write(
    cfg_dir: Path,
    root_file: PurePosixPath | str,
    *,
    output_name: str = DEFAULT_OUTPUT_NAME,
    dry_run: bool = False,
    now: datetime | None = None,
) -> CompileResult:
    """Compile ``root_file`` and write it next to the root file.

    The whole tree is resolved before anything is written, so a missing file
    or a cycle leaves no output behind.

    Args:
        cfg_dir: Root of the config tree
        root_file: Path of the root file, relative to ``cfg_dir``
        output_name: Filename of the compiled output
        dry_run: If True, only report what would be written
        now: Timestamp for the header (defaults to the current local time)

    Returns:
        CompileResult with the output path and byte count

    Raises:
        ConfigFileNotFoundError: If any referenced file is missing
        CyclicIncludeError: If an include chain loops back on itself
        WriteFailureError: If the output file cannot be written
    """
    root_cfg = cfg_dir / root_file
    output_path = root_cfg.parent / output_name
    compiled = render_compiled(compile_config(cfg_dir, root_file), now or now_local())
    data = compiled.encode("utf-8")

    if dry_run:
        logger.info("Skipping writing compiled %dB to %s due to --dry-run", len(data), output_path)
        return CompileResult(output_path=output_path, size=len(data), dry_run=True)

    try:
        output_path.write_bytes(data)
    except OSError as e:
        raise WriteFailureError(output_path, e) from e

    logger.info("Compiled %dB to %s", len(data), output_path)
    return CompileResult(output_path=output_path, size=len(data))
