"""Compile command for flattening a config tree into one file."""

import logging
from pathlib import Path

from ..errors import CfgsyncError
from ..resolver import compile_and_write
from .output import error, info, progress, success
from .remote import load_project_config

logger = logging.getLogger(__name__)


def run_compile(cfg_dir: Path, root_file: str | None = None, dry_run: bool = False) -> int:
    """Compile ``root_file`` and its includes into ``compiled.cfg``.

    Args:
        cfg_dir: Path to the config tree root
        root_file: Root cfg file relative to cfg_dir (default: from cfgsync.yml)
        dry_run: Report the output size without writing the file

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    config = load_project_config(cfg_dir)

    root_file = root_file or config.root_file
    if not root_file:
        error("No root file given")
        info("Pass ROOT_FILE or set 'root_file' in cfgsync.yml")
        return 1

    try:
        result = compile_and_write(
            cfg_dir,
            root_file,
            output_name=config.output_file,
            dry_run=dry_run,
        )
    except CfgsyncError as e:
        error(str(e))
        return 1

    if result.dry_run:
        progress(f"Would write {result.size}B to {result.output_path}", dry_run=True)
    else:
        success(f"Compiled {result.size}B to {result.output_path}")
    return 0
