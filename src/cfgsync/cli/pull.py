"""Pull command for restoring config files from a gist."""

import logging
from pathlib import Path

from ..config import Settings
from ..errors import CfgsyncError
from ..sync import PullEngine
from .output import error, info, progress, success
from .remote import load_project_config, open_gist_client, resolve_gist_id

logger = logging.getLogger(__name__)


def run_pull(
    cfg_dir: Path,
    gist_id: str | None = None,
    access_token: str | None = None,
    update_only: bool = False,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Write gist documents back to their paths under ``cfg_dir``.

    Args:
        cfg_dir: Path to the config tree root
        gist_id: Gist to read from (default: from cfgsync.yml)
        access_token: GitHub token (default: environment)
        update_only: Only overwrite files that already exist locally
        dry_run: Show what would be written without touching files
        settings: Application settings

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    settings = settings or Settings()
    config = load_project_config(cfg_dir)

    gist_id = resolve_gist_id(gist_id, config)
    if not gist_id:
        error("No gist id given")
        info("Pass --gist-id or set 'gist_id' in cfgsync.yml")
        return 1

    max_workers = config.max_workers or settings.max_workers

    progress("Authenticating with GitHub...")
    try:
        with open_gist_client(access_token, settings) as client:
            progress(f"Pulling gist {gist_id} into {cfg_dir}...", dry_run)
            engine = PullEngine(client, cfg_dir, max_workers=max_workers)
            result = engine.pull(gist_id, update_only=update_only, dry_run=dry_run)
    except CfgsyncError as e:
        error(str(e))
        return 1

    print()
    for pulled in result.written:
        if dry_run:
            info(f"Would write {pulled.size}B to {pulled.path}")
        else:
            success(f"Wrote {pulled.size}B to {pulled.path}")
    for err in result.errors:
        error(err)

    verb = "Would write" if dry_run else "Wrote"
    info(f"{verb} {len(result.written)} file(s), {result.total_bytes}B")
    return 0 if not result.has_errors else 1
