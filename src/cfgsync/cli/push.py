"""Push command for publishing a config tree to a gist."""

import logging
from pathlib import Path

from ..config import Settings
from ..errors import CfgsyncError
from ..sync import PushEngine
from .output import error, info, progress, success
from .remote import load_project_config, open_gist_client, resolve_gist_id

logger = logging.getLogger(__name__)


def run_push(
    cfg_dir: Path,
    root_file: str | None = None,
    gist_id: str | None = None,
    access_token: str | None = None,
    dry_run: bool = False,
    settings: Settings | None = None,
) -> int:
    """Upload every file reachable from ``root_file`` to a gist.

    Args:
        cfg_dir: Path to the config tree root
        root_file: Root cfg file relative to cfg_dir (default: from cfgsync.yml)
        gist_id: Gist to publish to (default: from cfgsync.yml)
        access_token: GitHub token (default: environment)
        dry_run: Show what would be uploaded without changing the gist
        settings: Application settings

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    settings = settings or Settings()
    config = load_project_config(cfg_dir)

    root_file = root_file or config.root_file
    if not root_file:
        error("No root file given")
        info("Pass ROOT_FILE or set 'root_file' in cfgsync.yml")
        return 1

    gist_id = resolve_gist_id(gist_id, config)
    if not gist_id:
        error("No gist id given")
        info("Pass --gist-id or set 'gist_id' in cfgsync.yml")
        return 1

    progress("Authenticating with GitHub...")
    try:
        with open_gist_client(access_token, settings) as client:
            progress(f"Pushing {root_file} to gist {gist_id}...", dry_run)
            result = PushEngine(client, cfg_dir).push(root_file, gist_id, dry_run=dry_run)
    except CfgsyncError as e:
        error(str(e))
        return 1

    print()
    for name in result.deleted:
        info(f"{'Would delete' if dry_run else 'Deleted'}: {name}")
    if dry_run:
        info(f"Would upload {result.document_count} file(s), {result.total_bytes}B")
    else:
        success(f"Uploaded {result.document_count} file(s), {result.total_bytes}B to {result.url}")
    return 0
