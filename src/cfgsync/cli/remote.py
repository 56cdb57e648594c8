"""Helpers shared by the cfgsync commands."""

import logging
from pathlib import Path

from ..config import Settings
from ..github.client import GistClient
from ..models import CfgsyncConfig
from ..services import ConfigService
from .output import error

logger = logging.getLogger(__name__)


def load_project_config(cfg_dir: Path) -> CfgsyncConfig:
    """Load cfgsync.yml, reporting a broken file and carrying on with defaults."""
    config_service = ConfigService(cfg_dir)
    config = config_service.get_config()
    if config_service.has_config_error:
        error(config_service.config_error or f"Invalid {ConfigService.CONFIG_FILE}")
    return config


def open_gist_client(access_token: str | None, settings: Settings) -> GistClient:
    """Create a gist client from the first token source available.

    Order: ``--access-token``, ``CFGSYNC_ACCESS_TOKEN``, then
    ``GistClient.from_environment`` (GITHUB_TOKEN or gh CLI).

    Raises:
        GitHubAuthError: If no token is available
    """
    token = access_token or settings.access_token
    if token:
        return GistClient(token, settings.api_url)
    return GistClient.from_environment(settings.api_url)


def resolve_gist_id(gist_id: str | None, config: CfgsyncConfig) -> str | None:
    """Gist id from the command line, falling back to cfgsync.yml."""
    resolved = gist_id or config.gist_id
    if resolved and not gist_id:
        logger.debug("Using gist_id from cfgsync.yml: %s", resolved)
    return resolved
