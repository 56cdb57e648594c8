"""Loading of the optional per-tree ``cfgsync.yml`` project file."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import CfgsyncConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Reads ``cfgsync.yml`` from a config tree and caches the result.

    A broken project file never stops a command: the service falls back to
    ``CfgsyncConfig.default()`` and keeps the reason in ``config_error`` so
    the CLI can tell the user.
    """

    CONFIG_FILE = "cfgsync.yml"

    def __init__(self, cfg_dir: Path) -> None:
        self.cfg_dir = cfg_dir
        self._config: CfgsyncConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        return self.cfg_dir / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        return self._config_error

    def get_config(self) -> CfgsyncConfig:
        """Project configuration, read from disk on first use."""
        if self._config is None:
            self._config_error = None
            self._config = self._load()
        return self._config

    def reload(self) -> None:
        """Forget the cached configuration; the next access reads the file again."""
        self._config = None
        self._config_error = None

    def _load(self) -> CfgsyncConfig:
        if not self.config_path.is_file():
            logger.debug("No %s in %s, using defaults", self.CONFIG_FILE, self.cfg_dir)
            return CfgsyncConfig.default()

        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            return self._fallback(f"Error loading {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")
        if not isinstance(data, dict):
            return self._fallback(f"{self.CONFIG_FILE} must contain a mapping")

        try:
            config = CfgsyncConfig(**data)
        except ValidationError as e:
            return self._fallback(f"Error loading {self.CONFIG_FILE}: {e}")

        logger.info("Loaded %s", self.config_path)
        return config

    def _fallback(self, message: str) -> CfgsyncConfig:
        self._config_error = message
        logger.warning(message)
        return CfgsyncConfig.default()
