"""Loading and saving of the kswitch config file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from kswitch.core.exceptions import ConfigError
from kswitch.core.paths import get_paths
from kswitch.models.config import KswConfig

logger = logging.getLogger(__name__)


class ConfigManager:
    """Reads and writes the user config document.

    Writes are last-write-wins: there is no locking against other ksw
    processes editing the same file.
    """

    def __init__(self, config_path: Path | None = None):
        """Initialize config manager.

        Args:
            config_path: Config file location (defaults to get_paths().config_file)
        """
        self.config_path = config_path or get_paths().config_file
        self._config: KswConfig | None = None

    def load(self) -> KswConfig:
        """Load the config file.

        A missing file yields defaults. A file that cannot be read or parsed
        is logged and also yields defaults, so a corrupt config never blocks
        switching contexts.
        """
        if not self.config_path.exists():
            self._config = KswConfig()
            return self._config

        try:
            data = json.loads(self.config_path.read_text(encoding="utf-8"))
            self._config = KswConfig.model_validate(data or {})
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable config %s: %s", self.config_path, exc)
            self._config = KswConfig()

        return self._config

    def get_config(self) -> KswConfig:
        """Get current config, loading if necessary."""
        if self._config is None:
            return self.load()
        return self._config

    def save(self, config: KswConfig) -> None:
        """Write the config file.

        Args:
            config: Config to save

        Raises:
            ConfigError: If the file cannot be written
        """
        data = config.model_dump(mode="json")
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(self.config_path, str(exc)) from exc

        self._config = config
        logger.debug("Saved config to %s", self.config_path)
