"""Centralized path management for kswitch.

This module is the single source of truth for the locations kswitch reads
and writes. Everything else should go through it rather than hardcoding
``~/.ksw.json``.

Example:
    from kswitch.core.paths import get_paths

    paths = get_paths()
    config_file = paths.config_file
"""

from __future__ import annotations

import os
from functools import cached_property
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

CONFIG_FILE_NAME = ".ksw.json"
DEFAULT_KUBECTL = "kubectl"

# Environment variable names for overrides
ENV_KSW_CONFIG = "KSW_CONFIG"
ENV_KSW_KUBECTL = "KSW_KUBECTL"


# ============================================================================
# Paths Class
# ============================================================================


class Paths:
    """Centralized path management.

    Provides access to:
    - The user config file (~/.ksw.json)
    - The kubectl binary used for listing and switching contexts
    - Environment variable overrides for both

    Usage:
        paths = Paths()  # Uses Path.home()
        paths = Paths(home=some_path)  # Specific home directory
    """

    def __init__(self, home: Optional[Path] = None):
        """Initialize paths manager.

        Args:
            home: Home directory used for the default config location.
                  Defaults to the current user's home directory.
        """
        self._home = home

    @property
    def home(self) -> Path:
        """Get the home directory."""
        return self._home or Path.home()

    @cached_property
    def config_file(self) -> Path:
        """Get the config file path.

        Can be overridden with KSW_CONFIG environment variable.
        Default: ~/.ksw.json
        """
        env_override = os.environ.get(ENV_KSW_CONFIG)
        if env_override:
            return Path(env_override).expanduser()
        return self.home / CONFIG_FILE_NAME

    @cached_property
    def kubectl_binary(self) -> str:
        """Get the kubectl executable.

        Can be overridden with KSW_KUBECTL environment variable.
        """
        return os.environ.get(ENV_KSW_KUBECTL) or DEFAULT_KUBECTL


# ============================================================================
# Global Instance
# ============================================================================

_paths: Optional[Paths] = None


def get_paths(home: Optional[Path] = None) -> Paths:
    """Get the global Paths instance.

    Creates a singleton instance on first call. If home is provided,
    creates a new instance with that home directory.

    Args:
        home: Optional home directory. If provided, creates a new
              Paths instance (not cached as singleton).

    Returns:
        Paths instance
    """
    global _paths

    if home is not None:
        return Paths(home)

    if _paths is None:
        _paths = Paths()

    return _paths


def set_paths(paths: Optional[Paths]) -> None:
    """Set the global Paths instance.

    Useful for testing or when needing to reset the singleton.

    Args:
        paths: Paths instance to set as global, or None to reset
    """
    global _paths
    _paths = paths


def reset_paths() -> None:
    """Reset the global Paths instance.

    Forces recreation on next get_paths() call.
    """
    global _paths
    _paths = None
