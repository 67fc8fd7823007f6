"""Runtime subsystem for kswitch.

This package manages runtime/operational concerns:
- config.py: Config file loading and saving
"""

from kswitch.core.runtime.config import ConfigManager

__all__ = ["ConfigManager"]
