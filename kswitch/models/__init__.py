"""Data models for kswitch."""

from kswitch.models.config import MAX_HISTORY, KswConfig

__all__ = ["KswConfig", "MAX_HISTORY"]
