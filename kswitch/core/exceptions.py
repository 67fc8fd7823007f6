"""Exception classes for kswitch."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class KswitchError(Exception):
    """Base exception for kswitch errors."""

    pass


class KubectlError(KswitchError):
    """Raised when a kubectl invocation fails."""

    def __init__(self, message: str, command: Sequence[str] = (), exit_code: int | None = None, output: str = ""):
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
        super().__init__(message)


class ConfigError(KswitchError):
    """Raised when the config file cannot be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot save config {path}: {reason}")


class ContextNotFoundError(KswitchError):
    """Raised when a name does not resolve to any context."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Context '{name}' not found.")


class AmbiguousContextError(KswitchError):
    """Raised when a name matches more than one context."""

    def __init__(self, name: str, matches: Sequence[str], alias: str = ""):
        self.name = name
        self.matches = list(matches)
        self.alias = alias
        if alias:
            super().__init__(f"Ambiguous alias @{alias}, matches:")
        else:
            super().__init__(f"Ambiguous context '{name}', matches:")


class AliasNotFoundError(KswitchError):
    """Raised when an alias is not configured."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Alias '{alias}' not found. Use 'ksw alias ls' to list.")


class GroupNotFoundError(KswitchError):
    """Raised when a group is not configured."""

    def __init__(self, group: str):
        self.group = group
        super().__init__(f"Group '{group}' not found.")
