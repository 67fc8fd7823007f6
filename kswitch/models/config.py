"""Pydantic model for the persisted kswitch config document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

MAX_HISTORY = 10


class KswConfig(BaseModel):
    """User preferences stored in ~/.ksw.json.

    Unknown keys are kept so that settings written by other ksw versions
    survive a load/save cycle.
    """

    model_config = ConfigDict(extra="allow")

    aliases: dict[str, str] = Field(default_factory=dict, description="Map of alias to context name")
    pins: list[str] = Field(default_factory=list, description="Pinned contexts in display order")
    groups: dict[str, list[str]] = Field(
        default_factory=dict, description="Map of group name to member contexts"
    )
    history: list[str] = Field(default_factory=list, description="Recently used contexts, newest first")
    short_names: bool = Field(default=False, description="Display contexts by their short name")

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    def aliases_for(self, context: str) -> list[str]:
        """All aliases pointing at a context, sorted."""
        return sorted(alias for alias, target in self.aliases.items() if target == context)

    def reverse_aliases(self) -> dict[str, list[str]]:
        """Map each aliased context to its sorted aliases."""
        reverse: dict[str, list[str]] = {}
        for alias in sorted(self.aliases):
            reverse.setdefault(self.aliases[alias], []).append(alias)
        return reverse

    # ------------------------------------------------------------------
    # Pins
    # ------------------------------------------------------------------

    def is_pinned(self, context: str) -> bool:
        return context in self.pins

    def toggle_pin(self, context: str) -> bool:
        """Pin or unpin a context. Returns True if it is pinned afterwards."""
        if context in self.pins:
            self.pins.remove(context)
            return False
        self.pins.append(context)
        return True

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    def add_to_group(self, group: str, context: str) -> bool:
        """Append a context to a group, creating it if needed.

        Returns False when the context was already a member.
        """
        members = self.groups.setdefault(group, [])
        if context in members:
            return False
        members.append(context)
        return True

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def record_history(self, previous: str, chosen: str) -> None:
        """Record a switch from ``previous`` to ``chosen``.

        The chosen context goes first, the context being left second, and
        older entries follow without duplicates.
        """
        head = [chosen]
        if previous and previous != chosen:
            head.append(previous)
        rest = [entry for entry in self.history if entry not in head]
        self.history = (head + rest)[:MAX_HISTORY]

    def previous_context(self, current: str) -> str | None:
        """Most recent history entry that is not the current context."""
        for entry in self.history:
            if entry != current:
                return entry
        return None

    # ------------------------------------------------------------------
    # Rename
    # ------------------------------------------------------------------

    def rename_context(self, old: str, new: str) -> None:
        """Rewrite every reference to ``old`` so it points at ``new``."""
        for alias, target in self.aliases.items():
            if target == old:
                self.aliases[alias] = new
        self.pins = [new if p == old else p for p in self.pins]
        for name, members in self.groups.items():
            self.groups[name] = [new if m == old else m for m in members]
        self.history = [new if h == old else h for h in self.history]
