"""Per-context annotations consumed by the selector and the renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from kswitch.models.config import KswConfig


@dataclass
class Annotations:
    """Read-only view of what the config says about each context.

    ``pins`` is the live pin list; the selector's pin toggle mutates it in
    place. ``restriction`` is an optional set of eligible contexts (an
    active group); ``None`` means every context is eligible.
    """

    current: str = ""
    aliases: dict[str, list[str]] = field(default_factory=dict)
    pins: list[str] = field(default_factory=list)
    restriction: Optional[frozenset[str]] = None

    @classmethod
    def from_config(
        cls, config: KswConfig, current: str = "", group: Optional[str] = None
    ) -> "Annotations":
        """Build annotations from the loaded config.

        Args:
            config: Loaded config; its pin list is shared, not copied
            current: The active context, if known
            group: Restrict eligibility to this group's members
        """
        restriction = None
        if group is not None:
            restriction = frozenset(config.groups.get(group, []))
        return cls(
            current=current,
            aliases=config.reverse_aliases(),
            pins=config.pins,
            restriction=restriction,
        )

    def is_pinned(self, name: str) -> bool:
        return name in self.pins

    def is_current(self, name: str) -> bool:
        return bool(self.current) and name == self.current

    def aliases_for(self, name: str) -> list[str]:
        return self.aliases.get(name, [])

    def alias_for(self, name: str) -> str:
        """First alias of a context, or an empty string."""
        aliases = self.aliases_for(name)
        return aliases[0] if aliases else ""

    def is_eligible(self, name: str) -> bool:
        return self.restriction is None or name in self.restriction
