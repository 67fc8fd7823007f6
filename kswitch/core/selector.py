"""Interactive selection state machine behind the context picker.

The selector owns the candidate list, the query, the ranked/filtered view,
the cursor and the scroll window. Every event handler is synchronous and
leaves the state consistent before returning:

* ``0 <= cursor < len(filtered)`` whenever the view is non-empty
* ``scroll_offset <= cursor < scroll_offset + viewport_height``
* every filtered entry fuzzy-matches the query

The filtered view is always rebuilt from scratch: eligible candidates are
scored, non-matches dropped, the rest stable-sorted by score, and pinned
candidates moved to the front in pin-list order.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from kswitch.core.annotations import Annotations
from kswitch.core.kube.resolve import short_name
from kswitch.core.matcher import rank, searchable_text

logger = logging.getLogger(__name__)

PersistCallback = Callable[[list[str], bool], None]


class Outcome(enum.Enum):
    """Where the session stands."""

    RUNNING = "running"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass
class SelectorConfig:
    """Layout and navigation tunables."""

    terminal_height: int = 24
    chrome_lines: int = 10  # header and footer rows around the list
    page_size: int = 10
    min_viewport: int = 3


@dataclass(frozen=True)
class Row:
    """One visible line of the list, as a renderer needs it."""

    position: int
    name: str
    display: str
    aliases: tuple[str, ...]
    is_cursor: bool
    is_current: bool
    is_pinned: bool


class Selector:
    """Fuzzy-filtered list with a cursor, driven one event at a time."""

    def __init__(
        self,
        candidates: Sequence[str],
        annotations: Optional[Annotations] = None,
        config: Optional[SelectorConfig] = None,
        *,
        short_names: bool = False,
        pinned_only: bool = False,
        persist: Optional[PersistCallback] = None,
    ):
        """Start a session.

        Args:
            candidates: Context names in source order, assumed unique
            annotations: Current context, aliases, pins and group restriction
            config: Layout tunables
            short_names: Display short names instead of full names
            pinned_only: Start with only pinned candidates eligible
            persist: Called with (pins, short_names) after a pin or
                short-name toggle; failures are logged, never raised
        """
        self.candidates: tuple[str, ...] = tuple(candidates)
        self.annotations = annotations or Annotations()
        self.config = config or SelectorConfig()
        self.short_names = short_names
        self.pinned_only = pinned_only
        self._persist = persist

        self._texts = [
            searchable_text(name, self.annotations.aliases_for(name)) for name in self.candidates
        ]

        self.query = ""
        self.filtered: list[int] = []
        self.cursor = 0
        self.scroll_offset = 0
        self.viewport_height = self._viewport_for(self.config.terminal_height)
        self.outcome = Outcome.RUNNING
        self.chosen: Optional[str] = None
        self.notice = ""

        self._recompute()
        for position, index in enumerate(self.filtered):
            if self.annotations.is_current(self.candidates[index]):
                self.cursor = position
                break
        self._ensure_visible()

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def pins(self) -> list[str]:
        return self.annotations.pins

    @property
    def running(self) -> bool:
        return self.outcome is Outcome.RUNNING

    @property
    def total(self) -> int:
        return len(self.candidates)

    @property
    def filtered_names(self) -> list[str]:
        return [self.candidates[index] for index in self.filtered]

    @property
    def selected(self) -> Optional[str]:
        """Candidate under the cursor, or None when the view is empty."""
        if not self.filtered:
            return None
        return self.candidates[self.filtered[self.cursor]]

    @property
    def hidden_above(self) -> int:
        return self.scroll_offset

    @property
    def hidden_below(self) -> int:
        return max(0, len(self.filtered) - self.scroll_offset - self.viewport_height)

    def display_name(self, name: str) -> str:
        return short_name(name) if self.short_names else name

    def visible_rows(self) -> list[Row]:
        """Rows inside the scroll window, top to bottom."""
        end = min(len(self.filtered), self.scroll_offset + self.viewport_height)
        rows = []
        for position in range(self.scroll_offset, end):
            name = self.candidates[self.filtered[position]]
            rows.append(
                Row(
                    position=position,
                    name=name,
                    display=self.display_name(name),
                    aliases=tuple(self.annotations.aliases_for(name)),
                    is_cursor=position == self.cursor,
                    is_current=self.annotations.is_current(name),
                    is_pinned=self.annotations.is_pinned(name),
                )
            )
        return rows

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _viewport_for(self, terminal_height: int) -> int:
        return max(self.config.min_viewport, terminal_height - self.config.chrome_lines)

    def _eligible(self) -> list[int]:
        pins = set(self.pins)
        return [
            index
            for index, name in enumerate(self.candidates)
            if self.annotations.is_eligible(name) and (not self.pinned_only or name in pins)
        ]

    def _recompute(self) -> None:
        eligible = self._eligible()
        ranked = rank([self._texts[index] for index in eligible], self.query)
        ordered = [eligible[entry.index] for entry in ranked]

        pin_order: dict[str, int] = {}
        for i, name in enumerate(self.pins):
            pin_order.setdefault(name, i)
        pinned = sorted(
            (index for index in ordered if self.candidates[index] in pin_order),
            key=lambda index: pin_order[self.candidates[index]],
        )
        rest = [index for index in ordered if self.candidates[index] not in pin_order]
        self.filtered = pinned + rest

    def _reset_position(self) -> None:
        self.cursor = 0
        self.scroll_offset = 0

    def _clamp_cursor(self) -> None:
        self.cursor = max(0, min(self.cursor, len(self.filtered) - 1))

    def _ensure_visible(self) -> None:
        if self.cursor < self.scroll_offset:
            self.scroll_offset = self.cursor
        elif self.cursor >= self.scroll_offset + self.viewport_height:
            self.scroll_offset = self.cursor - self.viewport_height + 1

    def _save_preferences(self) -> None:
        if self._persist is None:
            return
        try:
            self._persist(list(self.pins), self.short_names)
        except Exception as exc:
            logger.warning("Failed to save preferences: %s", exc)
            self.notice = f"Could not save preferences: {exc}"
        else:
            self.notice = ""

    # ------------------------------------------------------------------
    # Query editing
    # ------------------------------------------------------------------

    def type_text(self, chars: str) -> None:
        """Append characters to the query and re-filter."""
        if not self.running or not chars:
            return
        self.query += chars
        self._recompute()
        self._reset_position()

    def backspace(self) -> None:
        """Drop the last query character and re-filter."""
        if not self.running or not self.query:
            return
        self.query = self.query[:-1]
        self._recompute()
        self._reset_position()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move(self, delta: int) -> None:
        """Move the cursor by ``delta`` rows, stopping at either end."""
        if not self.running or not self.filtered:
            return
        self.cursor += delta
        self._clamp_cursor()
        self._ensure_visible()

    def move_to_top(self) -> None:
        if not self.running or not self.filtered:
            return
        self.cursor = 0
        self._ensure_visible()

    def move_to_bottom(self) -> None:
        if not self.running or not self.filtered:
            return
        self.cursor = len(self.filtered) - 1
        self._ensure_visible()

    def page_up(self) -> None:
        self.move(-self.config.page_size)

    def page_down(self) -> None:
        self.move(self.config.page_size)

    def jump_to_first_pinned(self) -> None:
        if not self.running:
            return
        for position, index in enumerate(self.filtered):
            if self.annotations.is_pinned(self.candidates[index]):
                self.cursor = position
                self._ensure_visible()
                return

    def resize(self, terminal_height: int) -> None:
        """Adapt the scroll window to a new terminal height."""
        self.viewport_height = self._viewport_for(terminal_height)
        self._ensure_visible()

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    def toggle_pin(self) -> None:
        """Pin or unpin the highlighted candidate; the cursor follows it."""
        name = self.selected
        if not self.running or name is None:
            return

        if name in self.pins:
            self.pins.remove(name)
        else:
            self.pins.append(name)
        self._save_preferences()

        self._recompute()
        if self.filtered:
            try:
                self.cursor = self.filtered_names.index(name)
            except ValueError:
                # unpinned while showing pinned only
                self._clamp_cursor()
        else:
            self.cursor = 0
        self._ensure_visible()

    def toggle_pinned_only(self) -> None:
        """Show only pinned candidates, or everything again."""
        if not self.running:
            return
        self.pinned_only = not self.pinned_only
        self.query = ""
        self._recompute()
        self._reset_position()

    def toggle_short_names(self) -> None:
        if not self.running:
            return
        self.short_names = not self.short_names
        self._save_preferences()

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------

    def commit(self) -> None:
        """Choose the highlighted candidate; ignored on an empty view."""
        if not self.running or not self.filtered:
            return
        self.chosen = self.selected
        self.outcome = Outcome.COMMITTED

    def cancel(self) -> None:
        """Clear the query if there is one, otherwise end the session."""
        if not self.running:
            return
        if self.query:
            self.query = ""
            self._recompute()
            self._reset_position()
            return
        self.outcome = Outcome.CANCELLED

    def abort(self) -> None:
        if self.running:
            self.outcome = Outcome.CANCELLED
