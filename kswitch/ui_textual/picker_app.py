"""Full-screen Textual app that drives a Selector from keyboard input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from kswitch.core.selector import Outcome, Selector
from kswitch.ui_textual.picker_view import render_picker


@dataclass(frozen=True)
class SelectionResult:
    """How a picker session ended."""

    outcome: Outcome
    chosen: Optional[str] = None


class PickerView(Static):
    """Static widget holding the rendered picker."""

    DEFAULT_CSS = """
    PickerView {
        width: 100%;
        height: auto;
    }
    """


class PickerApp(App[SelectionResult]):
    """Context picker.

    Printable keys edit the query; everything else is a binding. Bindings
    are priority bindings so Textual's own defaults (command palette,
    quit) never see them.
    """

    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("up", "move(-1)", "Up", show=False, priority=True),
        Binding("down", "move(1)", "Down", show=False, priority=True),
        Binding("home", "top", "Top", show=False, priority=True),
        Binding("end", "bottom", "Bottom", show=False, priority=True),
        Binding("pageup", "page_up", "Page up", show=False, priority=True),
        Binding("pagedown", "page_down", "Page down", show=False, priority=True),
        Binding("backspace", "backspace", "Delete", show=False, priority=True),
        Binding("enter", "commit", "Select", show=False, priority=True),
        Binding("escape", "cancel", "Clear / quit", show=False, priority=True),
        Binding("ctrl+c", "abort", "Quit", show=False, priority=True),
        Binding("ctrl+p", "toggle_pin", "Pin", show=False, priority=True),
        Binding("ctrl+t", "first_pinned", "First pinned", show=False, priority=True),
        Binding("ctrl+o", "pinned_only", "Pinned only", show=False, priority=True),
        Binding("ctrl+s", "short_names", "Short names", show=False, priority=True),
    ]

    def __init__(self, selector: Selector, **kwargs):
        super().__init__(**kwargs)
        self.selector = selector

    def compose(self) -> ComposeResult:
        yield PickerView(id="picker")

    def on_mount(self) -> None:
        self.selector.resize(self.size.height)
        self._refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.selector.resize(event.size.height)
        self._refresh_view()

    def on_key(self, event: events.Key) -> None:
        if event.is_printable and event.character:
            event.stop()
            self.selector.type_text(event.character)
            self._after_event()

    def _refresh_view(self) -> None:
        self.query_one(PickerView).update(render_picker(self.selector))

    def _after_event(self) -> None:
        if not self.selector.running:
            self.exit(SelectionResult(self.selector.outcome, self.selector.chosen))
            return
        self._refresh_view()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_move(self, delta: int) -> None:
        self.selector.move(delta)
        self._after_event()

    def action_top(self) -> None:
        self.selector.move_to_top()
        self._after_event()

    def action_bottom(self) -> None:
        self.selector.move_to_bottom()
        self._after_event()

    def action_page_up(self) -> None:
        self.selector.page_up()
        self._after_event()

    def action_page_down(self) -> None:
        self.selector.page_down()
        self._after_event()

    def action_backspace(self) -> None:
        self.selector.backspace()
        self._after_event()

    def action_commit(self) -> None:
        self.selector.commit()
        self._after_event()

    def action_cancel(self) -> None:
        self.selector.cancel()
        self._after_event()

    def action_abort(self) -> None:
        self.selector.abort()
        self._after_event()

    def action_toggle_pin(self) -> None:
        self.selector.toggle_pin()
        self._after_event()

    def action_first_pinned(self) -> None:
        self.selector.jump_to_first_pinned()
        self._after_event()

    def action_pinned_only(self) -> None:
        self.selector.toggle_pinned_only()
        self._after_event()

    def action_short_names(self) -> None:
        self.selector.toggle_short_names()
        self._after_event()


def run_picker(selector: Selector) -> SelectionResult:
    """Run the picker until the user selects or quits."""
    result = PickerApp(selector).run()
    if result is None:
        return SelectionResult(Outcome.CANCELLED)
    return result
