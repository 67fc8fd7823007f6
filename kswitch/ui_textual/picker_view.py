"""Renders selector state as a Rich Text block."""

from __future__ import annotations

from rich.text import Text

from kswitch.core.selector import Row, Selector
from kswitch.ui_textual.style_tokens import (
    ACCENT,
    ACTIVE_DOT,
    ALIAS,
    COUNTER_GREY,
    CURSOR_BLOCK,
    DIM_GREY,
    ERROR,
    GREY,
    KEY_HELP,
    LABEL_GREY,
    PIN,
    PIN_ICON,
    POINTER,
    SCROLL_DOWN,
    SCROLL_UP,
    SEARCH,
    SEARCH_PLACEHOLDER,
    SEPARATOR,
    SUCCESS,
)

INDENT = "  "


def _render_row(row: Row) -> Text:
    line = Text(INDENT)
    line.append(f" {POINTER} " if row.is_cursor else "   ", style=f"bold {ACCENT}")
    line.append(f"{PIN_ICON} " if row.is_pinned else "  ", style=PIN)

    if row.is_cursor:
        style = f"bold {ACCENT}"
    elif row.is_current:
        style = f"bold {SUCCESS}"
    else:
        style = GREY
    line.append(row.display, style=style)

    for alias in row.aliases:
        line.append(f" @{alias}", style=f"bold {ALIAS}")
    if row.is_current:
        line.append(f" {ACTIVE_DOT}", style=SUCCESS)
    return line


def render_picker(selector: Selector) -> Text:
    """Build the full picker screen for the current selector state."""
    lines: list[Text] = []

    current = selector.annotations.current
    header = Text(INDENT)
    header.append("  current ", style=LABEL_GREY)
    header.append(selector.display_name(current) if current else "(none)", style=f"bold {SUCCESS}")
    alias = selector.annotations.alias_for(current) if current else ""
    if alias:
        header.append(f" @{alias}", style=f"bold {ALIAS}")
    if selector.pinned_only:
        header.append(f"  {PIN_ICON} pinned only", style=PIN)
    lines.append(header)
    lines.append(Text())

    if selector.query:
        lines.append(Text(f"{INDENT}  {POINTER} {selector.query}{CURSOR_BLOCK}", style=f"bold {SEARCH}"))
    else:
        lines.append(Text(f"{INDENT}  {POINTER} {SEARCH_PLACEHOLDER}", style=f"italic {DIM_GREY}"))
    lines.append(Text(f"{INDENT}  {SEPARATOR}", style=DIM_GREY))

    if not selector.filtered:
        lines.append(Text())
        lines.append(Text(f"{INDENT}  No matching contexts", style=DIM_GREY))
    else:
        if selector.hidden_above:
            lines.append(Text(f"{INDENT}    {SCROLL_UP} {selector.hidden_above} more", style=DIM_GREY))
        lines.extend(_render_row(row) for row in selector.visible_rows())
        if selector.hidden_below:
            lines.append(Text(f"{INDENT}    {SCROLL_DOWN} {selector.hidden_below} more", style=DIM_GREY))

    lines.append(Text())
    footer = Text(INDENT)
    footer.append(f"  {len(selector.filtered)}/{selector.total}", style=COUNTER_GREY)
    footer.append(f"  {KEY_HELP}", style=DIM_GREY)
    lines.append(footer)

    if selector.notice:
        lines.append(Text(f"{INDENT}  {selector.notice}", style=ERROR))

    return Text("\n").join(lines)
