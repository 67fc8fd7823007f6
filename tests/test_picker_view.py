"""Tests for the picker renderer (kswitch/ui_textual/picker_view.py)."""

from kswitch.core.annotations import Annotations
from kswitch.core.selector import Selector, SelectorConfig
from kswitch.ui_textual.picker_view import render_picker
from kswitch.ui_textual.style_tokens import (
    ACTIVE_DOT,
    PIN_ICON,
    POINTER,
    SCROLL_DOWN,
    SCROLL_UP,
    SEARCH_PLACEHOLDER,
)


def _plain(selector):
    return render_picker(selector).plain


def _line_with(text, needle):
    return next(line for line in text.splitlines() if needle in line)


class TestHeader:
    """Current context and mode."""

    def test_current_with_alias(self):
        annotations = Annotations(current="eks-prod", aliases={"eks-prod": ["prod"]})
        text = _plain(Selector(["eks-dev", "eks-prod"], annotations))
        assert "current eks-prod @prod" in text

    def test_no_current(self):
        assert "current (none)" in _plain(Selector(["a"]))

    def test_pinned_only_tag(self):
        selector = Selector(["a"], Annotations(pins=["a"]), pinned_only=True)
        assert f"{PIN_ICON} pinned only" in _plain(selector)


class TestSearchLine:
    """Query and placeholder."""

    def test_placeholder(self):
        assert SEARCH_PLACEHOLDER in _plain(Selector(["a"]))

    def test_query_shown(self):
        selector = Selector(["alpha"])
        selector.type_text("al")
        text = _plain(selector)
        assert f"{POINTER} al" in text
        assert SEARCH_PLACEHOLDER not in text


class TestRows:
    """List rows and decorations."""

    def test_cursor_pin_alias_current(self):
        annotations = Annotations(
            current="beta", aliases={"beta": ["b", "bee"]}, pins=["gamma"]
        )
        selector = Selector(["alpha", "beta", "gamma"], annotations)
        text = _plain(selector)
        beta = _line_with(text, "beta @b @bee")
        assert POINTER in beta
        assert beta.endswith(ACTIVE_DOT)
        gamma = _line_with(text, "gamma")
        assert PIN_ICON in gamma
        assert POINTER not in gamma

    def test_short_names(self):
        arn = "arn:aws:eks:us-east-1:123456789012:cluster/payments"
        selector = Selector([arn], short_names=True)
        text = _plain(selector)
        assert "payments" in text
        assert arn not in text

    def test_empty_view(self):
        selector = Selector(["alpha"])
        selector.type_text("zz")
        text = _plain(selector)
        assert "No matching contexts" in text
        assert "0/1" in text

    def test_scroll_indicators(self):
        names = [f"ctx-{i:02d}" for i in range(20)]
        selector = Selector(names, config=SelectorConfig(terminal_height=15))
        selector.move(10)
        text = _plain(selector)
        assert f"{SCROLL_UP} 6 more" in text
        assert f"{SCROLL_DOWN} 9 more" in text
        assert "ctx-10" in text
        assert "ctx-05" not in text

    def test_counter(self):
        selector = Selector(["eks-a", "eks-b", "gke"])
        selector.type_text("eks")
        assert "2/3" in _plain(selector)


class TestNotice:
    """Save failures surface in the footer."""

    def test_notice_rendered(self):
        def fail(pins, short_names):
            raise OSError("disk full")

        selector = Selector(["alpha"], persist=fail)
        selector.toggle_pin()
        assert "Could not save preferences: disk full" in _plain(selector)
