"""Terminal UI for kswitch."""

from kswitch.ui_textual.picker_app import PickerApp, SelectionResult, run_picker
from kswitch.ui_textual.picker_view import render_picker

__all__ = ["PickerApp", "SelectionResult", "render_picker", "run_picker"]
