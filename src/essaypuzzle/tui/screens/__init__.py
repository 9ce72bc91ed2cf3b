"""Textual screen components."""

from essaypuzzle.tui.screens.focus_editor import FocusEditorScreen
from essaypuzzle.tui.screens.timeline import TimelineScreen

__all__ = [
    "FocusEditorScreen",
    "TimelineScreen",
]
