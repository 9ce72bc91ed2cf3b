"""Textual widget components."""

from essaypuzzle.tui.widgets.balance_chart import BalanceChart
from essaypuzzle.tui.widgets.block_list import BlockList, BlockListItem
from essaypuzzle.tui.widgets.content_editor import ContentEditor
from essaypuzzle.tui.widgets.sentence_breakdown import SentenceBreakdown
from essaypuzzle.tui.widgets.status_panel import StatusPanel

__all__ = [
    "BalanceChart",
    "BlockList",
    "BlockListItem",
    "ContentEditor",
    "SentenceBreakdown",
    "StatusPanel",
]
