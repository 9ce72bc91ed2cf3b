"""BalanceChart widget showing the claim/evidence/reflection distribution."""

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from essaypuzzle.models.analysis import AnalysisResult


BAR_WIDTH = 24
PLACEHOLDER = "Skriv og analyser for å se balansen"


def render_balance(analysis: Optional[AnalysisResult], width: int = BAR_WIDTH) -> Text:
    """
    Render the balance score as horizontal bars followed by the feedback tip.

    Args:
        analysis: Analysis result, or None when not analyzed
        width: Width of a 100% bar in cells

    Returns:
        Rich Text for display
    """
    if analysis is None:
        return Text(PLACEHOLDER, style="dim italic")

    text = Text()
    text.append("TEKSTBALANSE\n", style="bold")
    for label, value, style in analysis.balance_score.slices():
        filled = round(min(value, 100.0) / 100.0 * width)
        text.append(f"{label:<17}", style=style)
        text.append("█" * filled, style=style)
        text.append("░" * (width - filled), style="dim")
        text.append(f" {value:.0f}%\n")

    text.append(f'\n"{analysis.feedback}"', style="italic")
    return text


class BalanceChart(Static):
    """Balance display for the focus editor's analysis panel."""

    def __init__(self, *args, **kwargs):
        super().__init__(render_balance(None), *args, id="balance-chart", **kwargs)
        self.analysis: Optional[AnalysisResult] = None

    def show_analysis(self, analysis: Optional[AnalysisResult]) -> None:
        self.analysis = analysis
        self.update(render_balance(analysis))
