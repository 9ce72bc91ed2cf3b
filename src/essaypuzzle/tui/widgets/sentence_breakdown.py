"""SentenceBreakdown widget: analyzed text colored by sentence type."""

from typing import Optional

from rich.text import Text
from textual.widgets import Static

from essaypuzzle.models.analysis import AnalysisResult, SENTENCE_STYLES, SentenceType


NOT_ANALYZED_HINT = (
    'Trykk ctrl+r ("Analyser Tekst") for å se fargekodingen og balansen i avsnittet ditt.'
)


def render_legend() -> Text:
    """Legend for the sentence colors."""
    text = Text()
    text.append("GRAMMATIKKSYMBOLER\n", style="bold dim")
    text.append("● ", style=SENTENCE_STYLES[SentenceType.CLAIM])
    text.append("Påstand (Hovedsetning)\n")
    text.append("● ", style=SENTENCE_STYLES[SentenceType.EVIDENCE])
    text.append("Bevis (Kilde/Fakta)\n")
    text.append("● ", style=SENTENCE_STYLES[SentenceType.REFLECTION])
    text.append("Refleksjon (Drøfting)")
    return text


def render_sentences(analysis: Optional[AnalysisResult], analyzing: bool = False) -> Text:
    """
    Render the analyzed sentences with one color per sentence type.

    Suggestions are listed under the sentences they belong to.
    """
    if analysis is None:
        if analyzing:
            return Text("Analyserer...", style="italic")
        return Text(NOT_ANALYZED_HINT, style="dim")

    text = Text()
    text.append("ANALYSERT INNHOLD\n", style="bold dim")
    for sentence in analysis.sentences:
        style = SENTENCE_STYLES.get(sentence.type, "")
        text.append(sentence.text.strip(), style=style)
        text.append(" ")

    suggestions = [s for s in analysis.sentences if s.suggestion]
    if suggestions:
        text.append("\n\nFORSLAG\n", style="bold dim")
        for sentence in suggestions:
            text.append("• ", style=SENTENCE_STYLES.get(sentence.type, ""))
            text.append(f"{sentence.suggestion}\n")

    return text


class SentenceBreakdown(Static):
    """Sentence-by-sentence view of the latest analysis."""

    def __init__(self, *args, **kwargs):
        super().__init__(render_sentences(None), *args, id="sentence-breakdown", **kwargs)

    def show_analysis(self, analysis: Optional[AnalysisResult], analyzing: bool = False) -> None:
        self.update(render_sentences(analysis, analyzing))
