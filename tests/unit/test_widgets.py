"""Unit tests for the widget render helpers."""

from essaypuzzle.models.analysis import AnalysisResult, BalanceScore
from essaypuzzle.models.background_task import BackgroundTask
from essaypuzzle.tui.widgets.balance_chart import PLACEHOLDER, render_balance
from essaypuzzle.tui.widgets.block_list import PREVIEW_LENGTH, format_preview
from essaypuzzle.tui.widgets.sentence_breakdown import (
    NOT_ANALYZED_HINT,
    render_legend,
    render_sentences,
)
from essaypuzzle.tui.widgets.status_panel import StatusPanel


class TestFormatPreview:

    def test_short_content_unchanged(self):
        assert format_preview("Schools should start later.") == "Schools should start later."

    def test_collapses_whitespace(self):
        assert format_preview("First line.\n\n  Second   line.") == "First line. Second line."

    def test_truncates_long_content(self):
        preview = format_preview("word " * 100)

        assert len(preview) <= PREVIEW_LENGTH
        assert preview.endswith("…")


class TestRenderBalance:

    def test_placeholder_when_not_analyzed(self):
        assert render_balance(None).plain == PLACEHOLDER

    def test_bars_and_feedback(self, analysis_result):
        plain = render_balance(analysis_result).plain

        assert plain.startswith("TEKSTBALANSE")
        assert "Påstand (Rød)" in plain
        assert "Bevis (Blå)" in plain
        assert "Drøfting (Grønn)" in plain
        assert "33%" in plain
        assert f'"{analysis_result.feedback}"' in plain

    def test_zero_slices_omitted(self):
        analysis = AnalysisResult(
            sentences=[],
            balanceScore=BalanceScore(claim=100, evidence=0, reflection=0),
            feedback="Add some evidence.",
        )

        plain = render_balance(analysis).plain

        assert "Påstand (Rød)" in plain
        assert "Bevis" not in plain
        assert "100%" in plain

    def test_all_zero_shows_neutral(self):
        analysis = AnalysisResult(
            sentences=[],
            balanceScore=BalanceScore(claim=0, evidence=0, reflection=0),
            feedback="Only transitions so far.",
        )

        assert "Nøytral" in render_balance(analysis).plain

    def test_bar_width(self, analysis_result):
        lines = render_balance(analysis_result, width=10).plain.splitlines()
        bar_line = next(line for line in lines if line.startswith("Påstand"))

        assert bar_line.count("█") + bar_line.count("░") == 10


class TestRenderSentences:

    def test_hint_when_not_analyzed(self):
        assert render_sentences(None).plain == NOT_ANALYZED_HINT

    def test_analyzing_indicator(self):
        assert render_sentences(None, analyzing=True).plain == "Analyserer..."

    def test_sentences_in_order(self, analysis_result, sample_text):
        plain = render_sentences(analysis_result).plain

        assert plain.startswith("ANALYSERT INNHOLD")
        assert sample_text in plain

    def test_sentences_colored_by_type(self, analysis_result):
        text = render_sentences(analysis_result)
        styles = {str(span.style) for span in text.spans}

        assert "bold red" in styles
        assert "bold blue" in styles
        assert "bold green" in styles

    def test_suggestions_listed(self, analysis_result):
        plain = render_sentences(analysis_result).plain

        assert "FORSLAG" in plain
        assert "• Name the study." in plain

    def test_no_suggestions_section_without_suggestions(self, analysis_payload):
        for sentence in analysis_payload["sentences"]:
            sentence["suggestion"] = None
        analysis = AnalysisResult.model_validate(analysis_payload)

        assert "FORSLAG" not in render_sentences(analysis).plain

    def test_legend(self):
        plain = render_legend().plain

        assert "Påstand" in plain
        assert "Bevis" in plain
        assert "Refleksjon" in plain


class TestStatusPanel:

    def test_ready_when_idle(self):
        assert StatusPanel(background_tasks={}).render_status().plain == "Ready"

    def test_running_and_failed_tasks(self):
        tasks = {
            "sentence_analysis": BackgroundTask(task_type="sentence_analysis"),
            "structural_advice": BackgroundTask(
                task_type="structural_advice",
                status="failed",
                error_message="bad [bold] reply [/]",
            ),
        }

        plain = StatusPanel(background_tasks=tasks).render_status().plain

        assert plain == "Analyserer tekst... | ⚠ Structure check failed: bad [bold] reply [/]"

    def test_completed_tasks_hidden(self):
        tasks = {"sentence_analysis": BackgroundTask(task_type="sentence_analysis", status="completed")}

        assert StatusPanel(background_tasks=tasks).render_status().plain == "Ready"
