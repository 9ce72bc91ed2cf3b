"""Focus Editor Screen: write one block and analyze its sentence balance.

The left side is the text editor; every change is saved to the block store
immediately. The right side shows the color legend, the balance chart and the
sentence breakdown of the latest analysis.
"""

from typing import Dict, Optional
import asyncio

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Footer, Label, Static, TextArea

from essaypuzzle.models.analysis import AnalysisOutcome
from essaypuzzle.models.background_task import BackgroundTask
from essaypuzzle.services.essay_state import EssayState
from essaypuzzle.services.focus_session import FocusSession
from essaypuzzle.services.llm_client import LLMClient
from essaypuzzle.services.llm_wrappers import analyze_essay_block
from essaypuzzle.tui.widgets.balance_chart import BalanceChart
from essaypuzzle.tui.widgets.block_list import BADGE_STYLES
from essaypuzzle.tui.widgets.content_editor import ContentEditor
from essaypuzzle.tui.widgets.sentence_breakdown import SentenceBreakdown, render_legend
from essaypuzzle.tui.widgets.status_panel import StatusPanel
from rich.text import Text
import structlog

logger = structlog.get_logger()


class FocusEditorScreen(Screen):
    """Focus editor for a single block."""

    DEFAULT_CSS = """
    FocusEditorScreen {
        layout: vertical;
    }

    #focus-panels {
        height: 1fr;
    }

    #editor-panel {
        width: 2fr;
        border: solid $accent;
        border-title-align: center;
    }

    #block-header {
        height: auto;
        padding: 0 1;
    }

    ContentEditor {
        height: 1fr;
    }

    #analysis-panel {
        width: 1fr;
        min-width: 36;
        padding: 0 1;
        border: solid $primary;
        border-title-align: center;
    }

    #legend, #balance-chart, #sentence-breakdown {
        height: auto;
        margin-bottom: 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+r", "analyze", "Analyser Tekst", priority=True),
        Binding("escape", "back", "Tilbake", priority=True),
    ]

    def __init__(
        self,
        state: EssayState,
        session: FocusSession,
        llm_client: Optional[LLMClient] = None,
        background_tasks: Optional[Dict[str, BackgroundTask]] = None,
        **kwargs
    ):
        """Initialize the focus editor.

        Args:
            state: Shared application state
            session: Focus session for the block being edited
            llm_client: LLM client (None when no API key is configured, or in tests)
            background_tasks: Shared background task status dict
        """
        super().__init__(**kwargs)
        self.state = state
        self.session = session
        self.llm_client = llm_client
        self.background_tasks = background_tasks if background_tasks is not None else {}

    def compose(self) -> ComposeResult:
        block = self.session.block

        with Horizontal(id="focus-panels"):
            with Vertical(id="editor-panel"):
                header = Text()
                header.append(f"{block.title}  ", style="bold")
                header.append(f" {block.type.value} ", style=BADGE_STYLES.get(block.type, ""))
                yield Label(header, id="block-header")
                yield ContentEditor()

            with VerticalScroll(id="analysis-panel"):
                yield Static(render_legend(), id="legend")
                yield BalanceChart()
                yield SentenceBreakdown()

        yield StatusPanel(background_tasks=self.background_tasks)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#editor-panel").border_title = "Skriv teksten din her"
        self.query_one("#analysis-panel").border_title = "Analyse"

        editor = self.query_one(ContentEditor)
        editor.load_content(self.session.buffer)
        editor.focus()
        self._update_word_count()
        self._update_analysis_display()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Save every edit to the block store."""
        text = event.text_area.text
        if text != self.session.buffer:
            self.session.update_buffer(text)
        self._update_word_count()

    def _update_word_count(self) -> None:
        words = self.query_one(ContentEditor).word_count
        self.query_one("#editor-panel").border_subtitle = f"{words} ord"

    def _update_analysis_display(self) -> None:
        result = self.session.result
        self.query_one(BalanceChart).show_analysis(result)
        self.query_one(SentenceBreakdown).show_analysis(result, analyzing=self.session.is_analyzing)

    def action_analyze(self) -> None:
        """Request sentence analysis for the current text (ctrl+r)."""
        text = self.session.buffer
        token = self.session.begin_analysis()
        if token is None:
            if self.session.is_analyzing:
                logger.debug("user_action_analyze_ignored", reason="already_analyzing")
            else:
                logger.debug("user_action_analyze_ignored", reason="blank_content")
            return

        logger.info("user_action_analyze", block_id=self.session.block_id, generation=token)
        self._update_analysis_display()
        self.run_worker(self._analysis_worker(token, text), name="sentence_analysis")

    async def _analysis_worker(self, token: int, text: str) -> None:
        """Worker: run sentence analysis and apply it if still current."""
        status_panel = self.query_one(StatusPanel)
        status_panel.set_task(BackgroundTask(task_type="sentence_analysis", status="running"))

        try:
            outcome = await analyze_essay_block(self.llm_client, text)

            # Failed analyses render as "not yet analyzed", not as errors
            del self.background_tasks["sentence_analysis"]
            status_panel.update_status()

            if self.session.complete_analysis(token, outcome):
                self._update_analysis_display()

        except asyncio.CancelledError:
            logger.info("analysis_cancelled", block_id=self.session.block_id)
            self.background_tasks.pop("sentence_analysis", None)
            self.session.complete_analysis(token, AnalysisOutcome.failed("cancelled"))
            raise

        except Exception as e:
            self.background_tasks["sentence_analysis"].status = "failed"
            self.background_tasks["sentence_analysis"].error_message = str(e)
            status_panel.update_status()
            self.session.complete_analysis(token, AnalysisOutcome.failed(str(e)))
            self._update_analysis_display()

            logger.error(
                "analysis_error",
                error=str(e),
                exc_info=True
            )

    def action_back(self) -> None:
        """Return to the timeline; the text is already saved."""
        logger.info("user_action_back_to_timeline", block_id=self.session.block_id)
        self.state.close_focus()
        self.app.pop_screen()
