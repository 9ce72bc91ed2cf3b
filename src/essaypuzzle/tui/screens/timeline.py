"""Timeline Screen: the ordered list of essay blocks.

Users add, delete and reorder blocks here, open a block in the focus editor,
and ask the LLM whether the sequence of block types forms a logical flow.
"""

from typing import Dict, Optional
import asyncio

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, Label, ListView, Static
from rich.text import Text

from essaypuzzle.models.background_task import BackgroundTask
from essaypuzzle.models.essay_block import BlockType
from essaypuzzle.services.block_store import MoveDirection
from essaypuzzle.services.essay_state import EssayState
from essaypuzzle.services.llm_client import LLMClient
from essaypuzzle.services.llm_wrappers import get_structural_advice
from essaypuzzle.tui.widgets.block_list import BlockList
from essaypuzzle.tui.widgets.status_panel import StatusPanel
import structlog

logger = structlog.get_logger()


class TimelineScreen(Screen):
    """Timeline screen listing the essay blocks in order."""

    DEFAULT_CSS = """
    TimelineScreen {
        layout: vertical;
    }

    #timeline-header {
        height: auto;
        padding: 0 1;
        text-style: bold;
    }

    #advice-banner {
        height: auto;
        margin: 0 1;
        padding: 0 1;
        border: round $accent;
    }

    #timeline-container {
        height: 1fr;
    }

    BlockList {
        height: 1fr;
    }

    #tips {
        height: auto;
        padding: 0 1;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("z", "zoom_in", "Zoom Inn"),
        Binding("d", "delete_block", "Slett"),
        Binding("K", "move_up", "Flytt opp"),
        Binding("J", "move_down", "Flytt ned"),
        Binding("1", "add_block('CLAIM')", "Ny påstand"),
        Binding("2", "add_block('EVIDENCE')", "Nytt bevis"),
        Binding("3", "add_block('REFLECTION')", "Ny drøfting"),
        Binding("4", "add_block('INTRODUCTION')", "Ny innledning", show=False),
        Binding("5", "add_block('CONCLUSION')", "Ny konklusjon", show=False),
        Binding("s", "check_flow", "Sjekk Flyt"),
        Binding("x", "dismiss_advice", "Lukk råd", show=False),
    ]

    def __init__(
        self,
        state: EssayState,
        llm_client: Optional[LLMClient] = None,
        background_tasks: Optional[Dict[str, BackgroundTask]] = None,
        **kwargs
    ):
        """Initialize the timeline screen.

        Args:
            state: Shared application state
            llm_client: LLM client (None when no API key is configured, or in tests)
            background_tasks: Shared background task status dict
        """
        super().__init__(**kwargs)
        self.state = state
        self.llm_client = llm_client
        self.background_tasks = background_tasks if background_tasks is not None else {}

    def compose(self) -> ComposeResult:
        yield Label("Essay Puslespillet · Montessori Strukturverktøy", id="timeline-header")
        yield Static("", id="advice-banner")
        with Container(id="timeline-container"):
            yield BlockList(self.state.store.blocks)
        yield Static(
            "Tips: Start med tidslinjen. Trykk enter for å skrive innholdet. "
            "Bruk fargene for å sjekke balansen mellom påstander (rød), bevis (blå) og dine egne tanker (grønn).",
            id="tips",
        )
        yield StatusPanel(background_tasks=self.background_tasks)
        yield Footer()

    def on_mount(self) -> None:
        block_list = self.query_one(BlockList)
        if len(self.state.store):
            block_list.index = 0
        block_list.focus()
        self._update_advice_banner()

    async def on_screen_resume(self) -> None:
        """Refresh the cards when returning from the focus editor."""
        await self.refresh_blocks()

    async def refresh_blocks(self, highlight_id: Optional[str] = None) -> None:
        """Rebuild the block list from the store.

        Args:
            highlight_id: Block to highlight afterwards (defaults to the current one)
        """
        block_list = self.query_one(BlockList)
        if highlight_id is None:
            highlight_id = block_list.get_current_block_id()

        index = self.state.store.index_of(highlight_id) if highlight_id else None
        if index is None:
            index = block_list.index

        await block_list.load_blocks(self.state.store.blocks, index)

    def _current_block_id(self) -> Optional[str]:
        return self.query_one(BlockList).get_current_block_id()

    def _update_advice_banner(self) -> None:
        banner = self.query_one("#advice-banner", Static)
        banner.update(Text(self.state.structural_advice))
        banner.display = bool(self.state.structural_advice)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Enter on a card opens it in the focus editor."""
        event.stop()
        self.action_zoom_in()

    def action_zoom_in(self) -> None:
        """Open the highlighted block in the focus editor."""
        block_id = self._current_block_id()
        if block_id is None:
            return

        session = self.state.open_block(block_id)
        if session is None:
            return

        from essaypuzzle.tui.screens.focus_editor import FocusEditorScreen

        logger.info("user_action_zoom_in", block_id=block_id)
        self.app.push_screen(
            FocusEditorScreen(
                state=self.state,
                session=session,
                llm_client=self.llm_client,
                background_tasks=self.background_tasks,
            )
        )

    async def action_add_block(self, block_type: str) -> None:
        """Append a new block of the given type."""
        block = self.state.add_block(BlockType(block_type))
        logger.info("user_action_add_block", block_type=block_type)
        await self.refresh_blocks(highlight_id=block.id)

    async def action_delete_block(self) -> None:
        block_id = self._current_block_id()
        if block_id is None:
            return

        index = self.state.store.index_of(block_id)
        self.state.delete_block(block_id)
        logger.info("user_action_delete_block", block_id=block_id)

        await self.query_one(BlockList).load_blocks(self.state.store.blocks, index)

    async def action_move_up(self) -> None:
        await self._move(MoveDirection.UP)

    async def action_move_down(self) -> None:
        await self._move(MoveDirection.DOWN)

    async def _move(self, direction: MoveDirection) -> None:
        block_id = self._current_block_id()
        if block_id is None:
            return

        self.state.move_block(block_id, direction)
        logger.info("user_action_move_block", block_id=block_id, direction=direction.value)
        await self.refresh_blocks(highlight_id=block_id)

    def action_check_flow(self) -> None:
        """Ask the LLM about the structural flow ('s' key)."""
        self.run_worker(self._structural_advice_worker(), name="structural_advice", exclusive=True)

    def action_dismiss_advice(self) -> None:
        self.state.clear_structural_advice()
        self._update_advice_banner()

    async def _structural_advice_worker(self) -> None:
        """Worker: fetch structural advice for the current block order."""
        status_panel = self.query_one(StatusPanel)
        status_panel.set_task(BackgroundTask(task_type="structural_advice", status="running"))

        block_types = self.state.store.block_types()
        logger.info("structural_advice_requested", block_types=[t.value for t in block_types])

        try:
            advice = await get_structural_advice(self.llm_client, block_types)

            self.state.set_structural_advice(advice)
            self._update_advice_banner()

            del self.background_tasks["structural_advice"]
            status_panel.update_status()

        except asyncio.CancelledError:
            logger.info("structural_advice_cancelled")
            self.background_tasks.pop("structural_advice", None)
            raise

        except Exception as e:
            self.background_tasks["structural_advice"].status = "failed"
            self.background_tasks["structural_advice"].error_message = str(e)
            status_panel.update_status()

            logger.error(
                "structural_advice_error",
                error=str(e),
                exc_info=True
            )
