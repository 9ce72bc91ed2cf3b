"""Main Essay Puzzle TUI Application.

The app owns the shared state and hands it to the screens:

- ``EssayState``: block store, active focus session and structural advice
- ``llm_client``: LLM client, or None when no API key is configured
- ``background_tasks``: status of running LLM requests, shown by StatusPanel

It starts on the timeline; the focus editor is pushed on top of it and
popped when the user goes back.
"""

from typing import Dict, Optional

from textual.app import App
from textual.binding import Binding
import structlog

from essaypuzzle.models.background_task import BackgroundTask
from essaypuzzle.models.config import Config
from essaypuzzle.services.essay_state import EssayState
from essaypuzzle.services.llm_client import LLMClient
from essaypuzzle.tui.screens import TimelineScreen

logger = structlog.get_logger()


class EssayPuzzleApp(App):
    """Main Essay Puzzle TUI Application."""

    TITLE = "Essay Puslespillet"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", show=True, priority=True),
        Binding("q", "quit", "Quit", show=False),
    ]

    def __init__(
        self,
        state: Optional[EssayState] = None,
        llm_client: Optional[LLMClient] = None,
        config: Optional[Config] = None,
    ):
        """Initialize the Essay Puzzle app.

        Args:
            state: Application state (defaults to the five seeded blocks)
            llm_client: LLM client, or None to disable AI features
            config: Application configuration
        """
        super().__init__()

        self.state = state if state is not None else EssayState()
        self.llm_client = llm_client
        self.config = config
        self.background_tasks: Dict[str, BackgroundTask] = {}

        logger.info(
            "app_initialized",
            total_blocks=len(self.state.store),
            ai_enabled=llm_client is not None,
        )

    def on_mount(self) -> None:
        """Called when app is mounted. Start on the timeline."""
        self.push_screen(
            TimelineScreen(
                state=self.state,
                llm_client=self.llm_client,
                background_tasks=self.background_tasks,
                name="timeline",
            )
        )
        logger.info("timeline_screen_pushed")

    async def action_quit(self) -> None:
        """Quit the application."""
        logger.info("app_quit", total_blocks=len(self.state.store))
        self.state.close_focus()
        self.exit()
