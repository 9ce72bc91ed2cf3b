"""Focus editor session: transient editing and analysis state for one block."""

from enum import Enum
from typing import Optional

from essaypuzzle.models.analysis import AnalysisOutcome, AnalysisResult
from essaypuzzle.services.block_store import BlockStore
from essaypuzzle.utils.logging import get_logger


logger = get_logger(__name__)


class FocusState(str, Enum):
    """Analysis state of a focus session."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"


class FocusSession:
    """
    Editing session over a single block.

    Every buffer change is written straight through to the store, so closing
    the session never loses text. Analysis is only started on request, and
    each request gets a generation token: a result is applied only when its
    token is still current, so a late response from an earlier request (or
    one that arrives after the session was closed) is dropped.
    """

    def __init__(self, store: BlockStore, block_id: str):
        block = store.get(block_id)
        if block is None:
            raise KeyError(block_id)

        self.store = store
        self.block_id = block_id
        self.buffer = block.content
        self.state = FocusState.IDLE
        self.result: Optional[AnalysisResult] = None
        self.last_outcome: Optional[AnalysisOutcome] = None
        self.generation = 0
        self.closed = False

        logger.info("focus_session_opened", block_id=block_id, content_length=len(self.buffer))

    @property
    def block(self):
        return self.store.get(self.block_id)

    @property
    def is_analyzing(self) -> bool:
        return self.state == FocusState.ANALYZING

    @property
    def can_analyze(self) -> bool:
        """Whether an analysis request may be started right now."""
        return not self.closed and not self.is_analyzing and bool(self.buffer.strip())

    def update_buffer(self, text: str) -> None:
        """Update the local buffer and save it to the store immediately."""
        if self.closed:
            logger.debug("focus_session_edit_ignored", block_id=self.block_id, reason="closed")
            return
        self.buffer = text
        self.store.update_content(self.block_id, text)

    def begin_analysis(self) -> Optional[int]:
        """
        Enter the analyzing state.

        Returns:
            Generation token to pass to complete_analysis(), or None if
            analysis cannot start (blank buffer, already analyzing, closed)
        """
        if not self.can_analyze:
            logger.debug(
                "analysis_not_started",
                block_id=self.block_id,
                state=self.state.value,
                closed=self.closed,
            )
            return None

        self.generation += 1
        self.state = FocusState.ANALYZING
        logger.info("analysis_started", block_id=self.block_id, generation=self.generation)
        return self.generation

    def complete_analysis(self, token: int, outcome: AnalysisOutcome) -> bool:
        """
        Apply the outcome of the request identified by ``token``.

        Args:
            token: Generation token returned by begin_analysis()
            outcome: Outcome of the analysis request

        Returns:
            True if the outcome was applied, False if it was stale
        """
        if self.closed or token != self.generation:
            logger.warning(
                "analysis_result_stale",
                block_id=self.block_id,
                token=token,
                current_generation=self.generation,
                closed=self.closed,
            )
            return False

        self.last_outcome = outcome
        if outcome.ok:
            self.result = outcome.result
            self.state = FocusState.ANALYZED
        else:
            self.result = None
            self.state = FocusState.IDLE

        logger.info(
            "analysis_applied",
            block_id=self.block_id,
            generation=token,
            status=outcome.status.value,
        )
        return True

    def close(self) -> None:
        """Close the session; in-flight analysis results will be discarded."""
        if self.closed:
            return
        self.closed = True
        self.generation += 1
        self.result = None
        self.state = FocusState.IDLE
        logger.info("focus_session_closed", block_id=self.block_id)
