"""Application state shared by the timeline and focus editor screens."""

from typing import Optional, Union

from essaypuzzle.models.essay_block import BlockType, EssayBlock
from essaypuzzle.services.block_store import BlockStore, MoveDirection
from essaypuzzle.services.focus_session import FocusSession
from essaypuzzle.utils.logging import get_logger


logger = get_logger(__name__)


class EssayState:
    """
    Explicit application state owned by the top-level app.

    Screens receive this object by reference and change it only through
    the methods below, never by editing blocks directly.
    """

    def __init__(self, store: Optional[BlockStore] = None):
        self.store = store if store is not None else BlockStore.seeded()
        self.focus: Optional[FocusSession] = None
        self.structural_advice: str = ""

    @property
    def active_block_id(self) -> Optional[str]:
        return self.focus.block_id if self.focus else None

    def open_block(self, block_id: str) -> Optional[FocusSession]:
        """
        Open the focus editor on a block, replacing any current session.

        Returns:
            The new session, or None if the block does not exist
        """
        if self.store.get(block_id) is None:
            logger.debug("focus_open_ignored", block_id=block_id, reason="not_found")
            return None

        self.close_focus()
        self.focus = FocusSession(self.store, block_id)
        return self.focus

    def close_focus(self) -> None:
        if self.focus is not None:
            self.focus.close()
            self.focus = None

    def add_block(self, block_type: BlockType) -> EssayBlock:
        return self.store.add(block_type)

    def update_content(self, block_id: str, text: str) -> None:
        self.store.update_content(block_id, text)

    def delete_block(self, block_id: str) -> None:
        if self.active_block_id == block_id:
            self.close_focus()
        self.store.delete(block_id)

    def move_block(self, block_id: str, direction: Union[MoveDirection, str]) -> None:
        self.store.move_adjacent(block_id, direction)

    def set_structural_advice(self, text: str) -> None:
        self.structural_advice = text

    def clear_structural_advice(self) -> None:
        self.structural_advice = ""
