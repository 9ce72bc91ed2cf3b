"""Ordered in-memory collection of essay blocks backing the timeline."""

from enum import Enum
from typing import Iterator, Optional, Union

from essaypuzzle.models.essay_block import BlockType, EssayBlock
from essaypuzzle.utils.ids import generate_block_id
from essaypuzzle.utils.logging import get_logger


logger = get_logger(__name__)


class MoveDirection(str, Enum):
    """Direction for adjacent reordering on the timeline."""

    UP = "up"
    DOWN = "down"


# Blocks every new essay starts with, in timeline order
SEED_BLOCKS: list[tuple[BlockType, str]] = [
    (BlockType.INTRODUCTION, "Innledning"),
    (BlockType.CLAIM, "Hovedpåstand"),
    (BlockType.EVIDENCE, "Første Bevis"),
    (BlockType.REFLECTION, "Min Drøfting"),
    (BlockType.CONCLUSION, "Konklusjon"),
]


class BlockStore:
    """
    Ordered collection of EssayBlock objects.

    The sequence itself is the display order. Each block's ``order`` field is
    renumbered after deletes and moves so it always equals the block's index,
    but callers should prefer ``index_of`` over reading the field.

    Operations on unknown ids are silent no-ops. There is no limit on the
    number of blocks and no constraint on the order of block types.
    """

    def __init__(self, blocks: Optional[list[EssayBlock]] = None):
        self._blocks: list[EssayBlock] = list(blocks or [])
        self._renumber()

    @classmethod
    def seeded(cls) -> "BlockStore":
        """Create a store holding the five starting blocks."""
        store = cls()
        for block_type, title in SEED_BLOCKS:
            store.add(block_type, title=title)
        return store

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[EssayBlock]:
        return iter(tuple(self._blocks))

    @property
    def blocks(self) -> tuple[EssayBlock, ...]:
        """Snapshot of the blocks in display order."""
        return tuple(self._blocks)

    def block_types(self) -> list[BlockType]:
        """Block types in display order (the input for structural advice)."""
        return [b.type for b in self._blocks]

    def index_of(self, block_id: str) -> Optional[int]:
        """Position of the first block with this id, or None."""
        for i, block in enumerate(self._blocks):
            if block.id == block_id:
                return i
        return None

    def get(self, block_id: str) -> Optional[EssayBlock]:
        index = self.index_of(block_id)
        return self._blocks[index] if index is not None else None

    def is_first(self, block_id: str) -> bool:
        return self.index_of(block_id) == 0

    def is_last(self, block_id: str) -> bool:
        index = self.index_of(block_id)
        return index is not None and index == len(self._blocks) - 1

    def add(self, block_type: BlockType, title: Optional[str] = None) -> EssayBlock:
        """
        Append a new empty block to the end of the timeline.

        Args:
            block_type: Rhetorical role of the new block
            title: Display title (defaults to the type's default title)

        Returns:
            The newly created block
        """
        block_type = BlockType(block_type)
        block = EssayBlock(
            id=generate_block_id(),
            type=block_type,
            title=title if title is not None else block_type.default_title,
            content="",
            order=len(self._blocks),
        )
        self._blocks.append(block)

        logger.info(
            "block_added",
            block_id=block.id,
            block_type=block_type.value,
            position=block.order,
            total_blocks=len(self._blocks),
        )
        return block

    def update_content(self, block_id: str, text: str) -> None:
        """Replace the content of a block. Unknown ids are ignored."""
        block = self.get(block_id)
        if block is None:
            logger.debug("block_update_ignored", block_id=block_id, reason="not_found")
            return
        block.content = text
        logger.debug("block_content_updated", block_id=block_id, content_length=len(text))

    def update_title(self, block_id: str, title: str) -> None:
        """Replace the title of a block. Unknown ids are ignored."""
        block = self.get(block_id)
        if block is None:
            logger.debug("block_title_update_ignored", block_id=block_id, reason="not_found")
            return
        block.title = title
        logger.info("block_title_updated", block_id=block_id, title=title)

    def delete(self, block_id: str) -> None:
        """Remove the first block with this id. Unknown ids are ignored."""
        index = self.index_of(block_id)
        if index is None:
            logger.debug("block_delete_ignored", block_id=block_id, reason="not_found")
            return

        removed = self._blocks.pop(index)
        self._renumber()

        logger.info(
            "block_deleted",
            block_id=block_id,
            block_type=removed.type.value,
            position=index,
            total_blocks=len(self._blocks),
        )

    def move_adjacent(self, block_id: str, direction: Union[MoveDirection, str]) -> None:
        """
        Swap a block with its neighbour.

        ``up`` swaps with the predecessor, ``down`` with the successor. Moving
        the first block up, the last block down, or an unknown id does nothing.

        Args:
            block_id: Block to move
            direction: MoveDirection or "up"/"down"

        Raises:
            ValueError: If direction is not "up" or "down"
        """
        direction = MoveDirection(direction)
        index = self.index_of(block_id)
        if index is None:
            logger.debug("block_move_ignored", block_id=block_id, reason="not_found")
            return

        target = index - 1 if direction == MoveDirection.UP else index + 1
        if target < 0 or target >= len(self._blocks):
            logger.debug(
                "block_move_ignored",
                block_id=block_id,
                direction=direction.value,
                reason="boundary",
            )
            return

        self._blocks[index], self._blocks[target] = self._blocks[target], self._blocks[index]
        self._renumber()

        logger.info(
            "block_moved",
            block_id=block_id,
            direction=direction.value,
            from_position=index,
            to_position=target,
        )

    def _renumber(self) -> None:
        for i, block in enumerate(self._blocks):
            if block.order != i:
                block.order = i
