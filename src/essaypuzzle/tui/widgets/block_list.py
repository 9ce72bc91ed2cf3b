"""BlockList widget: the essay timeline.

Displays the blocks in sequence order as cards with a type badge, title and
a short content preview.
"""

from typing import Optional

from rich.text import Text
from textual.widgets import ListView, ListItem, Static

from essaypuzzle.models.essay_block import BlockType, EssayBlock


PREVIEW_LENGTH = 80

BADGE_STYLES = {
    BlockType.CLAIM: "bold white on red",
    BlockType.EVIDENCE: "bold white on blue",
    BlockType.REFLECTION: "bold white on green",
    BlockType.INTRODUCTION: "bold black on grey70",
    BlockType.CONCLUSION: "bold black on grey70",
}


def format_preview(content: str, length: int = PREVIEW_LENGTH) -> str:
    """Collapse content to a single line, truncated with an ellipsis."""
    text = " ".join(content.split())
    if len(text) > length:
        return text[: length - 1].rstrip() + "…"
    return text


class BlockListItem(ListItem):
    """
    A single block card on the timeline.

    Shows:
    - Position and type badge
    - Title
    - Content preview, or a hint when the block is empty
    """

    def __init__(self, block: EssayBlock, position: int):
        super().__init__()
        self.block = block
        self.block_id = block.id
        self.position = position

    def compose(self):
        """Compose the list item layout."""
        text = Text()
        text.append(f"{self.position + 1:>2}. ", style="dim")
        text.append(f" {self.block.type.label.upper()} ", style=BADGE_STYLES.get(self.block.type, ""))
        text.append(f" {self.block.title}\n", style="bold")
        text.append("    ")
        if self.block.is_empty:
            text.append("Klikk for å skrive...", style="italic dim")
        else:
            text.append(format_preview(self.block.content))

        yield Static(text)


class BlockList(ListView):
    """
    Timeline of essay blocks.

    The list is rebuilt from a block snapshot after every store mutation;
    the highlighted index is restored so keyboard moves keep the cursor on
    the moved block.
    """

    def __init__(self, blocks: tuple[EssayBlock, ...] = (), **kwargs):
        items = [BlockListItem(block, i) for i, block in enumerate(blocks)]
        super().__init__(*items, id="block-list", **kwargs)

    async def load_blocks(self, blocks: tuple[EssayBlock, ...], index: Optional[int] = None) -> None:
        """Replace the displayed cards and highlight ``index``."""
        await self.clear()
        if blocks:
            await self.extend([BlockListItem(block, i) for i, block in enumerate(blocks)])
            if index is None:
                index = 0
            self.index = max(0, min(index, len(blocks) - 1))

    def get_current_block_id(self) -> Optional[str]:
        """Get the block ID of the currently highlighted card."""
        item = self.highlighted_child
        if isinstance(item, BlockListItem):
            return item.block_id
        return None
