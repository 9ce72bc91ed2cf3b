"""EssayBlock model for the timeline."""

from enum import Enum
from pydantic import BaseModel, Field


class BlockType(str, Enum):
    """Rhetorical role of a block on the timeline."""

    INTRODUCTION = "INTRODUCTION"
    CLAIM = "CLAIM"
    EVIDENCE = "EVIDENCE"
    REFLECTION = "REFLECTION"
    CONCLUSION = "CONCLUSION"

    @property
    def label(self) -> str:
        """Badge label shown in the UI."""
        return BLOCK_TYPE_LABELS[self]

    @property
    def default_title(self) -> str:
        """Title given to a newly added block of this type."""
        return DEFAULT_TITLES.get(self, "Ny Seksjon")


BLOCK_TYPE_LABELS = {
    BlockType.INTRODUCTION: "Innledning",
    BlockType.CLAIM: "Påstand",
    BlockType.EVIDENCE: "Bevis",
    BlockType.REFLECTION: "Drøfting",
    BlockType.CONCLUSION: "Konklusjon",
}

DEFAULT_TITLES = {
    BlockType.CLAIM: "Ny Påstand",
    BlockType.EVIDENCE: "Nytt Bevis",
    BlockType.REFLECTION: "Ny Drøfting",
}


class EssayBlock(BaseModel):
    """A titled, typed unit of essay content with a position in the timeline."""

    id: str = Field(
        ...,
        frozen=True,
        description="Opaque unique identifier, assigned at creation"
    )

    type: BlockType = Field(
        ...,
        frozen=True,
        description="Rhetorical role of the block, fixed at creation"
    )

    title: str = Field(
        ...,
        description="Short display label"
    )

    content: str = Field(
        default="",
        description="Free-form text body, edited in the focus editor"
    )

    order: int = Field(
        default=0,
        ge=0,
        description="Position hint; BlockStore keeps it equal to the sequence position"
    )

    model_config = {"frozen": False}  # content and title change while editing

    @property
    def is_empty(self) -> bool:
        """Whether the block has no text yet."""
        return not self.content.strip()
