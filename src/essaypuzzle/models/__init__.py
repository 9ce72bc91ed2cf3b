"""Pydantic data models for Essay Puzzle."""

from essaypuzzle.models.essay_block import BlockType, EssayBlock
from essaypuzzle.models.analysis import (
    AnalysisOutcome,
    AnalysisResult,
    AnalysisStatus,
    AnalyzedSentence,
    BalanceScore,
    SentenceType,
)

__all__ = [
    "AnalysisOutcome",
    "AnalysisResult",
    "AnalysisStatus",
    "AnalyzedSentence",
    "BalanceScore",
    "BlockType",
    "EssayBlock",
    "SentenceType",
]
