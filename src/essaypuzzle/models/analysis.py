"""Pydantic models for sentence analysis results.

``AnalysisResult`` doubles as the structured-output schema sent to the LLM:
its JSON schema (with the ``balanceScore`` alias) is what the service must
return, and a response that does not validate is discarded wholesale.
"""

from difflib import SequenceMatcher
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SentenceType(str, Enum):
    """Rhetorical role of one sentence within analyzed content."""

    CLAIM = "CLAIM"
    EVIDENCE = "EVIDENCE"
    REFLECTION = "REFLECTION"
    NEUTRAL = "NEUTRAL"


# Rich styles used wherever sentence types are colored
SENTENCE_STYLES = {
    SentenceType.CLAIM: "bold red",
    SentenceType.EVIDENCE: "bold blue",
    SentenceType.REFLECTION: "bold green",
    SentenceType.NEUTRAL: "",
}


class AnalyzedSentence(BaseModel):
    """One sentence of the analyzed text and its classification."""

    text: str = Field(
        ...,
        description="Sentence text, copied from the analyzed content"
    )

    type: SentenceType = Field(
        ...,
        description="Rhetorical function of the sentence"
    )

    suggestion: Optional[str] = Field(
        default=None,
        description="Optional improvement suggestion for this sentence"
    )


class BalanceScore(BaseModel):
    """Percentage distribution across the three non-neutral sentence types."""

    claim: float = Field(..., ge=0.0, description="Percentage of claim sentences")
    evidence: float = Field(..., ge=0.0, description="Percentage of evidence sentences")
    reflection: float = Field(..., ge=0.0, description="Percentage of reflection sentences")

    def slices(self) -> list[tuple[str, float, str]]:
        """
        Chart slices for the balance display.

        Categories with a zero value are left out. When nothing is left (only
        neutral sentences) a single neutral slice of 100 is returned.

        Returns:
            List of (label, value, rich style) tuples
        """
        data = [
            ("Påstand (Rød)", self.claim, "red"),
            ("Bevis (Blå)", self.evidence, "blue"),
            ("Drøfting (Grønn)", self.reflection, "green"),
        ]
        data = [d for d in data if d[1] > 0]
        if not data:
            data.append(("Nøytral", 100.0, "grey50"))
        return data


class AnalysisResult(BaseModel):
    """Sentence classification, balance score and feedback for one block."""

    sentences: list[AnalyzedSentence] = Field(
        ...,
        description="Ordered sentences covering the full input text"
    )

    balance_score: BalanceScore = Field(
        ...,
        alias="balanceScore",
        description="Claim/evidence/reflection percentages"
    )

    feedback: str = Field(
        ...,
        description="One short constructive tip based on the balance"
    )

    model_config = {"populate_by_name": True}

    def joined_text(self) -> str:
        """Concatenate the sentence texts back into a single string."""
        return " ".join(s.text.strip() for s in self.sentences if s.text.strip())

    def segmentation_coverage(self, original: str) -> float:
        """
        How closely the sentences reconstruct the original text.

        Whitespace is normalized on both sides before comparing, since
        segmentation drops the separators between sentences.

        Args:
            original: Text that was sent for analysis

        Returns:
            Similarity ratio between 0.0 and 1.0
        """
        expected = " ".join(original.split())
        actual = " ".join(self.joined_text().split())
        if not expected and not actual:
            return 1.0
        return SequenceMatcher(None, expected, actual, autojunk=False).ratio()

    def count_by_type(self) -> dict[SentenceType, int]:
        """Number of sentences per sentence type."""
        counts = {t: 0 for t in SentenceType}
        for sentence in self.sentences:
            counts[sentence.type] += 1
        return counts


class AnalysisStatus(str, Enum):
    """Why an analysis request did or did not produce a result."""

    ANALYZED = "analyzed"
    SKIPPED = "skipped"
    UNAVAILABLE = "unavailable"
    EMPTY = "empty"
    FAILED = "failed"


class AnalysisOutcome(BaseModel):
    """Typed result of an analysis request.

    The UI renders every non-ANALYZED status the same way ("not yet
    analyzed"), but calling code can still tell them apart.
    """

    status: AnalysisStatus = Field(
        ...,
        description="Outcome of the request"
    )

    result: Optional[AnalysisResult] = Field(
        default=None,
        description="Analysis result, present only when status is ANALYZED"
    )

    error: Optional[str] = Field(
        default=None,
        description="Diagnostic message when status is FAILED"
    )

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status == AnalysisStatus.ANALYZED and self.result is not None

    def as_optional(self) -> Optional[AnalysisResult]:
        """Collapse to the nullable view: the result, or None."""
        return self.result if self.ok else None

    @classmethod
    def analyzed(cls, result: AnalysisResult) -> "AnalysisOutcome":
        return cls(status=AnalysisStatus.ANALYZED, result=result)

    @classmethod
    def skipped(cls) -> "AnalysisOutcome":
        return cls(status=AnalysisStatus.SKIPPED)

    @classmethod
    def unavailable(cls) -> "AnalysisOutcome":
        return cls(status=AnalysisStatus.UNAVAILABLE)

    @classmethod
    def empty(cls) -> "AnalysisOutcome":
        return cls(status=AnalysisStatus.EMPTY)

    @classmethod
    def failed(cls, error: str) -> "AnalysisOutcome":
        return cls(status=AnalysisStatus.FAILED, error=error)
