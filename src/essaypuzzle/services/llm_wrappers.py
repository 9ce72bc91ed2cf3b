"""LLM wrapper functions that wrap LLMClient with the essay prompts.

Both wrappers absorb every failure: sentence analysis reports it as an
AnalysisOutcome status, structural advice as a fixed fallback sentence.
"""

from typing import Iterable, Optional
import httpx

from essaypuzzle.models.analysis import AnalysisOutcome, AnalysisResult
from essaypuzzle.models.essay_block import BlockType
from essaypuzzle.services.exceptions import LLMResponseError
from essaypuzzle.services.llm_client import LLMClient
from essaypuzzle.utils.logging import get_logger


logger = get_logger(__name__)

ADVICE_UNAVAILABLE = "AI services unavailable."
ADVICE_EMPTY = "Structure looks okay."
ADVICE_FAILED = "Could not analyze structure."

# Below this, the returned sentences no longer reconstruct the input well
MIN_SEGMENTATION_COVERAGE = 0.9


def _build_analysis_prompt(text: str) -> str:
    return (
        f"Analyze the following text which is part of an essay.\n"
        f"1. Break the text down into individual sentences. Copy each sentence exactly as written.\n"
        f"2. Classify each sentence based on its function:\n"
        f"   - CLAIM: Presents an argument, main point, or topic sentence.\n"
        f"   - EVIDENCE: Provides facts, quotes, citations, or concrete examples.\n"
        f"   - REFLECTION: Discusses the evidence, offers personal insight, analysis, or explanation.\n"
        f"   - NEUTRAL: Transitional phrases or standard descriptions that don't fit the above strictly.\n"
        f"3. Calculate the percentage of each type (0-100) across claim, evidence and reflection.\n"
        f"4. Provide a brief, constructive feedback tip (max 20 words) based on the balance. "
        f"E.g., if there is too much evidence but no reflection, suggest adding personal thoughts.\n\n"
        f"Respond with JSON only, in this shape:\n"
        f'{{"sentences": [{{"text": "...", "type": "CLAIM", "suggestion": null}}], '
        f'"balanceScore": {{"claim": 0, "evidence": 0, "reflection": 0}}, "feedback": "..."}}\n\n'
        f"Text to analyze:\n"
        f'"{text}"'
    )


def _build_structure_prompt(block_types: list[str]) -> str:
    return (
        f"I have an essay structure with the following block types in order: {', '.join(block_types)}.\n"
        f"Is this a logical flow? If not, suggest a better order or what is missing in one sentence."
    )


async def analyze_essay_block(
    llm_client: Optional[LLMClient],
    text: str
) -> AnalysisOutcome:
    """
    Classify the sentences of one block and score their balance.

    Blank text and a missing client short-circuit without any request.
    Transport errors and unusable responses are converted to a FAILED or
    EMPTY outcome; no exception escapes.

    Args:
        llm_client: LLM client, or None when no API key is configured
        text: Block content to analyze

    Returns:
        AnalysisOutcome describing the result

    Example:
        >>> outcome = await analyze_essay_block(client, "Schools should start later. ...")
        >>> if outcome.ok:
        ...     print(outcome.result.feedback)
    """
    if not text.strip():
        logger.debug("analysis_skipped", reason="blank_input")
        return AnalysisOutcome.skipped()

    if llm_client is None:
        logger.error("analysis_unavailable", reason="api_key_missing")
        return AnalysisOutcome.unavailable()

    try:
        result = await llm_client.complete_json(
            prompt=_build_analysis_prompt(text),
            response_model=AnalysisResult,
            temperature=0.2,
            request_id="sentence_analysis",
        )
    except LLMResponseError as e:
        if e.is_empty:
            logger.warning("analysis_empty_response")
            return AnalysisOutcome.empty()
        logger.error("analysis_failed", error=str(e), error_type=type(e).__name__)
        return AnalysisOutcome.failed(e.message)
    except httpx.HTTPError as e:
        logger.error("analysis_failed", error=str(e), error_type=type(e).__name__)
        return AnalysisOutcome.failed(str(e) or type(e).__name__)

    coverage = result.segmentation_coverage(text)
    if coverage < MIN_SEGMENTATION_COVERAGE:
        logger.warning(
            "analysis_segmentation_lossy",
            coverage=round(coverage, 3),
            sentence_count=len(result.sentences),
        )

    logger.info(
        "analysis_completed",
        sentence_count=len(result.sentences),
        claim=result.balance_score.claim,
        evidence=result.balance_score.evidence,
        reflection=result.balance_score.reflection,
    )
    return AnalysisOutcome.analyzed(result)


async def get_structural_advice(
    llm_client: Optional[LLMClient],
    block_types: Iterable[BlockType | str]
) -> str:
    """
    Ask whether an ordered sequence of block types forms a logical essay flow.

    Only the type labels are sent, never block content.

    Args:
        llm_client: LLM client, or None when no API key is configured
        block_types: Block types in timeline order

    Returns:
        The model's advice, or one of the fallback sentences. Never empty.
    """
    labels = [t.value if isinstance(t, BlockType) else str(t) for t in block_types]

    if llm_client is None:
        logger.error("structural_advice_unavailable", reason="api_key_missing")
        return ADVICE_UNAVAILABLE

    try:
        advice = await llm_client.complete(
            prompt=_build_structure_prompt(labels),
            request_id="structural_advice",
        )
    except (httpx.HTTPError, LLMResponseError) as e:
        logger.error("structural_advice_failed", error=str(e), error_type=type(e).__name__)
        return ADVICE_FAILED

    advice = advice.strip()
    if not advice:
        logger.warning("structural_advice_empty")
        return ADVICE_EMPTY

    logger.info("structural_advice_completed", block_count=len(labels), advice_length=len(advice))
    return advice
