"""Unit tests for data models."""

import pytest
from pydantic import ValidationError

from essaypuzzle.models.analysis import (
    AnalysisOutcome,
    AnalysisResult,
    AnalysisStatus,
    AnalyzedSentence,
    BalanceScore,
    SentenceType,
)
from essaypuzzle.models.background_task import BackgroundTask
from essaypuzzle.models.essay_block import BlockType, EssayBlock


class TestEssayBlock:
    """Test EssayBlock model."""

    def test_create_block(self):
        block = EssayBlock(id="b1", type=BlockType.CLAIM, title="Påstand")

        assert block.content == ""
        assert block.order == 0
        assert block.is_empty

    def test_content_and_title_are_mutable(self):
        block = EssayBlock(id="b1", type=BlockType.CLAIM, title="Påstand")

        block.content = "Tekst"
        block.title = "Ny"

        assert block.content == "Tekst"
        assert not block.is_empty

    def test_id_is_immutable(self):
        block = EssayBlock(id="b1", type=BlockType.CLAIM, title="Påstand")

        with pytest.raises(ValidationError):
            block.id = "b2"

    def test_type_is_immutable(self):
        block = EssayBlock(id="b1", type=BlockType.CLAIM, title="Påstand")

        with pytest.raises(ValidationError):
            block.type = BlockType.EVIDENCE

    def test_whitespace_content_is_empty(self):
        block = EssayBlock(id="b1", type=BlockType.CLAIM, title="x", content="  \n ")
        assert block.is_empty


class TestBlockType:
    """Test BlockType labels."""

    def test_labels(self):
        assert BlockType.CLAIM.label == "Påstand"
        assert BlockType.REFLECTION.label == "Drøfting"
        assert BlockType.CONCLUSION.label == "Konklusjon"

    def test_parse_from_string(self):
        assert BlockType("EVIDENCE") is BlockType.EVIDENCE


class TestAnalysisResult:
    """Test AnalysisResult parsing and helpers."""

    def test_parse_llm_payload(self, analysis_payload):
        result = AnalysisResult.model_validate(analysis_payload)

        assert len(result.sentences) == 4
        assert result.sentences[0].type == SentenceType.CLAIM
        assert result.sentences[1].suggestion == "Name the study."
        assert result.sentences[2].suggestion is None
        assert result.balance_score.reflection == 33.4

    def test_parse_by_field_name(self):
        result = AnalysisResult(
            sentences=[],
            balance_score=BalanceScore(claim=0, evidence=0, reflection=0),
            feedback="Skriv mer.",
        )
        assert result.balance_score.claim == 0

    def test_missing_balance_score_rejected(self, analysis_payload):
        del analysis_payload["balanceScore"]
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(analysis_payload)

    def test_unknown_sentence_type_rejected(self, analysis_payload):
        analysis_payload["sentences"][0]["type"] = "OPINION"
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(analysis_payload)

    def test_negative_score_rejected(self, analysis_payload):
        analysis_payload["balanceScore"]["claim"] = -5
        with pytest.raises(ValidationError):
            AnalysisResult.model_validate(analysis_payload)

    def test_scores_need_not_sum_to_100(self, analysis_payload):
        analysis_payload["balanceScore"] = {"claim": 50, "evidence": 50, "reflection": 50}
        result = AnalysisResult.model_validate(analysis_payload)
        assert result.balance_score.claim == 50

    def test_json_schema_uses_alias(self):
        schema = AnalysisResult.model_json_schema()
        assert "balanceScore" in schema["properties"]
        assert set(schema["required"]) == {"sentences", "balanceScore", "feedback"}

    def test_joined_text_reconstructs_input(self, analysis_result, sample_text):
        """Test sentences concatenate back to the analyzed text."""
        assert analysis_result.joined_text() == sample_text
        assert analysis_result.segmentation_coverage(sample_text) == 1.0

    def test_segmentation_coverage_detects_dropped_text(self, analysis_result, sample_text):
        longer = sample_text + (
            " An entire extra paragraph the model never returned, which covers the"
            " opposing view that early starts build discipline and routine."
        )
        assert analysis_result.segmentation_coverage(longer) < 0.9

    def test_segmentation_coverage_ignores_whitespace(self, analysis_result, sample_text):
        spaced = sample_text.replace(". ", ".\n\n")
        assert analysis_result.segmentation_coverage(spaced) == 1.0

    def test_count_by_type(self, analysis_result):
        counts = analysis_result.count_by_type()
        assert counts[SentenceType.CLAIM] == 1
        assert counts[SentenceType.NEUTRAL] == 1


class TestBalanceScore:
    """Test chart slices."""

    def test_slices_skip_zero_values(self):
        slices = BalanceScore(claim=60, evidence=40, reflection=0).slices()
        assert [s[0] for s in slices] == ["Påstand (Rød)", "Bevis (Blå)"]

    def test_slices_neutral_placeholder(self):
        slices = BalanceScore(claim=0, evidence=0, reflection=0).slices()
        assert slices == [("Nøytral", 100.0, "grey50")]


class TestAnalysisOutcome:
    """Test the typed analysis result."""

    def test_analyzed(self, analysis_result):
        outcome = AnalysisOutcome.analyzed(analysis_result)
        assert outcome.ok
        assert outcome.as_optional() is analysis_result

    @pytest.mark.parametrize("outcome,status", [
        (AnalysisOutcome.skipped(), AnalysisStatus.SKIPPED),
        (AnalysisOutcome.unavailable(), AnalysisStatus.UNAVAILABLE),
        (AnalysisOutcome.empty(), AnalysisStatus.EMPTY),
        (AnalysisOutcome.failed("boom"), AnalysisStatus.FAILED),
    ])
    def test_absent_results_stay_distinguishable(self, outcome, status):
        assert outcome.status == status
        assert not outcome.ok
        assert outcome.as_optional() is None

    def test_failed_keeps_error(self):
        assert AnalysisOutcome.failed("timeout").error == "timeout"


class TestAnalyzedSentence:

    def test_suggestion_optional(self):
        sentence = AnalyzedSentence(text="Hei.", type="NEUTRAL")
        assert sentence.suggestion is None


class TestBackgroundTask:
    """Test BackgroundTask model."""

    def test_defaults_to_running(self):
        task = BackgroundTask(task_type="sentence_analysis")
        assert task.status == "running"
        assert task.error_message is None

    def test_rejects_unknown_task_type(self):
        with pytest.raises(ValidationError):
            BackgroundTask(task_type="page_indexing")
