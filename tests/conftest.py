"""Shared test fixtures for all test modules."""

import pytest

from essaypuzzle.models.analysis import AnalysisResult
from essaypuzzle.models.config import LLMConfig
from essaypuzzle.services.block_store import BlockStore


SAMPLE_TEXT = (
    "Schools should start later in the morning. "
    "A 2014 study found that later start times improved attendance by 12 percent. "
    "I think this shows that rested students simply learn better. "
    "Let us look at the counterarguments."
)


@pytest.fixture
def sample_text():
    """Paragraph with one sentence of each type."""
    return SAMPLE_TEXT


@pytest.fixture
def analysis_payload():
    """Schema-conforming analysis response for SAMPLE_TEXT, as the LLM sends it."""
    return {
        "sentences": [
            {"text": "Schools should start later in the morning.", "type": "CLAIM"},
            {
                "text": "A 2014 study found that later start times improved attendance by 12 percent.",
                "type": "EVIDENCE",
                "suggestion": "Name the study.",
            },
            {"text": "I think this shows that rested students simply learn better.", "type": "REFLECTION"},
            {"text": "Let us look at the counterarguments.", "type": "NEUTRAL", "suggestion": None},
        ],
        "balanceScore": {"claim": 33.3, "evidence": 33.3, "reflection": 33.4},
        "feedback": "Good balance; consider expanding your reflection.",
    }


@pytest.fixture
def analysis_result(analysis_payload):
    return AnalysisResult.model_validate(analysis_payload)


@pytest.fixture
def llm_config():
    """Create test LLM configuration."""
    return LLMConfig(
        endpoint="https://api.test.com/v1",
        api_key="test-key",
        model="test-model"
    )


@pytest.fixture
def seeded_store():
    """Store holding the five starting blocks."""
    return BlockStore.seeded()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's own configuration out of the tests."""
    for name in (
        "ESSAYPUZZLE_LLM_ENDPOINT",
        "ESSAYPUZZLE_LLM_API_KEY",
        "ESSAYPUZZLE_LLM_MODEL",
        "ESSAYPUZZLE_LOG_FILE",
        "ESSAYPUZZLE_LOG_LEVEL",
        "API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
