"""Shared fixtures for UI tests."""

import pytest
from unittest.mock import AsyncMock, Mock

from essaypuzzle.services.llm_client import LLMClient


@pytest.fixture
def mock_llm_client(analysis_result):
    """LLM client that answers every request without network access."""
    client = Mock(spec=LLMClient)
    client.complete_json = AsyncMock(return_value=analysis_result)
    client.complete = AsyncMock(return_value="The order is logical.")
    return client
