"""Custom exceptions for Essay Puzzle services."""

from typing import Optional


class LLMResponseError(Exception):
    """Raised when the LLM answers but the answer cannot be used.

    Covers empty message content, content that is not JSON, and JSON that
    does not validate against the requested response model. Transport
    problems are reported as ``httpx.HTTPError`` instead.

    Attributes:
        message: Human-readable error message
        content: Raw response content, if any was received
    """

    def __init__(self, message: str, content: Optional[str] = None):
        """Initialize LLMResponseError.

        Args:
            message: Human-readable error message
            content: Raw response content, if any was received
        """
        self.message = message
        self.content = content
        super().__init__(message)

    @property
    def is_empty(self) -> bool:
        """Whether the service returned no content at all."""
        return not (self.content or "").strip()
