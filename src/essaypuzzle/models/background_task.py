"""BackgroundTask model for LLM requests running in workers."""

from pydantic import BaseModel, Field
from typing import Literal, Optional


class BackgroundTask(BaseModel):
    """Status of one background LLM request."""

    task_type: Literal[
        "sentence_analysis",
        "structural_advice",
    ] = Field(
        ...,
        description="Type of background task"
    )

    status: Literal["running", "completed", "failed"] = Field(
        default="running",
        description="Current task status"
    )

    error_message: Optional[str] = Field(
        default=None,
        description="Error details if status is 'failed'"
    )

    model_config = {"frozen": False}  # Allow mutation as task progresses
