"""Pydantic models for structured LLM output."""

from typing import Literal

from pydantic import BaseModel, Field


class DecisionOutput(BaseModel):
    """Output model for the summary decision.

    The model either continues the newest log entry or starts a new one,
    and drafts the entry text either way.
    """

    action: Literal["update", "new"] = Field(
        description='"update" to extend the newest entry, "new" to start a new one'
    )
    index: int | None = Field(
        default=None,
        description="Entry to update; only 0 (the newest entry) is accepted",
    )
    title: str = Field(min_length=1, description="Short topic phrase")
    summary: str = Field(
        min_length=1, description="One-paragraph summary of the new messages"
    )
