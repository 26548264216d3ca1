# /assist/models/conversation.py

from datetime import datetime, timezone
from typing import Literal
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChatMessage(BaseModel):
    """Represents one message in the chat transcript."""
    role: Literal["user", "assistant"] = Field(..., description="Who sent the message")
    content: str = Field(..., description="Message text")
    timestamp: datetime = Field(default_factory=_utcnow, description="When the message was recorded")
