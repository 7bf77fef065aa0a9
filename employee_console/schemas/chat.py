"""Pydantic schemas for the chat webhook."""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


class ChatMessage(BaseModel):
    """Chat widgets send either text or content"""
    text: Optional[str] = None
    content: Optional[str] = None
    role: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("text", "content", mode="before")
    @classmethod
    def coerce_to_str(cls, value):
        return None if value is None else str(value)


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = []


class ChatReply(BaseModel):
    text: str
