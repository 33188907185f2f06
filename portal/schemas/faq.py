"""FAQ and chatbot schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class FaqCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    question: str = Field(..., min_length=3, max_length=500)
    answer: str = Field(..., min_length=1)


class FaqResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    question: str
    answer: str
    created_at: datetime


class ChatRequest(BaseModel):
    message: str = Field(..., max_length=2000)
    context: str = ""


class ChatResponse(BaseModel):
    reply: str
