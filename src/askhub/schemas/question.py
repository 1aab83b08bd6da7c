"""Question-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .answer import AnswerResponse


class QuestionCreate(BaseModel):
    """Schema for asking a question."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1)
    tags: list[str] = Field(..., min_length=1, description="Between one and five tags")


class QuestionUpdate(QuestionCreate):
    """Schema for editing a question; every field is replaced."""


class QuestionResponse(BaseModel):
    """Schema for question information returned by the API."""

    id: int
    owner_id: int
    title: str
    description: str
    tags: list[str]
    views: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class QuestionDetailResponse(QuestionResponse):
    answers: list[AnswerResponse] = Field(default_factory=list)


class TrendingQuestionResponse(BaseModel):
    question: QuestionResponse
    answer_count: int

    model_config = ConfigDict(from_attributes=True)
