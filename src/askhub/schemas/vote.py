"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote on an answer.

    The range check lives in the vote service so a bad value is reported
    as ``invalid_argument`` rather than a request-shape error.
    """

    value: int = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    action: str
    value: int | None
    votes: int


class VoteStatusResponse(BaseModel):
    has_voted: bool
    value: int | None = None
