"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from .common import CamelModel


class VoteCreate(CamelModel):
    """Schema for voting on a comment."""

    comment_id: int
    vote: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(CamelModel):
    """Aggregates for the comment after the vote was applied."""

    success: bool = True
    upvotes: int
    downvotes: int
    user_vote: int | None = None
