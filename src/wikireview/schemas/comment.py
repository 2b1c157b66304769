"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class CommentCreate(CamelModel):
    """Schema for posting a comment or a reply."""

    subject_id: int = Field(..., description="Wiki page id being commented on")
    subject_label: str | None = Field(None, description="Page title at the time of posting")
    text: str = Field(..., description="Comment body")
    author: str | None = Field(None, description="Display name; defaults to the anonymous author")
    parent_comment_id: int | None = Field(None, description="Comment being replied to")


class CommentResponse(CamelModel):
    """A single stored comment."""

    id: int
    subject_id: int
    subject_label: str
    text: str
    author: str
    parent_comment_id: int | None = None
    created_at: datetime


class CommentNodeResponse(CommentResponse):
    """A comment with its vote aggregates and nested replies."""

    upvotes: int = 0
    downvotes: int = 0
    user_vote: int | None = None
    replies: list[CommentNodeResponse] = Field(default_factory=list)


CommentNodeResponse.model_rebuild()


class CommentListResponse(CamelModel):
    comments: list[CommentNodeResponse]


class CommentCreateResponse(CamelModel):
    success: bool = True
    comment: CommentResponse
