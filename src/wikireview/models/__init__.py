# src/wikireview/models/__init__.py
"""SQLAlchemy models for the WikiReview application."""

from .comment import Comment, CommentVote
from .page import PageCreator
from .rating import Rating
from .user import User, UserSession

__all__ = [
    "Comment", "CommentVote",
    "PageCreator",
    "Rating",
    "User", "UserSession",
]
