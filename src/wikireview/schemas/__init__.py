# src/wikireview/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import (
    CommentCreate,
    CommentCreateResponse,
    CommentListResponse,
    CommentNodeResponse,
    CommentResponse,
)
from .common import CamelModel, SuccessResponse
from .page import CreatorRecord, CreatorResponse, ProtectRequest, ProtectResponse
from .rating import RatingCreate, RatingSubmitResponse, RatingSummaryResponse
from .user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from .vote import VoteCreate, VoteResponse

__all__ = [
    "CamelModel", "SuccessResponse",
    "CommentCreate", "CommentCreateResponse", "CommentListResponse",
    "CommentNodeResponse", "CommentResponse",
    "CreatorRecord", "CreatorResponse", "ProtectRequest", "ProtectResponse",
    "RatingCreate", "RatingSubmitResponse", "RatingSummaryResponse",
    "AuthResponse", "CurrentUserResponse", "LoginRequest", "RegisterRequest", "UserResponse",
    "VoteCreate", "VoteResponse",
]
