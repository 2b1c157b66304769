# src/wikireview/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .comments import router as comments_router
from .pages import router as pages_router
from .ratings import router as ratings_router

__all__ = [
    "auth_router",
    "comments_router",
    "pages_router",
    "ratings_router",
]
