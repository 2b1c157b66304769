"""Schemas for page ownership and protection."""

from typing import Any

from pydantic import Field

from .common import CamelModel


class CreatorRecord(CamelModel):
    """Records who created a wiki page."""

    subject_id: int
    subject_label: str = Field(..., min_length=1)
    creator: str = Field(..., min_length=1)


class CreatorResponse(CamelModel):
    creator: str | None = None


class ProtectRequest(CamelModel):
    """Toggle edit protection on a page the caller created."""

    subject_id: int
    title: str = Field(..., min_length=1)
    protect: bool
    token: str | None = Field(None, description="Pre-acquired wiki CSRF token")


class ProtectResponse(CamelModel):
    success: bool = True
    result: dict[str, Any]
