# src/wikireview/api/v1/endpoints/pages.py
"""Page ownership and protection endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query, Request

from wikireview.schemas.common import SuccessResponse
from wikireview.schemas.page import (
    CreatorRecord,
    CreatorResponse,
    ProtectRequest,
    ProtectResponse,
)

from ..dependencies import CurrentUserDep, MediaWikiClientDep, PageOwnershipDep

router = APIRouter(prefix="/pages", tags=["pages"])


@router.post("/creator", response_model=SuccessResponse)
async def record_page_creator(
    payload: CreatorRecord,
    ownership: PageOwnershipDep,
) -> SuccessResponse:
    """Remember who created a page so they can manage its protection later."""
    ownership.record_creator(payload.subject_id, payload.subject_label, payload.creator)
    return SuccessResponse()


@router.get("/creator", response_model=CreatorResponse)
async def get_page_creator(
    subject_id: Annotated[int, Query(alias="subjectId", description="Wiki page id")],
    ownership: PageOwnershipDep,
) -> CreatorResponse:
    """Return the recorded creator of a page, or ``null``."""
    return CreatorResponse(creator=ownership.get_creator(subject_id))


@router.post("/protect", response_model=ProtectResponse)
async def set_page_protection(
    payload: ProtectRequest,
    request: Request,
    current_user: CurrentUserDep,
    ownership: PageOwnershipDep,
    wiki: MediaWikiClientDep,
) -> ProtectResponse:
    """Enable or lift edit protection on a page the caller created."""
    ownership.assert_creator(payload.subject_id, current_user.identity)

    cookie_header = request.headers.get("cookie")
    token = payload.token or await wiki.fetch_csrf_token(cookie_header=cookie_header)
    result = await wiki.set_protection(
        payload.title,
        payload.protect,
        token,
        cookie_header=cookie_header,
    )
    return ProtectResponse(result=result)
