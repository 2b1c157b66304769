# src/wikireview/api/v1/endpoints/comments.py
"""Comment and comment-vote endpoints for the WikiReview API."""

from typing import Annotated

from fastapi import APIRouter, Query, status

from wikireview.core.settings import settings
from wikireview.models import Comment
from wikireview.schemas.comment import (
    CommentCreate,
    CommentCreateResponse,
    CommentListResponse,
    CommentNodeResponse,
    CommentResponse,
)
from wikireview.schemas.common import SuccessResponse
from wikireview.schemas.vote import VoteCreate, VoteResponse
from wikireview.services.comments import CommentNode

from ..dependencies import (
    CommentStoreDep,
    CurrentUserDep,
    OptionalUserDep,
    VoteLedgerDep,
)

router = APIRouter(prefix="/comments", tags=["comments"])


def to_comment_response(comment: Comment) -> CommentResponse:
    """Convert a Comment ORM instance to an API schema."""
    return CommentResponse(
        id=comment.id,
        subject_id=comment.subject_id,
        subject_label=comment.subject_label,
        text=comment.body,
        author=comment.author_name,
        parent_comment_id=comment.parent_comment_id,
        created_at=comment.created_at,
    )


def to_comment_node_response(node: CommentNode) -> CommentNodeResponse:
    """Convert a single forest node, without its replies."""
    return CommentNodeResponse(
        id=node.id,
        subject_id=node.subject_id,
        subject_label=node.subject_label,
        text=node.body,
        author=node.author_name,
        parent_comment_id=node.parent_comment_id,
        created_at=node.created_at,
        upvotes=node.upvotes,
        downvotes=node.downvotes,
        user_vote=node.user_vote,
    )


def to_comment_forest_response(
    forest: list[CommentNode],
    max_depth: int | None = None,
) -> list[CommentNodeResponse]:
    """Convert a comment forest, nesting replies at most ``max_depth`` levels deep.

    Replies below the deepest level are listed after their ancestor on that
    level, depth first in creation order. Each keeps its real
    ``parentCommentId``, so clients can still tell who answered whom.
    """
    max_depth = max_depth or settings.comment_max_nesting_depth
    roots: list[CommentNodeResponse] = []
    # (node, depth, list the node is appended to)
    pending = [(node, 1, roots) for node in reversed(forest)]
    while pending:
        node, depth, siblings = pending.pop()
        response = to_comment_node_response(node)
        siblings.append(response)
        if depth < max_depth:
            child_depth, target = depth + 1, response.replies
        else:
            child_depth, target = depth, siblings
        pending.extend((reply, child_depth, target) for reply in reversed(node.replies))
    return roots


@router.get("", response_model=CommentListResponse)
async def list_comments(
    subject_id: Annotated[int, Query(alias="subjectId", description="Wiki page id")],
    store: CommentStoreDep,
    viewer: OptionalUserDep,
) -> CommentListResponse:
    """Return the page's comments as a reply forest with vote totals."""
    forest = store.list_comments_for_subject(
        subject_id,
        viewer=viewer.identity if viewer else None,
    )
    return CommentListResponse(comments=to_comment_forest_response(forest))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CommentCreateResponse,
)
async def create_comment(
    payload: CommentCreate,
    store: CommentStoreDep,
    viewer: OptionalUserDep,
) -> CommentCreateResponse:
    """Post a top-level comment or a reply on the same page."""
    author = payload.author or (viewer.identity if viewer else None)
    comment = store.add_comment(
        payload.subject_id,
        payload.subject_label,
        payload.text,
        author_name=author,
        parent_comment_id=payload.parent_comment_id,
    )
    return CommentCreateResponse(comment=to_comment_response(comment))


@router.delete("/{comment_id}", response_model=SuccessResponse)
async def delete_comment(
    comment_id: int,
    store: CommentStoreDep,
    current_user: CurrentUserDep,
) -> SuccessResponse:
    """Delete one of the caller's comments along with all replies to it."""
    store.delete_comment(comment_id, current_user.identity)
    return SuccessResponse()


@router.post("/vote", response_model=VoteResponse)
async def vote_on_comment(
    vote_data: VoteCreate,
    ledger: VoteLedgerDep,
    viewer: OptionalUserDep,
) -> VoteResponse:
    """Toggle the caller's up/down vote on a comment."""
    summary = ledger.cast_vote(
        vote_data.comment_id,
        viewer.identity if viewer else None,
        vote_data.vote,
    )
    return VoteResponse(
        upvotes=summary.upvotes,
        downvotes=summary.downvotes,
        user_vote=summary.voter_value,
    )
