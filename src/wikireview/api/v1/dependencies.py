"""Shared API dependencies for authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from wikireview.core.errors import UnauthenticatedError
from wikireview.core.settings import settings
from wikireview.db.session import get_db
from wikireview.models import User
from wikireview.services import (
    CommentTreeStore,
    CredentialStore,
    MediaWikiClient,
    PageOwnership,
    RatingLedger,
    SessionManager,
    VoteLedger,
    get_mediawiki_client,
)

# Session token travels in an HTTP-only cookie; absence is not an error here.
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
SessionTokenDep = Annotated[str | None, Depends(session_cookie)]


def get_credential_store(db: SessionDep) -> CredentialStore:
    return CredentialStore(db)


def get_session_manager(db: SessionDep) -> SessionManager:
    return SessionManager(db)


def get_comment_store(db: SessionDep) -> CommentTreeStore:
    return CommentTreeStore(db)


def get_vote_ledger(db: SessionDep) -> VoteLedger:
    return VoteLedger(db)


def get_rating_ledger(db: SessionDep) -> RatingLedger:
    return RatingLedger(db)


def get_page_ownership(db: SessionDep) -> PageOwnership:
    return PageOwnership(db)


def get_mediawiki_client_dep() -> MediaWikiClient:
    """Return the shared MediaWiki client."""
    return get_mediawiki_client()


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]
CommentStoreDep = Annotated[CommentTreeStore, Depends(get_comment_store)]
VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
RatingLedgerDep = Annotated[RatingLedger, Depends(get_rating_ledger)]
PageOwnershipDep = Annotated[PageOwnership, Depends(get_page_ownership)]
MediaWikiClientDep = Annotated[MediaWikiClient, Depends(get_mediawiki_client_dep)]


def get_optional_user(token: SessionTokenDep, sessions: SessionManagerDep) -> User | None:
    """Resolve the session cookie to a user, or ``None`` when not logged in."""
    return sessions.resolve_user(token)


OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def get_current_user(user: OptionalUserDep) -> User:
    """Require a logged-in user.

    Raises:
        UnauthenticatedError: If the cookie is missing, unknown or expired.
    """
    if user is None:
        raise UnauthenticatedError("You must be logged in")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
