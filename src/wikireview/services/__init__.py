"""Business logic services for the WikiReview application."""

from .comments import CommentNode, CommentTreeStore
from .credentials import CredentialStore
from .mediawiki import MediaWikiClient, get_mediawiki_client
from .pages import PageOwnership
from .ratings import RatingLedger, RatingSummary
from .sessions import SessionManager
from .votes import VoteLedger, VoteSummary

__all__ = [
    "CommentNode",
    "CommentTreeStore",
    "CredentialStore",
    "MediaWikiClient",
    "PageOwnership",
    "RatingLedger",
    "RatingSummary",
    "SessionManager",
    "VoteLedger",
    "VoteSummary",
    "get_mediawiki_client",
]
