"""Page ownership registry used to authorize protection changes."""
from __future__ import annotations

import logging

from wikireview.core.errors import ForbiddenError, NotFoundError, ValidationError
from wikireview.models.page import PageCreator

from .base import StoreService

__all__ = ["PageOwnership", "normalize_identity"]

logger = logging.getLogger(__name__)


def normalize_identity(name: str | None) -> str:
    """Return ``name`` trimmed and case-folded for ownership comparison."""
    return (name or "").strip().casefold()


class PageOwnership(StoreService):
    """Remembers who created each page, keyed by the wiki's page id."""

    def record_creator(self, subject_id: int, subject_label: str, creator: str) -> PageCreator:
        """Insert or replace the creator for ``subject_id``."""
        creator = creator.strip()
        if not creator:
            raise ValidationError("creator is required")
        record = self.db.get(PageCreator, subject_id)
        if record is None:
            record = PageCreator(subject_id=subject_id, subject_label=subject_label, creator=creator)
            self.db.add(record)
        else:
            record.subject_label = subject_label
            record.creator = creator
        self._commit("record page creator")
        logger.info("Recorded %s as creator of page %s", creator, subject_id)
        return record

    def get_creator(self, subject_id: int) -> str | None:
        """Return the recorded creator of ``subject_id``, if any."""
        record = self.db.get(PageCreator, subject_id)
        return record.creator if record else None

    def assert_creator(self, subject_id: int, identity: str | None) -> None:
        """Raise unless ``identity`` is the recorded creator of ``subject_id``.

        Raises:
            NotFoundError: If no creator is recorded for the page.
            ForbiddenError: If ``identity`` does not match the creator.
        """
        creator = self.get_creator(subject_id)
        if creator is None:
            raise NotFoundError("No creator recorded for this page")
        if not identity or normalize_identity(identity) != normalize_identity(creator):
            raise ForbiddenError("Only the page creator can change page protection")
