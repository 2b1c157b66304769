"""Shared plumbing for services that read and write through one ORM session."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wikireview.core.errors import StoreError

logger = logging.getLogger(__name__)


class StoreService:
    """Base class holding the injected session and commit handling."""

    def __init__(self, db: Session) -> None:
        """Initialize the service with a SQLAlchemy session."""
        self.db = db

    def _commit(self, action: str) -> None:
        """Commit the unit of work, converting store failures into ``StoreError``."""
        try:
            self.db.commit()
        except SQLAlchemyError as err:
            self.db.rollback()
            logger.error("Store failure while trying to %s: %s", action, err, exc_info=True)
            raise StoreError(f"Failed to {action}", original_error=err) from err
