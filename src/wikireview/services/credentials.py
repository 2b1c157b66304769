"""Credential store: user records and salted password hashes."""
from __future__ import annotations

import logging

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from wikireview.core import security
from wikireview.core.errors import ConflictError
from wikireview.models.user import User

from .base import StoreService

__all__ = ["CredentialStore"]

logger = logging.getLogger(__name__)


class CredentialStore(StoreService):
    """Creates accounts and checks passwords against their stored hashes."""

    def get_user(self, user_id: int) -> User | None:
        """Return a single user by primary key."""
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> User | None:
        """Return the user with exactly this username."""
        return self.db.scalars(select(User).where(User.username == username)).first()

    def _find_registered(self, username: str, email: str) -> int | None:
        return self.db.scalars(
            select(User.id).where(or_(User.username == username, User.email == email))
        ).first()

    def create_user(
        self,
        username: str,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> User:
        """Persist a new user with a hashed password.

        Raises:
            ConflictError: If the username or email is already registered.
        """
        if self._find_registered(username, email) is not None:
            raise ConflictError("Username or email already exists")

        user = User(
            username=username,
            email=email,
            password_hash=security.hash_password(password),
            display_name=display_name,
        )
        try:
            with self.db.begin_nested():
                self.db.add(user)
        except IntegrityError as err:
            # Lost a race against a concurrent registration for the same name.
            raise ConflictError("Username or email already exists") from err
        self._commit("create user")
        self.db.refresh(user)
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return user

    def verify_credentials(self, username: str, password: str) -> User | None:
        """Return the user when the password matches, otherwise ``None``.

        Unknown usernames and wrong passwords are indistinguishable to callers.
        """
        user = self.get_user_by_username(username)
        if user is None:
            logger.info("Login failed for unknown user %s", username)
            return None
        if not security.verify_password(password, user.password_hash):
            logger.info("Login failed for user %s", username)
            return None
        return user
