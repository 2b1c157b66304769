"""Password hashing and session token primitives."""
from __future__ import annotations

import hashlib
import hmac
import secrets

from wikireview.core.settings import settings

_HASH_NAME = "sha512"
_SEPARATOR = ":"


def hash_password(
    password: str,
    *,
    iterations: int | None = None,
    key_bytes: int | None = None,
) -> str:
    """Return a ``salt:hash`` string for storage.

    Args:
        password: Plaintext password supplied by the user.
        iterations: PBKDF2 iteration count (defaults to settings).
        key_bytes: Length of the derived key in bytes (defaults to settings).

    Returns:
        Hex-encoded random salt and PBKDF2-SHA512 digest joined by a colon.
    """
    salt = secrets.token_hex(settings.password_salt_bytes)
    digest = hashlib.pbkdf2_hmac(
        _HASH_NAME,
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations or settings.password_hash_iterations,
        dklen=key_bytes or settings.password_hash_key_bytes,
    )
    return f"{salt}{_SEPARATOR}{digest.hex()}"


def verify_password(
    password: str,
    stored_hash: str,
    *,
    iterations: int | None = None,
) -> bool:
    """Recompute the hash with the stored salt and compare in constant time."""
    salt, sep, expected_hex = stored_hash.partition(_SEPARATOR)
    if not sep or not salt or not expected_hex:
        return False
    try:
        expected = bytes.fromhex(expected_hex)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac(
        _HASH_NAME,
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations or settings.password_hash_iterations,
        dklen=len(expected),
    )
    return hmac.compare_digest(digest, expected)


def generate_session_token() -> str:
    """Return an unguessable 256-bit session token."""
    return secrets.token_hex(32)
