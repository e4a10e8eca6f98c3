"""
auth/tokens.py -- Password hashing, JWT issuance/verification, and login.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry the user id ("id"), the issue
       time and the expiry (7 days by default). TokenService.verify() raises
       InvalidTokenError on any failure -- the guard turns that into a 400.

  Passwords: bcrypt used directly (no passlib wrapper). The cost factor is
       injected (BCRYPT_ROUNDS, default 10). The dummy hash built by
       PasswordHasher enables timing equalization in authenticate_user() so
       an unknown email costs the same bcrypt work as a wrong password.

  Secret: injected into TokenService at construction from Settings. It is
       never read from the environment here and never logged.

Layer rule: no imports from api/ or projects/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import JWTError, jwt

from core.config import DEFAULT_TOKEN_EXPIRE_SECONDS
from core.exceptions import InvalidCredentialsError, InvalidTokenError

if TYPE_CHECKING:
    from auth.models import User
    from auth.store import UserStore

logger = logging.getLogger("projecthub.auth")

_ALGORITHM = "HS256"

# bcrypt only consumes the first 72 bytes of a password; recent releases
# raise instead of truncating, so truncate explicitly on both paths.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------


class PasswordHasher:
    """One-way salted password hashing with a tunable bcrypt cost factor."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds
        # Computed once so the first unknown-email login is not measurably
        # slower than subsequent ones.
        self.dummy_hash: str = self.hash("projecthub_timing_dummy")

    def hash(self, plain: str) -> str:
        """Return a bcrypt hash of the given plaintext password."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_password_bytes(plain), salt).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        """Return True if the plaintext password matches the bcrypt hash.

        A malformed digest is treated as a non-match.
        """
        try:
            return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
        except ValueError:
            return False


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


class TokenService:
    """Issues and verifies signed, time-limited identity assertions.

    Verification is pure: it depends only on the signing secret and the
    token string, never on the database.
    """

    def __init__(self, secret_key: str, expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS) -> None:
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def __repr__(self) -> str:
        return f"TokenService(expire_seconds={self.expire_seconds})"

    def issue(self, owner_id: int, now: datetime | None = None) -> str:
        """Encode a signed JWT for owner_id, expiring expire_seconds from now."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": owner_id,
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.expire_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> int:
        """Decode and verify a JWT. Returns the owner id.

        Raises InvalidTokenError for a bad signature, an expired token, a
        malformed token, or a payload without an integer "id" claim.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWTError as exc:
            raise InvalidTokenError() from exc
        owner_id = payload.get("id")
        # bool is an int subclass; a token claiming "id": true is malformed.
        if not isinstance(owner_id, int) or isinstance(owner_id, bool):
            raise InvalidTokenError()
        return owner_id


# ---------------------------------------------------------------------------
# User authentication (constant-time)
# ---------------------------------------------------------------------------


def authenticate_user(store: UserStore, hasher: PasswordHasher, email: str, password: str) -> User:
    """Authenticate an email/password login with timing equalization.

    Always runs bcrypt whether or not the user exists:
    - Unknown email: bcrypt runs against the hasher's dummy hash
    - Wrong password: bcrypt runs against the real hash

    Returns the User on success. Raises InvalidCredentialsError otherwise.
    """
    user = store.get_by_email(email)
    if user is None:
        hasher.verify(password, hasher.dummy_hash)
        logger.info("Login rejected: unknown email")
        raise InvalidCredentialsError("User not found")
    if not hasher.verify(password, user.hashed_password):
        logger.info("Login rejected: wrong password for user_id=%s", user.id)
        raise InvalidCredentialsError("Incorrect password")
    return user
