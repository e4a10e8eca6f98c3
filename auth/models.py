"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in projects/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/ or projects/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered identity in ProjectHub.

    email is the login key and is unique across all users. hashed_password is
    the bcrypt digest; the plaintext is never stored and the digest is never
    returned by any API response.

    id is None before the record is written to the database.
    """

    name: str
    email: str
    hashed_password: str
    id: int | None = None
    created_at: str | None = None
    updated_at: str | None = None


@dataclass(frozen=True)
class Identity:
    """The verified caller of a protected request.

    Produced only by the authorization guard from a valid token and passed
    into route handlers as an argument. owner_id is the sole source of
    ownership for project reads and writes.
    """

    owner_id: int
