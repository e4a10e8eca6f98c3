"""
auth/store.py -- SQLAlchemy Core persistence layer for user credentials.

Pattern: Repository + Data Mapper (same as projects/store.py).
UserStore is the repository; _row_to_user is the mapper.
Route and dependency code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.

  UNIQUE(email) is enforced in SQL. register_user() also checks for an
  existing email first so the common case returns a clean ConflictError;
  the IntegrityError path covers two concurrent registrations racing past
  that check.

Users are created and read only. There is no update or delete operation.

Layer rule: no imports from api/ or projects/.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, MetaData, String, Table, Text, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from auth.models import User
from core.db import connect
from core.exceptions import ConflictError

logger = logging.getLogger("projecthub.auth")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

_metadata = MetaData()

_users = Table(
    "users",
    _metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("hashed_password", Text, nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore(make_engine("sqlite:///projecthub.db"))
        user = store.register_user("Ada", "ada@example.com", hasher.hash("secret"))
        same = store.get_by_email("ada@example.com")
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        with connect(self.engine) as conn:
            _metadata.create_all(conn)
            conn.commit()

    def register_user(self, name: str, email: str, hashed_password: str) -> User:
        """Insert a new user and return it with its assigned id.

        Raises ConflictError if a user with this email already exists.
        """
        if self.get_by_email(email) is not None:
            raise ConflictError()
        now = _now_iso()
        with connect(self.engine) as conn:
            try:
                result = conn.execute(
                    _users.insert().values(
                        name=name,
                        email=email,
                        hashed_password=hashed_password,
                        created_at=now,
                        updated_at=now,
                    )
                )
                conn.commit()
            except IntegrityError as exc:
                conn.rollback()
                raise ConflictError() from exc
        user_id = result.inserted_primary_key[0]
        logger.info("Registered user_id=%s", user_id)
        return User(
            id=user_id,
            name=name,
            email=email,
            hashed_password=hashed_password,
            created_at=now,
            updated_at=now,
        )

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email (case-sensitive). Returns None if not found."""
        with connect(self.engine) as conn:
            row = conn.execute(select(_users).where(_users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with connect(self.engine) as conn:
            conn.execute(select(1)).scalar()
        return True


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        hashed_password=row.hashed_password,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
