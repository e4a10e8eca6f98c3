"""
projects/store.py -- SQLAlchemy-backed persistence layer for projects.

Uses SQLAlchemy Core (not ORM) so the dataclass in projects/models.py remains
the authoritative domain representation.

Pattern: Repository + Data Mapper. ProjectStore is the repository;
_row_to_project is the mapper. Route handlers never touch SQL directly.

Ownership: every list and delete carries owner_id in its WHERE clause. There
is no query path that touches another owner's rows, so isolation does not
depend on route handlers remembering to check.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = ProjectStore(engine)
    project = store.create_project(owner_id=1, title="Roadmap")
    projects = store.list_projects(owner_id=1)
    store.delete_project(owner_id=1, project_id=project.id)
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Index, Integer, MetaData, String, Table, Text, select
from sqlalchemy.engine import Engine

from core.db import connect
from core.exceptions import ValidationError
from projects.models import Project

logger = logging.getLogger("projecthub.projects")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_projects = Table(
    "projects",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, nullable=False),
    Column("title", String(255), nullable=False),
    Column("description", Text),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("ix_projects_user_id", "user_id"),
)

# Autoincrement ids start at 1 and fit a signed 64-bit INTEGER.
_MIN_ID = 1
_MAX_ID = 2**63 - 1


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ProjectStore:
    """Repository for Project entities, scoped by owner on every operation."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        with connect(self.engine) as conn:
            metadata.create_all(conn)
            conn.commit()

    def create_project(self, owner_id: int, title: Optional[str], description: Optional[str] = None) -> Project:
        """Insert a project owned by owner_id and return it with its id.

        Raises ValidationError if title is missing or blank.
        """
        if title is None or not title.strip():
            raise ValidationError("Title is required")
        now = _now_iso()
        with connect(self.engine) as conn:
            result = conn.execute(
                _projects.insert().values(
                    user_id=owner_id,
                    title=title,
                    description=description,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
        project_id = result.inserted_primary_key[0]
        logger.info("Created project_id=%s for user_id=%s", project_id, owner_id)
        return Project(
            id=project_id,
            user_id=owner_id,
            title=title,
            description=description,
            created_at=now,
            updated_at=now,
        )

    def list_projects(self, owner_id: int) -> list[Project]:
        """Return every project owned by owner_id in insertion order."""
        with connect(self.engine) as conn:
            rows = conn.execute(
                select(_projects).where(_projects.c.user_id == owner_id).order_by(_projects.c.id)
            ).fetchall()
        return [_row_to_project(r) for r in rows]

    def delete_project(self, owner_id: int, project_id: int) -> bool:
        """Delete a project only if both project_id and owner_id match.

        Returns True if a row was removed. A missing or foreign id is a
        no-op and returns False; it is not an error. Ids outside the INTEGER
        column range cannot name a row and never reach the driver.
        """
        if not _MIN_ID <= project_id <= _MAX_ID:
            logger.info("Delete no-op: project_id=%s out of range", project_id)
            return False
        with connect(self.engine) as conn:
            result = conn.execute(
                _projects.delete().where((_projects.c.id == project_id) & (_projects.c.user_id == owner_id))
            )
            conn.commit()
        deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted project_id=%s for user_id=%s", project_id, owner_id)
        else:
            logger.info("Delete no-op: project_id=%s not owned by user_id=%s", project_id, owner_id)
        return deleted


def _row_to_project(row) -> Project:
    return Project(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
