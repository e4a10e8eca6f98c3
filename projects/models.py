"""
projects/models.py -- Domain dataclass for owned project records.

Pure data container with zero logic. Ownership filtering and title
validation live in projects/store.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Project:
    """A project owned by exactly one user.

    user_id is always taken from the verified Identity of the creating
    request, never from client input. Projects are never edited in place,
    so updated_at equals created_at for every stored record.

    id is None before the record is written to the database.
    """

    user_id: int
    title: str
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""
