"""
API request and response models for ProjectHub REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
projects/models.py, which own the internal domain representation. Route
handlers map between the two.

Field validation is limited to presence checks. Project responses use
camelCase keys (userId, createdAt, updatedAt) to match the document shape
clients already consume.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from projects.models import Project

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /api/register."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProjectCreate(BaseModel):
    """Request body for POST /api/projects.

    title is optional here so a missing title reaches the store, which owns
    the rule. Any owner field the client sends is ignored (extra="ignore").
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    """Plain acknowledgement, also the body of every 4xx error."""

    model_config = ConfigDict(frozen=True)

    message: str


class ErrorResponse(BaseModel):
    """Body of a 500 response."""

    model_config = ConfigDict(frozen=True)

    error: str


class TokenResponse(BaseModel):
    """Response for POST /api/login."""

    model_config = ConfigDict(frozen=True)

    token: str


class ProjectResponse(BaseModel):
    """One project as returned by the API."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    created_at: str
    updated_at: str

    @classmethod
    def from_project(cls, project: Project) -> "ProjectResponse":
        """Build a ProjectResponse from a domain Project."""
        return cls(
            id=project.id,
            user_id=project.user_id,
            title=project.title,
            description=project.description,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
