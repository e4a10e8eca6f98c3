"""
api/routes/projects.py -- Owner-scoped project routes.

Routes:
  POST   /api/projects               -- create a project for the caller
  GET    /api/projects               -- list the caller's projects
  DELETE /api/projects/{project_id}  -- delete one of the caller's projects

Every route receives the caller's Identity from require_identity and passes
identity.owner_id to the store. Nothing in the request body or path decides
ownership.

DELETE answers {"message": "Project deleted"} whether or not a row matched:
an id that is missing or owned by someone else is a silent no-op.
"""

from fastapi import APIRouter, Depends, Request

from api.models import MessageResponse, ProjectCreate, ProjectResponse
from auth.dependencies import require_identity
from auth.models import Identity
from projects.store import ProjectStore

router = APIRouter()


@router.post("/projects", response_model=ProjectResponse)
def create_project(
    request: Request,
    body: ProjectCreate,
    identity: Identity = Depends(require_identity),
) -> ProjectResponse:
    """Create a project owned by the authenticated caller."""
    store: ProjectStore = request.app.state.project_store
    project = store.create_project(identity.owner_id, body.title, body.description)
    return ProjectResponse.from_project(project)


@router.get("/projects", response_model=list[ProjectResponse])
def list_projects(
    request: Request,
    identity: Identity = Depends(require_identity),
) -> list[ProjectResponse]:
    """List the caller's projects in creation order."""
    store: ProjectStore = request.app.state.project_store
    return [ProjectResponse.from_project(p) for p in store.list_projects(identity.owner_id)]


@router.delete("/projects/{project_id}", response_model=MessageResponse)
def delete_project(
    request: Request,
    project_id: int,
    identity: Identity = Depends(require_identity),
) -> MessageResponse:
    """Delete a project if the caller owns it."""
    store: ProjectStore = request.app.state.project_store
    store.delete_project(identity.owner_id, project_id)
    return MessageResponse(message="Project deleted")
