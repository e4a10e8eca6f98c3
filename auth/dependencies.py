"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The guard reads the token from the Authorization header and resolves it to
an Identity, in three states:

  1. No token            -> MissingTokenError  (401 "Access Denied")
  2. Token, not valid    -> InvalidTokenError  (400 "Invalid Token")
  3. Token valid         -> Identity(owner_id) passed to the handler

The header carries the raw token. A leading "Bearer " scheme is stripped if
present so standard HTTP clients work too; a raw JWT never starts with it.

Verification is pure (signature + expiry), so the guard performs no database
lookup. A token stays valid for its full lifetime.

Layer rule: no imports from api/ or projects/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request

from auth.models import Identity
from auth.tokens import TokenService
from core.exceptions import MissingTokenError

_BEARER_PREFIX = "Bearer "


def extract_token(request: Request) -> str | None:
    """Return the token from the Authorization header, or None if absent."""
    raw = request.headers.get("Authorization", "").strip()
    if raw.startswith(_BEARER_PREFIX):
        raw = raw[len(_BEARER_PREFIX) :].strip()
    return raw or None


def require_identity(request: Request) -> Identity:
    """Require a valid token. Use as a FastAPI dependency:

        @router.get("/projects")
        def route(identity: Identity = Depends(require_identity)): ...
    """
    token = extract_token(request)
    if token is None:
        raise MissingTokenError()
    tokens: TokenService = request.app.state.tokens
    return Identity(owner_id=tokens.verify(token))
