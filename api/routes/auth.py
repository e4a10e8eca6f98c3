"""
api/routes/auth.py -- Registration and login endpoints.

Routes:
  POST /api/register   -- create a user; 400 if the email is taken
  POST /api/login      -- verify credentials; returns {"token": ...}

Both routes are public: they establish identity, so they sit outside the
guard. Failures are raised as domain exceptions and rendered by the handlers
in api/main.py.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models import LoginRequest, MessageResponse, RegisterRequest, TokenResponse
from auth.store import UserStore
from auth.tokens import PasswordHasher, TokenService, authenticate_user

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
def register(request: Request, body: RegisterRequest) -> MessageResponse:
    """Register a new user. The password is stored only as a bcrypt hash."""
    user_store: UserStore = request.app.state.user_store
    hasher: PasswordHasher = request.app.state.hasher
    user_store.register_user(body.name, body.email, hasher.hash(body.password))
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password; return a signed token.

    Uses authenticate_user(), which runs bcrypt on every path so response
    time does not reveal whether the email is registered.
    """
    user_store: UserStore = request.app.state.user_store
    hasher: PasswordHasher = request.app.state.hasher
    tokens: TokenService = request.app.state.tokens

    user = authenticate_user(user_store, hasher, body.email, body.password)
    resp = JSONResponse(content=TokenResponse(token=tokens.issue(user.id)).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
