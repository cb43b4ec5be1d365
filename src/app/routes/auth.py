"""
Auth Routes: 메모리 인증 stub.

- POST /api/auth/login, /signup, /google, /logout
- GET /api/auth/me
"""

from typing import Any

from fastapi import APIRouter, Form, Request

from src.app.routes.common import builder_http_error
from src.app.services.identity import InMemoryIdentityProvider
from src.domain.errors import BuilderError

api_router = APIRouter()


def _identity(request: Request) -> InMemoryIdentityProvider:
    identity: InMemoryIdentityProvider = request.app.state.identity
    return identity


@api_router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
) -> dict[str, Any]:
    try:
        user = _identity(request).sign_in_with_email_and_password(email, password)
    except BuilderError as e:
        raise builder_http_error(e) from e
    return {"user": user.to_dict()}


@api_router.post("/signup")
async def signup(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
) -> dict[str, Any]:
    user = _identity(request).create_user_with_email_and_password(email, password)
    return {"user": user.to_dict()}


@api_router.post("/google")
async def google_sign_in(request: Request) -> dict[str, Any]:
    """소셜 로그인 시뮬레이션."""
    user = _identity(request).sign_in_with_google()
    return {"user": user.to_dict()}


@api_router.post("/logout")
async def logout(request: Request) -> dict[str, Any]:
    _identity(request).sign_out()
    return {"user": None}


@api_router.get("/me")
async def me(request: Request) -> dict[str, Any]:
    user = _identity(request).current_user
    return {"user": user.to_dict() if user is not None else None}
