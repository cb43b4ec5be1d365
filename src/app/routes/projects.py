"""
Project Routes: 로그인 사용자의 프로젝트 목록/생성.

- GET /api/projects → 최신순 목록
- POST /api/projects → 생성 (맨 앞에 추가)

로그인하지 않으면 401.
"""

from typing import Any

from fastapi import APIRouter, Form, Request

from src.app.routes.common import builder_http_error
from src.app.services.identity import InMemoryIdentityProvider
from src.app.services.projects import ProjectStore
from src.domain.errors import BuilderError, ErrorCodes
from src.domain.schemas import User

api_router = APIRouter()


def _require_user(request: Request) -> User:
    identity: InMemoryIdentityProvider = request.app.state.identity
    user = identity.current_user
    if user is None:
        raise builder_http_error(BuilderError(ErrorCodes.NOT_SIGNED_IN))
    return user


def _store(request: Request) -> ProjectStore:
    store: ProjectStore = request.app.state.projects
    return store


@api_router.get("")
async def list_projects(request: Request) -> dict[str, Any]:
    user = _require_user(request)
    projects = _store(request).get_projects(user.uid)
    return {"projects": [p.to_dict() for p in projects]}


@api_router.post("")
async def create_project(
    request: Request,
    title: str = Form(...),
    description: str = Form(""),
    language: str = Form(""),
) -> dict[str, Any]:
    user = _require_user(request)
    project = _store(request).create_project(user.uid, title, description, language)
    return {"project": project.to_dict()}
