"""
test_project_routes.py - Project Routes 유닛 테스트

검증 포인트:
1. 로그인 없이 접근 → 401 NOT_SIGNED_IN
2. 데모 사용자 시드 프로젝트 목록
3. 생성 → 목록 맨 앞
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.routes.projects import api_router
from src.app.services.identity import InMemoryIdentityProvider
from src.app.services.projects import ProjectStore


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    app.include_router(api_router, prefix="/api/projects")
    app.state.identity = InMemoryIdentityProvider()
    app.state.projects = ProjectStore.with_seed_data()
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def signed_in_client(app: FastAPI, client: TestClient) -> TestClient:
    app.state.identity.sign_in_with_google()
    return client


class TestAuthRequired:
    def test_list_requires_sign_in(self, client):
        response = client.get("/api/projects")

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "NOT_SIGNED_IN"

    def test_create_requires_sign_in(self, client):
        response = client.post("/api/projects", data={"title": "X"})

        assert response.status_code == 401


class TestProjects:
    def test_seed_projects(self, signed_in_client):
        body = signed_in_client.get("/api/projects").json()

        assert [p["id"] for p in body["projects"]] == ["proj-1", "proj-2"]

    def test_create_prepends(self, signed_in_client):
        response = signed_in_client.post(
            "/api/projects",
            data={"title": "Blog", "description": "A blog", "language": "Python/Flask"},
        )

        created = response.json()["project"]
        listed = signed_in_client.get("/api/projects").json()["projects"]
        assert created["title"] == "Blog"
        assert listed[0] == created
        assert len(listed) == 3

    def test_new_user_has_no_projects(self, app, client):
        app.state.identity.create_user_with_email_and_password("new@example.com", "pw")

        assert client.get("/api/projects").json() == {"projects": []}
