"""
test_builder_routes.py - Builder Routes 유닛 테스트

검증 포인트:
1. /generate → 앱 JSON + preview_url
2. 첨부 파일 → base64 Attachment 전달
3. 에러 매핑: BuilderError → 4xx, GenerationError → 502 (재시도 메시지)
4. 미리보기 HTML (세션 / 상태 없는 합성)
5. 빌더 화면: sandbox iframe, 사용자 입력 escape
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.providers.base import GenerationError
from src.app.routes.builder import api_router, router
from src.app.services.builder import BuilderService
from src.domain.constants import GENERATION_FAILED_MESSAGE, PREVIEW_SANDBOX

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def make_client(test_config, fake_generator):
    """FakeGenerator 결과를 받아 TestClient 생성."""

    def _make(*results) -> TestClient:
        app = FastAPI()
        app.include_router(router, prefix="/builder")
        app.include_router(api_router, prefix="/api/builder")
        app.state.builder = BuilderService(test_config, generator=fake_generator(*results))
        return TestClient(app)

    return _make


def generate_form(session_id: str = "SES-test", **overrides) -> dict:
    form = {
        "session_id": session_id,
        "prompt": "A to-do list",
        "frontend": "HTML/CSS/JS",
        "backend": "None",
        "database": "None",
    }
    form.update(overrides)
    return form


# =============================================================================
# Generate
# =============================================================================


class TestGenerateRoute:
    """POST /api/builder/generate"""

    def test_success(self, make_client, todo_app):
        client = make_client(todo_app)

        response = client.post("/api/builder/generate", data=generate_form())

        assert response.status_code == 200
        body = response.json()
        assert body["session_id"] == "SES-test"
        assert body["app"] == todo_app.to_dict()
        assert body["preview_url"] == "/api/builder/sessions/SES-test/preview"

    def test_attachment_encoded(self, make_client, todo_app):
        client = make_client(todo_app)

        response = client.post(
            "/api/builder/generate",
            data=generate_form(),
            files={"attachment": ("ref.png", b"png", "image/png")},
        )

        assert response.status_code == 200
        generator = client.app.state.builder.generator
        attachment = generator.requests[0].attachment
        assert attachment.mime_type == "image/png"
        assert attachment.data == "cG5n"

    def test_no_attachment(self, make_client, todo_app):
        client = make_client(todo_app)

        client.post("/api/builder/generate", data=generate_form())

        generator = client.app.state.builder.generator
        assert generator.requests[0].attachment is None

    def test_empty_prompt(self, make_client):
        client = make_client()

        response = client.post("/api/builder/generate", data=generate_form(prompt="  "))

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "EMPTY_PROMPT"

    def test_generation_failure(self, make_client):
        client = make_client(GenerationError("AUTH_ERROR", "bad key"))

        response = client.post("/api/builder/generate", data=generate_form())

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error"] == "AUTH_ERROR"
        assert detail["message"] == GENERATION_FAILED_MESSAGE
        assert detail["retryable"] is True

    def test_options(self, make_client):
        response = make_client().get("/api/builder/options")

        body = response.json()
        assert "React" in body["frontend"]
        assert body["defaults"]["prompt"] == "Create a simple to-do list app"


# =============================================================================
# Refine / Reset / Session
# =============================================================================


class TestRefineRoute:
    """POST /api/builder/refine"""

    def test_success(self, make_client, todo_app, backend_only_app):
        client = make_client(todo_app, backend_only_app)
        client.post("/api/builder/generate", data=generate_form())

        response = client.post(
            "/api/builder/refine",
            data={"session_id": "SES-test", "instruction": "Use Flask"},
        )

        assert response.status_code == 200
        assert response.json()["app"] == backend_only_app.to_dict()

    def test_unknown_session(self, make_client):
        response = make_client().post(
            "/api/builder/refine",
            data={"session_id": "SES-missing", "instruction": "Use Flask"},
        )

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "SESSION_NOT_FOUND"

    def test_without_app(self, make_client):
        client = make_client()
        client.post("/api/builder/reset", data={"session_id": "SES-test"})

        response = client.post(
            "/api/builder/refine",
            data={"session_id": "SES-test", "instruction": "Use Flask"},
        )

        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "NO_GENERATED_APP"


class TestSessionRoutes:
    def test_reset(self, make_client, todo_app):
        client = make_client(todo_app)
        client.post("/api/builder/generate", data=generate_form())

        response = client.post("/api/builder/reset", data={"session_id": "SES-test"})

        body = response.json()
        assert body["app"] is None
        assert len(body["runs"]) == 1

    def test_get_session(self, make_client, todo_app):
        client = make_client(todo_app)
        client.post("/api/builder/generate", data=generate_form())

        body = client.get("/api/builder/sessions/SES-test").json()

        assert body["app"]["summary"] == todo_app.summary
        assert body["stack"]["frontend"] == "HTML/CSS/JS"
        assert body["runs"][0]["result"] == "success"

    def test_get_unknown_session(self, make_client):
        response = make_client().get("/api/builder/sessions/SES-missing")

        assert response.status_code == 404


# =============================================================================
# Preview
# =============================================================================


class TestPreviewRoutes:
    def test_session_preview(self, make_client, todo_app):
        client = make_client(todo_app)
        client.post("/api/builder/generate", data=generate_form())

        response = client.get("/api/builder/sessions/SES-test/preview")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "<style>body{color:red}</style>" in response.text

    def test_session_preview_without_app(self, make_client):
        client = make_client()
        client.post("/api/builder/reset", data={"session_id": "SES-test"})

        response = client.get("/api/builder/sessions/SES-test/preview")

        assert response.status_code == 409

    def test_stateless_preview(self, make_client, todo_app):
        response = make_client().post("/api/builder/preview", json=todo_app.to_dict())

        assert response.status_code == 200
        assert "<script>console.log(1)</script>" in response.text

    def test_stateless_preview_fallback(self, make_client, backend_only_app):
        response = make_client().post(
            "/api/builder/preview", json=backend_only_app.to_dict()
        )

        assert "<li>app.py</li>" in response.text

    def test_stateless_preview_invalid(self, make_client):
        response = make_client().post("/api/builder/preview", json={"summary": "x"})

        assert response.status_code == 422


# =============================================================================
# Pages
# =============================================================================


class TestBuilderPage:
    def test_new_session_redirect(self, make_client):
        response = make_client().get("/builder", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"].startswith("/builder/SES-")

    def test_prompt_form_before_generation(self, make_client):
        response = make_client().get("/builder/SES-test")

        assert response.status_code == 200
        assert 'hx-post="/api/builder/generate"' in response.text
        assert "<iframe" not in response.text

    def test_result_view(self, make_client, todo_app):
        client = make_client(todo_app)
        client.post("/api/builder/generate", data=generate_form())

        response = client.get("/builder/SES-test")

        assert f'sandbox="{PREVIEW_SANDBOX}"' in response.text
        # srcdoc는 escape된 미리보기 문서
        assert "srcdoc=\"&lt;html&gt;&lt;head&gt;&lt;style&gt;" in response.text
        assert 'hx-post="/api/builder/refine"' in response.text

    def test_session_id_escaped(self, make_client):
        response = make_client().get("/builder/<b>x")

        assert "<b>x" not in response.text
        assert "&lt;b&gt;x" in response.text
