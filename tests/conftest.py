"""
Pytest fixtures for the builder tests.

테스트 구성:
- 엔트리 파일 있는 앱 / 없는 앱 분리
- Provider는 FakeGenerator로 대체 (네트워크 호출 없음)
"""

from pathlib import Path

import pytest
import yaml

from src.app.providers.base import AppGenerator, GenerationError, GenerationResult
from src.domain.schemas import (
    GeneratedApplication,
    GeneratedFile,
    GenerationRequest,
)

# =============================================================================
# Path / Config Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture
def test_config() -> dict:
    """테스트용 설정."""
    return {
        "ai": {
            "generation": {
                "model": "gemini-test",
                "timeout": 5.0,
            },
        },
    }


# =============================================================================
# App Fixtures
# =============================================================================


def _make_app(*files: GeneratedFile, summary: str = "A to-do app") -> GeneratedApplication:
    """테스트용 GeneratedApplication."""
    return GeneratedApplication(
        summary=summary,
        architecture="Single page",
        folder_structure="/\n  index.html",
        deployment="Open index.html",
        files=tuple(files),
    )


@pytest.fixture
def todo_app() -> GeneratedApplication:
    """index.html + style.css + app.js."""
    return _make_app(
        GeneratedFile(
            name="index.html",
            code=(
                "<html><head><link rel=\"stylesheet\" href=\"style.css\"></head>"
                "<body><script src=\"app.js\"></script></body></html>"
            ),
            explanation="Entry point",
        ),
        GeneratedFile(name="style.css", code="body{color:red}", explanation="Styles"),
        GeneratedFile(name="app.js", code="console.log(1)", explanation="Logic"),
    )


@pytest.fixture
def backend_only_app() -> GeneratedApplication:
    """엔트리 파일 없는 앱."""
    return _make_app(
        GeneratedFile(name="app.py", code="print('hello flask')", explanation="Flask app"),
        GeneratedFile(name="requirements.txt", code="flask==3.0.0", explanation="Deps"),
    )


@pytest.fixture
def sample_response() -> dict:
    """모델 JSON 응답 (wire 형식)."""
    return {
        "summary": "A to-do app",
        "architecture": "Single page",
        "folderStructure": "/\n  index.html",
        "files": [
            {
                "name": "index.html",
                "code": "<html><body>Hello</body></html>",
                "explanation": "Entry point",
            },
        ],
        "deployment": "Open index.html",
    }


# =============================================================================
# Fake Generator
# =============================================================================


class FakeGenerator(AppGenerator):
    """
    네트워크 없는 AppGenerator.

    results에 GeneratedApplication 또는 Exception을 순서대로 넣으면
    generate/refine 호출마다 하나씩 소비.
    """

    def __init__(self, *results: GeneratedApplication | Exception):
        self.model = "fake-model"
        self.results = list(results)
        self.requests: list[GenerationRequest] = []
        self.refinements: list[tuple[str, GeneratedApplication]] = []

    def _next(self) -> GenerationResult:
        if not self.results:
            raise GenerationError("GENERATION_FAILED", "no more fake results")
        item = self.results.pop(0)
        if isinstance(item, Exception):
            raise item
        return GenerationResult(
            app=item,
            model_requested=self.model,
            model_used=self.model,
            prompt_hash="sha256:fake",
            provider="fake",
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        return self._next()

    async def refine(
        self,
        instruction: str,
        existing_app: GeneratedApplication,
    ) -> GenerationResult:
        self.refinements.append((instruction, existing_app))
        return self._next()


@pytest.fixture
def fake_generator() -> type[FakeGenerator]:
    """FakeGenerator 팩토리: fake_generator(app, error, ...)."""
    return FakeGenerator
