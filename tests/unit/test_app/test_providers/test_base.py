"""
test_base.py - Provider 공통 타입 테스트
"""

import pytest

from src.app.providers.base import (
    AppGenerator,
    GenerationError,
    GenerationResult,
    ProviderError,
    compute_hash,
)


class TestComputeHash:
    def test_format(self):
        h = compute_hash("hello")

        assert h.startswith("sha256:")
        assert len(h) == len("sha256:") + 16

    def test_deterministic(self):
        assert compute_hash("prompt") == compute_hash("prompt")
        assert compute_hash("prompt") != compute_hash("prompt2")


class TestGenerationResult:
    def test_to_dict_drops_none(self, todo_app):
        result = GenerationResult(app=todo_app, model_used="gemini-2.5-pro")

        data = result.to_dict()

        assert data["model_used"] == "gemini-2.5-pro"
        assert "prompt_hash" not in data
        assert data["app"]["files"][0]["name"] == "index.html"


class TestProviderError:
    def test_generation_error_is_provider_error(self):
        error = GenerationError("QUOTA_EXCEEDED", "quota", model="m")

        assert isinstance(error, ProviderError)
        assert str(error) == "[QUOTA_EXCEEDED] quota"
        assert error.context == {"model": "m"}
        assert error.to_dict() == {"code": "QUOTA_EXCEEDED", "message": "quota"}


class TestAppGenerator:
    def test_abstract(self):
        """추상 클래스는 직접 생성 불가."""
        with pytest.raises(TypeError):
            AppGenerator()  # type: ignore[abstract]
