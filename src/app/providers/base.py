"""
AI Provider 추상 인터페이스.

- Provider 추상화로 모델 교체 가능
- model_requested + model_used 필수 기록
- 실패는 GenerationError 하나로 수렴 (호출자는 일반 재시도 메시지로 매핑)
"""

import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from src.domain.schemas import GeneratedApplication, GenerationRequest


def compute_hash(content: str) -> str:
    """SHA-256 해시 계산."""
    return f"sha256:{hashlib.sha256(content.encode()).hexdigest()[:16]}"


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    앱 생성/수정 결과.

    필수 키:
    - model_requested: config에 설정된 모델
    - model_used: 실제 호출된 모델
    """
    app: GeneratedApplication
    model_requested: str | None = None
    model_used: str | None = None
    prompt_hash: str | None = None
    generated_at: str | None = None
    provider: str | None = None  # "gemini" 등

    def to_dict(self) -> dict[str, Any]:
        result = {
            "app": self.app.to_dict(),
            "model_requested": self.model_requested,
            "model_used": self.model_used,
            "prompt_hash": self.prompt_hash,
            "generated_at": self.generated_at,
            "provider": self.provider,
        }
        # None 값 제거
        return {k: v for k, v in result.items() if v is not None}


# =============================================================================
# Provider Exceptions
# =============================================================================


class ProviderError(Exception):
    """Provider 관련 에러."""

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class GenerationError(ProviderError):
    """앱 생성/수정 실패 (전송 실패, 잘못된 응답 등)."""
    pass


# =============================================================================
# Abstract Provider
# =============================================================================


class AppGenerator(ABC):
    """
    앱 생성 Provider 추상 인터페이스.

    역할: 자연어 설명 → GeneratedApplication (전체 파일 세트)
    """

    model: str

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        프롬프트 + 스택 선택 (+ 첨부)으로 앱 생성.

        Raises:
            GenerationError: upstream 호출 실패 또는 응답 형식 오류
        """
        ...

    @abstractmethod
    async def refine(
        self,
        instruction: str,
        existing_app: GeneratedApplication,
    ) -> GenerationResult:
        """
        기존 앱에 수정 지시 적용.

        diff가 아닌 전체 파일 세트를 반환해야 함.

        Raises:
            GenerationError: upstream 호출 실패 또는 응답 형식 오류
        """
        ...
