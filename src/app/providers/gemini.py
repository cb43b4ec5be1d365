"""
Google Gemini App Generator.

- responseMimeType=application/json + 선언적 응답 스키마
- 자동 재시도/fallback 없음: 실패는 즉시 GenerationError
- 예외 매핑:
  Unauthenticated, PermissionDenied → AUTH_ERROR
  ResourceExhausted → QUOTA_EXCEEDED
  ServiceUnavailable, InternalServerError, DeadlineExceeded → SERVICE_UNAVAILABLE
  InvalidArgument → INVALID_REQUEST
"""

import base64
import binascii
import json
import logging
import os
from datetime import UTC, datetime
from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from src.domain.constants import DEFAULT_GENERATION_MODEL, RESPONSE_SCHEMA
from src.domain.errors import ErrorCodes
from src.domain.schemas import GeneratedApplication, GenerationRequest

from .base import AppGenerator, GenerationError, GenerationResult, compute_hash
from .prompts import (
    ATTACHMENT_INSTRUCTION,
    build_generation_prompt,
    build_refinement_prompt,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Exception Mapping
# =============================================================================

ERROR_CODE_MAP: tuple[tuple[tuple[type[Exception], ...], str, str], ...] = (
    (
        (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied),
        ErrorCodes.AUTH_ERROR,
        "Google API authentication failed. Check the GOOGLE_API_KEY environment variable.",
    ),
    (
        (google_exceptions.ResourceExhausted,),
        ErrorCodes.QUOTA_EXCEEDED,
        "API quota exceeded. Please wait a moment and try again.",
    ),
    (
        (
            google_exceptions.ServiceUnavailable,
            google_exceptions.InternalServerError,
            google_exceptions.DeadlineExceeded,
        ),
        ErrorCodes.SERVICE_UNAVAILABLE,
        "The Gemini service is temporarily unavailable. Please try again later.",
    ),
    (
        (google_exceptions.InvalidArgument,),
        ErrorCodes.INVALID_REQUEST,
        "The request was rejected by the model. Check the prompt and attachment.",
    ),
)


class GeminiAppGenerator(AppGenerator):
    """
    Gemini 기반 앱 생성기.

    Usage:
        generator = GeminiAppGenerator(model="gemini-2.5-pro")
        result = await generator.generate(request)
    """

    def __init__(
        self,
        model: str = DEFAULT_GENERATION_MODEL,
        api_key: str | None = None,
    ):
        """
        Args:
            model: 모델 ID (config에서 주입)
            api_key: API 키 (환경변수 GOOGLE_API_KEY 사용 가능)
        """
        self.model = model
        self.api_key = api_key or os.environ.get("GOOGLE_API_KEY")
        self._client: Any = None

    def _get_client(self) -> Any:
        """Gemini 클라이언트 (lazy init)."""
        if self._client is None:
            if not self.api_key:
                raise GenerationError(
                    ErrorCodes.API_KEY_MISSING,
                    "Gemini API key is missing. Set the GOOGLE_API_KEY environment variable.",
                )
            genai.configure(api_key=self.api_key)
            self._client = genai
        return self._client

    # =========================================================================
    # Public API
    # =========================================================================

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        앱 생성.

        첨부가 있으면 parts 순서:
        [첨부 활용 지시, 핵심 지시, inline data]
        """
        prompt = build_generation_prompt(request.prompt, request.stack)
        parts: list[Any] = [prompt]

        if request.attachment is not None:
            try:
                data = base64.b64decode(request.attachment.data, validate=True)
            except (binascii.Error, ValueError) as e:
                raise GenerationError(
                    ErrorCodes.INVALID_REQUEST,
                    "Attachment data is not valid base64.",
                    mime_type=request.attachment.mime_type,
                ) from e
            parts.insert(0, ATTACHMENT_INSTRUCTION)
            parts.append({"mime_type": request.attachment.mime_type, "data": data})

        logger.info(
            f"Generating app with model={self.model}, stack={request.stack.to_dict()}, "
            f"attachment={request.attachment is not None}"
        )
        return await self._run(parts, prompt)

    async def refine(
        self,
        instruction: str,
        existing_app: GeneratedApplication,
    ) -> GenerationResult:
        """기존 앱 수정 (전체 파일 세트 반환)."""
        prompt = build_refinement_prompt(instruction, existing_app)
        logger.info(
            f"Refining app with model={self.model}, "
            f"existing_files={len(existing_app.files)}"
        )
        return await self._run([prompt], prompt)

    # =========================================================================
    # Internals
    # =========================================================================

    async def _run(self, parts: list[Any], prompt: str) -> GenerationResult:
        """API 호출 + 응답 파싱 + 예외 매핑."""
        now = datetime.now(UTC).isoformat()

        try:
            response = await self._call_api(self.model, parts)
            app = self._parse_response(self._response_text(response))

        except GenerationError:
            raise

        except Exception as e:
            code, message = self._map_error(e)
            if code == ErrorCodes.GENERATION_FAILED:
                logger.error(f"Generation failed with unexpected error: {e}", exc_info=True)
            else:
                logger.error(f"Generation failed [{code}]: {e}")
            raise GenerationError(code, message, model=self.model) from e

        logger.info(f"Generation succeeded: {len(app.files)} files")
        return GenerationResult(
            app=app,
            model_requested=self.model,
            model_used=self.model,
            prompt_hash=compute_hash(prompt),
            generated_at=now,
            provider="gemini",
        )

    async def _call_api(self, model: str, parts: list[Any]) -> Any:
        """실제 Gemini API 호출."""
        client = self._get_client()
        model_instance = client.GenerativeModel(model)
        return await model_instance.generate_content_async(
            parts,
            generation_config=client.GenerationConfig(
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
            ),
        )

    def _response_text(self, response: Any) -> str:
        """응답 원문 추출. 차단/빈 응답은 EMPTY_RESPONSE."""
        try:
            text = response.text
        except ValueError as e:
            # 안전 필터 차단 등: candidates에 text part 없음
            raise GenerationError(
                ErrorCodes.EMPTY_RESPONSE,
                "The model returned no content.",
                model=self.model,
            ) from e

        if not text or not text.strip():
            raise GenerationError(
                ErrorCodes.EMPTY_RESPONSE,
                "The model returned no content.",
                model=self.model,
            )
        return str(text)

    def _parse_response(self, response_text: str) -> GeneratedApplication:
        """
        JSON 응답 파싱.

        responseMimeType이 JSON이어도 ```json 펜스가 섞이는 경우를 허용.
        """
        text = response_text.strip()
        if text.startswith("```"):
            start = text.find("\n") + 1
            end = text.rfind("```")
            text = text[start:end].strip() if end > start else text[start:].strip()

        try:
            data = json.loads(text)
            return GeneratedApplication.from_dict(data)
        except (json.JSONDecodeError, ValueError) as e:
            raise GenerationError(
                ErrorCodes.MALFORMED_RESPONSE,
                f"Failed to parse model response: {e}",
                model=self.model,
            ) from e

    def _map_error(self, error: Exception) -> tuple[str, str]:
        """예외 → (에러 코드, 사용자 친화 메시지)."""
        for exc_types, code, message in ERROR_CODE_MAP:
            if isinstance(error, exc_types):
                return code, message

        error_str = str(error).lower()
        if "timeout" in error_str:
            return ErrorCodes.SERVICE_UNAVAILABLE, "The request timed out. Please try again."
        if "connection" in error_str:
            return ErrorCodes.SERVICE_UNAVAILABLE, "A network error occurred."

        return ErrorCodes.GENERATION_FAILED, f"App generation failed: {error}"
