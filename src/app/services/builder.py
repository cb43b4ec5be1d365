"""
Builder Service: 생성 → 수정 → 미리보기 세션 관리.

규칙:
- 세션 상태는 GeneratedApplication 통째 교체 (부분 수정 금지)
- 실패 시 이전 앱 유지 (부분 상태 오염 없음)
- 자동 재시도 없음: 실패는 일반 재시도 메시지로 사용자에게 노출
- 호출마다 RunLog 기록 (성공/실패 모두)
"""

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Any

from src.app.providers.base import AppGenerator, GenerationError, GenerationResult
from src.app.providers.gemini import GeminiAppGenerator
from src.core.logging import complete_run_log, create_run_log, emit_warning
from src.domain.constants import (
    DEFAULT_GENERATION_MODEL,
    DEFAULT_GENERATION_TIMEOUT,
    ENTRY_FILE_SUFFIX,
    GENERATION_FAILED_MESSAGE,
    REFINEMENT_FAILED_MESSAGE,
)
from src.domain.errors import BuilderError, ErrorCodes
from src.domain.schemas import (
    Attachment,
    GeneratedApplication,
    GenerationRequest,
    RunLog,
    StackSelection,
)
from src.render.preview import synthesize_preview

logger = logging.getLogger(__name__)


@dataclass
class BuilderSession:
    """빌더 세션 상태."""
    session_id: str
    app: GeneratedApplication | None = None
    stack: StackSelection | None = None
    runs: list[RunLog] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "app": self.app.to_dict() if self.app is not None else None,
            "stack": self.stack.to_dict() if self.stack is not None else None,
            "runs": [r.to_dict() for r in self.runs],
        }


class BuilderService:
    """
    빌더 서비스.

    자연어 설명 → 앱 생성, 수정 지시 → 앱 교체, 현재 앱 → 미리보기 HTML.
    """

    def __init__(
        self,
        config: dict,
        generator: AppGenerator | None = None,
    ):
        """
        Args:
            config: 설정 (ai.generation 포함)
            generator: 앱 생성 Provider (None이면 config 기반 생성)
        """
        self.config = config
        generation_config = config.get("ai", {}).get("generation", {})
        self.timeout = float(
            generation_config.get("timeout", DEFAULT_GENERATION_TIMEOUT)
        )

        if generator is not None:
            self.generator = generator
        else:
            self.generator = GeminiAppGenerator(
                model=generation_config.get("model", DEFAULT_GENERATION_MODEL),
            )

        self._sessions: dict[str, BuilderSession] = {}

    # =========================================================================
    # Session
    # =========================================================================

    def get_session(self, session_id: str) -> BuilderSession:
        """
        Raises:
            BuilderError: SESSION_NOT_FOUND
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise BuilderError(ErrorCodes.SESSION_NOT_FOUND, session_id=session_id)
        return session

    def get_or_create_session(self, session_id: str) -> BuilderSession:
        if session_id not in self._sessions:
            self._sessions[session_id] = BuilderSession(session_id=session_id)
        return self._sessions[session_id]

    def reset(self, session_id: str) -> BuilderSession:
        """처음부터 다시: 앱/스택 제거, 실행 이력은 유지."""
        session = self.get_or_create_session(session_id)
        session.app = None
        session.stack = None
        return session

    # =========================================================================
    # Generate / Refine
    # =========================================================================

    async def generate(
        self,
        session_id: str,
        prompt: str,
        stack: StackSelection,
        attachment: Attachment | None = None,
    ) -> GeneratedApplication:
        """
        앱 생성.

        Raises:
            BuilderError: EMPTY_PROMPT
            GenerationError: 생성 실패 (메시지는 일반 재시도 문구)
        """
        if not prompt.strip():
            raise BuilderError(ErrorCodes.EMPTY_PROMPT, session_id=session_id)

        session = self.get_or_create_session(session_id)
        request = GenerationRequest(prompt=prompt, stack=stack, attachment=attachment)

        result = await self._invoke(
            session,
            "generate",
            self.generator.generate(request),
            GENERATION_FAILED_MESSAGE,
        )
        session.app = result.app
        session.stack = stack
        return result.app

    async def refine(self, session_id: str, instruction: str) -> GeneratedApplication:
        """
        현재 앱 수정. 결과로 전체 파일 세트를 통째 교체.

        Raises:
            BuilderError: EMPTY_INSTRUCTION, SESSION_NOT_FOUND, NO_GENERATED_APP
            GenerationError: 수정 실패 (이전 앱 유지)
        """
        if not instruction.strip():
            raise BuilderError(ErrorCodes.EMPTY_INSTRUCTION, session_id=session_id)

        session = self.get_session(session_id)
        if session.app is None:
            raise BuilderError(ErrorCodes.NO_GENERATED_APP, session_id=session_id)

        result = await self._invoke(
            session,
            "refine",
            self.generator.refine(instruction, session.app),
            REFINEMENT_FAILED_MESSAGE,
        )
        session.app = result.app
        return result.app

    def preview(self, session_id: str) -> str:
        """
        현재 앱의 미리보기 HTML.

        Raises:
            BuilderError: SESSION_NOT_FOUND, NO_GENERATED_APP
        """
        session = self.get_session(session_id)
        if session.app is None:
            raise BuilderError(ErrorCodes.NO_GENERATED_APP, session_id=session_id)
        return synthesize_preview(session.app)

    async def _invoke(
        self,
        session: BuilderSession,
        action: str,
        call: Awaitable[GenerationResult],
        failure_message: str,
    ) -> GenerationResult:
        """Provider 호출 + timeout + RunLog 기록 + 에러 메시지 일반화."""
        run_log = create_run_log(
            session.session_id,
            action,
            model_requested=getattr(self.generator, "model", None),
        )
        session.runs.append(run_log)

        try:
            result: GenerationResult = await asyncio.wait_for(call, timeout=self.timeout)

        except TimeoutError as e:
            logger.error(f"{action} timed out after {self.timeout}s (session={session.session_id})")
            complete_run_log(
                run_log,
                success=False,
                error_code=ErrorCodes.GENERATION_TIMEOUT,
                error_context={"timeout": self.timeout},
            )
            raise GenerationError(
                ErrorCodes.GENERATION_TIMEOUT,
                failure_message,
                session_id=session.session_id,
            ) from e

        except GenerationError as e:
            logger.warning(f"{action} failed (session={session.session_id}): {e}")
            complete_run_log(
                run_log,
                success=False,
                error_code=e.code,
                error_context={"detail": e.message},
            )
            raise GenerationError(
                e.code,
                failure_message,
                session_id=session.session_id,
                detail=e.message,
            ) from e

        except Exception as e:
            logger.error(
                f"{action} failed with unexpected error (session={session.session_id}): {e}",
                exc_info=True,
            )
            complete_run_log(
                run_log,
                success=False,
                error_code=ErrorCodes.GENERATION_FAILED,
                error_context={"detail": str(e)},
            )
            raise GenerationError(
                ErrorCodes.GENERATION_FAILED,
                failure_message,
                session_id=session.session_id,
            ) from e

        if result.app.entry_file() is None:
            emit_warning(
                run_log,
                code=ErrorCodes.ENTRY_FILE_MISSING,
                field="files",
                message=f"No file ending with '{ENTRY_FILE_SUFFIX}'; preview falls back to a file list.",
            )

        complete_run_log(
            run_log,
            success=True,
            model_used=result.model_used,
            prompt_hash=result.prompt_hash,
            file_count=len(result.app.files),
        )
        return result
