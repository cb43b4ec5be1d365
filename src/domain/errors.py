"""
Error definitions for the builder.

규칙:
- 조용한 실패 금지 → BuilderError로 명시적 실패
- Provider(외부 LLM) 실패는 providers.base.GenerationError 사용
- Preview 합성은 절대 실패하지 않음 (에러 없음)
"""

from typing import Any


class BuilderError(Exception):
    """
    빌더 정책 위반 시 발생하는 에러.

    즉시 중단이 필요한 경우에만 사용:
    - 인증 실패 (잘못된 자격 증명)
    - 로그인 없이 프로젝트 접근
    - 생성된 앱 없이 refine 요청
    - 빈 입력

    Usage:
        raise BuilderError("INVALID_CREDENTIALS", email="user@example.com")
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Identity ===
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    NOT_SIGNED_IN = "NOT_SIGNED_IN"

    # === Builder Session ===
    EMPTY_PROMPT = "EMPTY_PROMPT"
    EMPTY_INSTRUCTION = "EMPTY_INSTRUCTION"
    NO_GENERATED_APP = "NO_GENERATED_APP"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    ATTACHMENT_UNREADABLE = "ATTACHMENT_UNREADABLE"

    # === Generation (provider) ===
    GENERATION_FAILED = "GENERATION_FAILED"
    GENERATION_TIMEOUT = "GENERATION_TIMEOUT"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"
    AUTH_ERROR = "AUTH_ERROR"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INVALID_REQUEST = "INVALID_REQUEST"
    API_KEY_MISSING = "API_KEY_MISSING"

    # === Preview (warning only, not reject) ===
    ENTRY_FILE_MISSING = "ENTRY_FILE_MISSING"
