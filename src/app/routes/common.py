"""
라우트 공통: 도메인 에러 → HTTP 응답 매핑.
"""

from fastapi import HTTPException

from src.app.providers.base import GenerationError
from src.domain.errors import BuilderError, ErrorCodes

BUILDER_ERROR_STATUS = {
    ErrorCodes.INVALID_CREDENTIALS: 401,
    ErrorCodes.NOT_SIGNED_IN: 401,
    ErrorCodes.SESSION_NOT_FOUND: 404,
    ErrorCodes.NO_GENERATED_APP: 409,
}


def builder_http_error(error: BuilderError) -> HTTPException:
    """BuilderError → 4xx."""
    return HTTPException(
        status_code=BUILDER_ERROR_STATUS.get(error.code, 400),
        detail=error.to_dict(),
    )


def generation_http_error(error: GenerationError) -> HTTPException:
    """GenerationError → 502 (일반 재시도 메시지)."""
    return HTTPException(
        status_code=502,
        detail={
            "error": error.code,
            "message": error.message,
            "retryable": True,
        },
    )
