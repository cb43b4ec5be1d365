"""
Run logging: run log schema, events, warnings

규칙:
- generate/refine 호출마다 RunLog 1개 (성공/실패 모두)
- 경고 필수 컨텍스트: level, code, field, message
- 메모리 보관 (빌더 세션에 append)
"""

from datetime import UTC, datetime
from typing import Any

from src.core.ids import generate_run_id
from src.domain.schemas import RunLog, WarningLog

# =============================================================================
# Run Log Management
# =============================================================================


def create_run_log(
    session_id: str,
    action: str,
    model_requested: str | None = None,
) -> RunLog:
    """
    새 RunLog 생성.

    Args:
        session_id: 빌더 세션 ID
        action: "generate" 또는 "refine"
        model_requested: config에 설정된 모델

    Returns:
        초기화된 RunLog
    """
    now = datetime.now(UTC).isoformat()

    return RunLog(
        run_id=generate_run_id(),
        session_id=session_id,
        action=action,
        started_at=now,
        result="pending",
        model_requested=model_requested,
    )


def emit_warning(
    run_log: RunLog,
    code: str,
    field: str,
    message: str,
) -> None:
    """
    경고 이벤트 기록.

    Args:
        run_log: RunLog 인스턴스
        code: 경고 코드
        field: 관련 필드/파일
        message: 경고 메시지
    """
    run_log.warnings.append(
        WarningLog(
            level="warning",
            code=code,
            field=field,
            message=message,
        )
    )


def complete_run_log(
    run_log: RunLog,
    success: bool,
    model_used: str | None = None,
    prompt_hash: str | None = None,
    file_count: int | None = None,
    error_code: str | None = None,
    error_context: dict[str, Any] | None = None,
) -> None:
    """
    RunLog 완료 처리.

    Args:
        run_log: RunLog 인스턴스
        success: 성공 여부
        model_used: 실제 호출된 모델
        prompt_hash: 프롬프트 해시
        file_count: 생성된 파일 수
        error_code: 에러 코드 (실패 시)
        error_context: 에러 컨텍스트 (실패 시)
    """
    run_log.finished_at = datetime.now(UTC).isoformat()
    run_log.result = "success" if success else "failed"
    run_log.model_used = model_used
    run_log.prompt_hash = prompt_hash
    run_log.file_count = file_count

    if not success:
        run_log.error_code = error_code
        run_log.error_context = error_context
