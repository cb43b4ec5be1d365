"""
ID 생성: run_id, session_id, project_id, user uid

규칙:
- 모든 ID는 고유성 보장 (UUID v4 조각)
- 사람이 읽을 수 있도록 timestamp 포함
"""

import uuid
from datetime import UTC, datetime

from src.domain.constants import (
    PROJECT_ID_PREFIX,
    RUN_ID_PREFIX,
    SESSION_ID_PREFIX,
    USER_ID_PREFIX,
)


def _timestamp() -> str:
    return datetime.now(UTC).strftime("%Y%m%d%H%M%S")


def generate_run_id() -> str:
    """
    Run ID 생성.

    포맷: RUN-{timestamp}-{uuid[:8]}

    Returns:
        run_id 문자열
    """
    return f"{RUN_ID_PREFIX}{_timestamp()}-{uuid.uuid4().hex[:8]}"


def generate_session_id() -> str:
    """
    빌더 세션 ID 생성.

    포맷: SES-{uuid[:12]}
    """
    return f"{SESSION_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def generate_project_id() -> str:
    """프로젝트 ID. 포맷: proj-{timestamp}-{uuid[:6]}"""
    return f"{PROJECT_ID_PREFIX}{_timestamp()}-{uuid.uuid4().hex[:6]}"


def generate_user_id() -> str:
    """사용자 uid. 포맷: uid-{timestamp}-{uuid[:6]}"""
    return f"{USER_ID_PREFIX}{_timestamp()}-{uuid.uuid4().hex[:6]}"
