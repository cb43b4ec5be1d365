"""
Core layer: ID 발급, 실행 로그.

역할:
- run/session/project/user ID
- RunLog 생성/경고/완료
"""

from .ids import (
    generate_project_id,
    generate_run_id,
    generate_session_id,
    generate_user_id,
)
from .logging import complete_run_log, create_run_log, emit_warning

__all__ = [
    # ids
    "generate_run_id",
    "generate_session_id",
    "generate_project_id",
    "generate_user_id",
    # logging
    "create_run_log",
    "emit_warning",
    "complete_run_log",
]
