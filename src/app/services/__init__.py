"""
Application Services.

역할:
- builder: 생성/수정 세션 + 미리보기
- identity: 메모리 인증 stub
- projects: 메모리 프로젝트 저장소
"""

from .builder import BuilderService, BuilderSession
from .identity import InMemoryIdentityProvider
from .projects import ProjectStore

__all__ = [
    "BuilderService",
    "BuilderSession",
    "InMemoryIdentityProvider",
    "ProjectStore",
]
