"""
FastAPI Routes.

페이지 라우트 (HTML) + API 라우트 (REST)
"""

from . import auth, builder, projects

__all__ = ["auth", "builder", "projects"]
