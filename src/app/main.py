"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uvicorn src.app.main:app --reload
- 프로덕션: uvicorn src.app.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI

# Routes
from src.app.routes import auth, builder, projects
from src.app.services.builder import BuilderService
from src.app.services.identity import DEMO_PASSWORD, DEMO_USER, InMemoryIdentityProvider
from src.app.services.projects import ProjectStore
from src.domain.schemas import User

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = Path(__file__).parent.parent.parent / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def build_identity(config: dict) -> InMemoryIdentityProvider:
    """config.identity 기반 인증 stub 생성."""
    identity_config = config.get("identity", {})
    demo_user = User(
        uid=identity_config.get("demo_uid", DEMO_USER.uid),
        email=identity_config.get("demo_email", DEMO_USER.email),
        display_name=identity_config.get("demo_display_name", DEMO_USER.display_name),
    )
    return InMemoryIdentityProvider(
        demo_user=demo_user,
        demo_password=identity_config.get("demo_password", DEMO_PASSWORD),
    )


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 메모리 저장소/서비스 1회 생성 (composition root)
    종료 시: 정리할 리소스 없음
    """
    # Startup
    config = load_config()
    app.state.config = config
    app.state.identity = build_identity(config)
    app.state.projects = ProjectStore.with_seed_data()
    app.state.builder = BuilderService(config)

    yield


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="DreamCraft AI Builder",
    description="자연어 설명 → 전체 앱 코드 생성 + 미리보기",
    version="0.1.0",
    lifespan=lifespan,
)


# =============================================================================
# Routes
# =============================================================================

# 페이지 라우트 (HTML)
app.include_router(builder.router, prefix="/builder", tags=["Builder"])

# API 라우트
app.include_router(builder.api_router, prefix="/api/builder", tags=["Builder API"])
app.include_router(auth.api_router, prefix="/api/auth", tags=["Auth API"])
app.include_router(projects.api_router, prefix="/api/projects", tags=["Projects API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> dict[str, Any]:
    """엔드포인트 목록."""
    return {
        "message": "DreamCraft AI Builder",
        "endpoints": {
            "builder": "/builder",
            "auth": "/api/auth/me",
            "projects": "/api/projects",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
