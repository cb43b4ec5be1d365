"""
Project Store: 사용자별 프로젝트 레코드 (메모리).

- 키: 불투명한 user uid
- 최신 프로젝트가 앞 (create 시 prepend)
- 데모 사용자(uid-123)용 시드 데이터
"""

from datetime import UTC, datetime, timedelta

from src.core.ids import generate_project_id
from src.domain.schemas import Project


def seed_projects(now: datetime | None = None) -> dict[str, list[Project]]:
    """데모 시드 데이터."""
    now = now or datetime.now(UTC)
    return {
        "uid-123": [
            Project(
                id="proj-1",
                title="E-commerce Platform",
                description="A full-stack online store.",
                language="React/Node.js",
                created_at=now,
            ),
            Project(
                id="proj-2",
                title="Task Management App",
                description="A simple to-do list application.",
                language="Flutter/Firebase",
                created_at=now - timedelta(days=1),
            ),
        ],
    }


class ProjectStore:
    """
    메모리 프로젝트 저장소.

    Usage:
        store = ProjectStore.with_seed_data()
        projects = store.get_projects("uid-123")
    """

    def __init__(self, projects: dict[str, list[Project]] | None = None):
        self._projects: dict[str, list[Project]] = projects or {}

    @classmethod
    def with_seed_data(cls) -> "ProjectStore":
        return cls(seed_projects())

    def get_projects(self, user_id: str) -> list[Project]:
        """사용자 프로젝트 목록 (최신순). 없으면 빈 리스트."""
        return list(self._projects.get(user_id, []))

    def create_project(
        self,
        user_id: str,
        title: str,
        description: str,
        language: str,
    ) -> Project:
        """프로젝트 생성 (목록 맨 앞에 추가)."""
        project = Project(
            id=generate_project_id(),
            title=title,
            description=description,
            language=language,
            created_at=datetime.now(UTC),
        )
        self._projects.setdefault(user_id, []).insert(0, project)
        return project
