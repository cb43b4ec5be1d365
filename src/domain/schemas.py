"""
Data schemas for the builder.

규칙:
- 모델 응답 JSON 키는 wire 이름 유지 (folderStructure 등)
- GeneratedApplication은 불변: refine 시 통째로 교체, 수정 금지
- files 순서 보존 (preview 합성은 순서에 의존)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.constants import ENTRY_FILE_SUFFIX

# =============================================================================
# Generated App Schemas
# =============================================================================


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    """필수 문자열 필드 추출. 없거나 문자열이 아니면 ValueError."""
    if key not in data:
        raise ValueError(f"{where}: missing required field '{key}'")
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(
            f"{where}: field '{key}' must be a string, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class GeneratedFile:
    """생성된 파일 하나."""
    name: str  # path-like, "src/app.js" 처럼 디렉터리 포함 가능
    code: str
    explanation: str

    @property
    def bare_name(self) -> str:
        """마지막 '/' 이후 세그먼트."""
        return self.name.split("/")[-1]

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> "GeneratedFile":
        if not isinstance(data, dict):
            raise ValueError(f"files[{index}]: expected an object")
        where = f"files[{index}]"
        return cls(
            name=_require_str(data, "name", where),
            code=_require_str(data, "code", where),
            explanation=_require_str(data, "explanation", where),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "code": self.code,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class GeneratedApplication:
    """
    생성된 애플리케이션 전체.

    모델 응답 스키마와 1:1 대응:
    - summary, architecture, folderStructure, deployment (string)
    - files (ordered list of {name, code, explanation})

    불변 객체. refine 결과는 새 인스턴스로 교체됨.
    """
    summary: str
    architecture: str
    folder_structure: str
    deployment: str
    files: tuple[GeneratedFile, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "GeneratedApplication":
        """
        모델 JSON 응답 → GeneratedApplication.

        Raises:
            ValueError: 필수 키 누락, 타입 불일치
        """
        if not isinstance(data, dict):
            raise ValueError("response: expected a JSON object")

        raw_files = data.get("files")
        if raw_files is None:
            raise ValueError("response: missing required field 'files'")
        if not isinstance(raw_files, list):
            raise ValueError("response: field 'files' must be a list")

        return cls(
            summary=_require_str(data, "summary", "response"),
            architecture=_require_str(data, "architecture", "response"),
            folder_structure=_require_str(data, "folderStructure", "response"),
            deployment=_require_str(data, "deployment", "response"),
            files=tuple(
                GeneratedFile.from_dict(item, index)
                for index, item in enumerate(raw_files)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용 (wire 키 사용)."""
        return {
            "summary": self.summary,
            "architecture": self.architecture,
            "folderStructure": self.folder_structure,
            "files": [f.to_dict() for f in self.files],
            "deployment": self.deployment,
        }

    def entry_file(self) -> GeneratedFile | None:
        """이름이 index.html로 끝나는 첫 번째 파일 (대소문자 무시)."""
        for f in self.files:
            if f.name.lower().endswith(ENTRY_FILE_SUFFIX):
                return f
        return None


# =============================================================================
# Generation Request Schemas
# =============================================================================


@dataclass(frozen=True)
class StackSelection:
    """기술 스택 선택."""
    frontend: str
    backend: str
    database: str

    def to_dict(self) -> dict[str, str]:
        return {
            "frontend": self.frontend,
            "backend": self.backend,
            "database": self.database,
        }


@dataclass(frozen=True)
class Attachment:
    """첨부 파일 (최대 1개). data는 base64 인코딩된 문자열."""
    mime_type: str
    data: str


@dataclass(frozen=True)
class GenerationRequest:
    """앱 생성 요청."""
    prompt: str
    stack: StackSelection
    attachment: Attachment | None = None


# =============================================================================
# Identity / Project Schemas
# =============================================================================


@dataclass(frozen=True)
class User:
    """로그인 사용자."""
    uid: str
    email: str | None
    display_name: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "display_name": self.display_name,
        }


@dataclass
class Project:
    """프로젝트 레코드 (경량)."""
    id: str
    title: str
    description: str
    language: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "language": self.language,
            "created_at": self.created_at.isoformat(),
        }


# =============================================================================
# Logging Schemas
# =============================================================================


@dataclass
class WarningLog:
    """
    경고 로그.

    경고 필수 컨텍스트: level, code, field, message
    """
    level: str = "warning"
    code: str = ""
    field: str = ""
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "field": self.field,
            "message": self.message,
        }


@dataclass
class RunLog:
    """
    실행 로그.

    generate/refine 호출 단위 실행 결과 및 메타데이터.
    """
    run_id: str
    session_id: str
    action: str  # generate, refine
    started_at: str  # ISO 8601
    finished_at: str | None = None
    result: str = "pending"  # pending, success, failed

    # 모델 추적
    model_requested: str | None = None
    model_used: str | None = None
    prompt_hash: str | None = None

    file_count: int | None = None

    # Events
    warnings: list[WarningLog] = field(default_factory=list)

    # Error (if failed)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "session_id": self.session_id,
            "action": self.action,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "model_requested": self.model_requested,
            "model_used": self.model_used,
            "prompt_hash": self.prompt_hash,
            "file_count": self.file_count,
            "warnings": [w.to_dict() for w in self.warnings],
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
