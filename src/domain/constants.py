"""
Domain Constants: 빌더 전역 상수.

스택 옵션, 미리보기 정책, 사용자 메시지 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Preview (미리보기 정책)
# =============================================================================
# 엔트리 파일: 이름이 index.html로 끝나는 첫 번째 파일 (대소문자 무시)

ENTRY_FILE_SUFFIX = "index.html"

# iframe sandbox: 스크립트/모달/폼 허용, top-level navigation/popup 금지
PREVIEW_SANDBOX = "allow-scripts allow-modals allow-forms"

INLINE_CSS_EXTENSION = ".css"
INLINE_JS_EXTENSION = ".js"
MODULE_SCRIPT_MARKER = 'type="module"'

# =============================================================================
# Stack Options (기술 스택 선택지)
# =============================================================================

FRONTEND_OPTIONS = ("React", "React Native", "HTML/CSS/JS", "Flutter", "Streamlit")
BACKEND_OPTIONS = ("Node.js", "Python (Flask)", "Java (Spring Boot)", "FastAPI", "None")
DATABASE_OPTIONS = ("Firebase", "MongoDB", "PostgreSQL", "None")

DEFAULT_PROMPT = "Create a simple to-do list app"
DEFAULT_FRONTEND = "React"
DEFAULT_BACKEND = "Node.js"
DEFAULT_DATABASE = "Firebase"

# =============================================================================
# Model (Gemini)
# =============================================================================

DEFAULT_GENERATION_MODEL = "gemini-2.5-pro"
DEFAULT_GENERATION_TIMEOUT = 300.0  # seconds

# 모델 응답 스키마 (선언적, 모든 필드 required)
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "architecture": {"type": "STRING"},
        "folderStructure": {"type": "STRING"},
        "files": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING"},
                    "code": {"type": "STRING"},
                    "explanation": {"type": "STRING"},
                },
                "required": ["name", "code", "explanation"],
            },
        },
        "deployment": {"type": "STRING"},
    },
    "required": ["summary", "architecture", "folderStructure", "files", "deployment"],
}

# =============================================================================
# User-facing Messages (재시도 가능한 일반 메시지)
# =============================================================================

GENERATION_FAILED_MESSAGE = (
    "Sorry, something went wrong while generating your app. "
    "Please try again or check the console for details."
)
REFINEMENT_FAILED_MESSAGE = (
    "Sorry, something went wrong while refining your app. Please try again."
)
ATTACHMENT_FAILED_MESSAGE = "Failed to read the attached file."

# =============================================================================
# ID Prefixes
# =============================================================================

RUN_ID_PREFIX = "RUN-"
SESSION_ID_PREFIX = "SES-"
PROJECT_ID_PREFIX = "proj-"
USER_ID_PREFIX = "uid-"
