"""
Builder Routes: 앱 생성 / 수정 / 미리보기.

- POST /api/builder/generate → 앱 생성 (첨부 1개 선택)
- POST /api/builder/refine → 현재 앱 수정 (전체 교체)
- POST /api/builder/reset → 처음부터 다시
- GET /api/builder/sessions/{id} → 현재 앱 + 실행 로그
- GET /api/builder/sessions/{id}/preview → 미리보기 HTML
- POST /api/builder/preview → 상태 없는 미리보기 합성
- GET /builder/{id} → 빌더 화면 (sandbox iframe)
"""

import base64
import html
import logging
from typing import Any

from fastapi import APIRouter, Body, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from src.app.providers.base import GenerationError
from src.app.routes.common import builder_http_error, generation_http_error
from src.app.services.builder import BuilderService
from src.core.ids import generate_session_id
from src.domain.constants import (
    ATTACHMENT_FAILED_MESSAGE,
    BACKEND_OPTIONS,
    DATABASE_OPTIONS,
    DEFAULT_BACKEND,
    DEFAULT_DATABASE,
    DEFAULT_FRONTEND,
    DEFAULT_PROMPT,
    FRONTEND_OPTIONS,
    PREVIEW_SANDBOX,
)
from src.domain.errors import BuilderError, ErrorCodes
from src.domain.schemas import Attachment, GeneratedApplication, StackSelection
from src.render.preview import synthesize_preview

logger = logging.getLogger(__name__)

# Routers
router = APIRouter()  # HTML pages
api_router = APIRouter()  # API endpoints


def _builder(request: Request) -> BuilderService:
    service: BuilderService = request.app.state.builder
    return service


def _preview_url(session_id: str) -> str:
    return f"/api/builder/sessions/{session_id}/preview"


# =============================================================================
# Page Routes (HTML)
# =============================================================================


@router.get("", response_class=RedirectResponse)
async def new_builder_page() -> RedirectResponse:
    """새 세션으로 이동."""
    return RedirectResponse(url=f"/builder/{generate_session_id()}", status_code=303)


@router.get("/{session_id}", response_class=HTMLResponse)
async def builder_page(request: Request, session_id: str) -> HTMLResponse:
    """빌더 화면: 입력 폼 또는 결과(미리보기 + 코드)."""
    service = _builder(request)
    session = service.get_or_create_session(session_id)
    safe_id = html.escape(session_id)

    if session.app is None:
        body = _render_prompt_form(safe_id)
    else:
        body = _render_result(safe_id, session.app)

    return HTMLResponse(content=f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>AI Builder - {safe_id}</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
</head>
<body>
    <div class="container">
        <header>
            <h1>AI App Builder</h1>
            <code>{safe_id}</code>
        </header>
        {body}
    </div>
</body>
</html>
    """)


def _options_html(options: tuple[str, ...], selected: str) -> str:
    return "".join(
        f'<option value="{html.escape(o)}"{" selected" if o == selected else ""}>'
        f"{html.escape(o)}</option>"
        for o in options
    )


def _render_prompt_form(safe_id: str) -> str:
    return f"""
        <form hx-post="/api/builder/generate" hx-encoding="multipart/form-data"
              hx-on::after-request="if(event.detail.successful) location.reload()">
            <input type="hidden" name="session_id" value="{safe_id}">
            <input type="text" name="prompt" value="{html.escape(DEFAULT_PROMPT)}">
            <select name="frontend">{_options_html(FRONTEND_OPTIONS, DEFAULT_FRONTEND)}</select>
            <select name="backend">{_options_html(BACKEND_OPTIONS, DEFAULT_BACKEND)}</select>
            <select name="database">{_options_html(DATABASE_OPTIONS, DEFAULT_DATABASE)}</select>
            <input type="file" name="attachment" accept="image/*,.txt,.pdf,.docx">
            <button type="submit">Generate</button>
        </form>
    """


def _render_result(safe_id: str, app: GeneratedApplication) -> str:
    preview_doc = html.escape(synthesize_preview(app), quote=True)
    files_html = "".join(
        f"<details><summary>{html.escape(f.name)}</summary>"
        f"<p>{html.escape(f.explanation)}</p>"
        f"<pre><code>{html.escape(f.code)}</code></pre></details>"
        for f in app.files
    )
    return f"""
        <iframe srcdoc="{preview_doc}" title="App Preview"
                sandbox="{PREVIEW_SANDBOX}" style="width: 100%; height: 60vh; border: 0;"></iframe>
        <section><h2>Summary</h2><p>{html.escape(app.summary)}</p></section>
        <section><h2>Architecture</h2><pre><code>{html.escape(app.architecture)}</code></pre></section>
        <section><h2>Folder Structure</h2><pre><code>{html.escape(app.folder_structure)}</code></pre></section>
        <section><h2>Code Files</h2>{files_html}</section>
        <section><h2>Deployment</h2><pre><code>{html.escape(app.deployment)}</code></pre></section>
        <form hx-post="/api/builder/refine"
              hx-on::after-request="if(event.detail.successful) location.reload()">
            <input type="hidden" name="session_id" value="{safe_id}">
            <input type="text" name="instruction" placeholder="Describe a change...">
            <button type="submit">Refine</button>
        </form>
        <form hx-post="/api/builder/reset"
              hx-on::after-request="location.reload()">
            <input type="hidden" name="session_id" value="{safe_id}">
            <button type="submit">Start Over</button>
        </form>
    """


# =============================================================================
# API Routes
# =============================================================================


@api_router.get("/options")
async def stack_options() -> dict[str, Any]:
    """스택 선택지와 기본값."""
    return {
        "frontend": list(FRONTEND_OPTIONS),
        "backend": list(BACKEND_OPTIONS),
        "database": list(DATABASE_OPTIONS),
        "defaults": {
            "prompt": DEFAULT_PROMPT,
            "frontend": DEFAULT_FRONTEND,
            "backend": DEFAULT_BACKEND,
            "database": DEFAULT_DATABASE,
        },
    }


async def _read_attachment(upload: UploadFile | None) -> Attachment | None:
    """업로드 파일 → base64 Attachment. 파일 없으면 None."""
    if upload is None or not upload.filename:
        return None
    try:
        content = await upload.read()
    except OSError as e:
        logger.error(f"Failed to read attachment {upload.filename!r}: {e}")
        raise HTTPException(
            status_code=400,
            detail={
                "code": ErrorCodes.ATTACHMENT_UNREADABLE,
                "message": ATTACHMENT_FAILED_MESSAGE,
            },
        ) from e
    return Attachment(
        mime_type=upload.content_type or "application/octet-stream",
        data=base64.b64encode(content).decode("ascii"),
    )


@api_router.post("/generate")
async def generate_app(
    request: Request,
    session_id: str = Form(...),
    prompt: str = Form(DEFAULT_PROMPT),
    frontend: str = Form(DEFAULT_FRONTEND),
    backend: str = Form(DEFAULT_BACKEND),
    database: str = Form(DEFAULT_DATABASE),
    attachment: UploadFile | None = File(None),
) -> dict[str, Any]:
    """
    앱 생성 요청.

    Args:
        session_id: 빌더 세션 ID
        prompt: 앱 설명 (자연어)
        frontend, backend, database: 스택 선택
        attachment: 참고용 첨부 (선택, 1개)

    Returns:
        생성된 앱 + 미리보기 URL
    """
    service = _builder(request)
    stack = StackSelection(frontend=frontend, backend=backend, database=database)
    file_data = await _read_attachment(attachment)

    try:
        app = await service.generate(session_id, prompt, stack, file_data)
    except BuilderError as e:
        raise builder_http_error(e) from e
    except GenerationError as e:
        raise generation_http_error(e) from e

    return {
        "session_id": session_id,
        "app": app.to_dict(),
        "preview_url": _preview_url(session_id),
    }


@api_router.post("/refine")
async def refine_app(
    request: Request,
    session_id: str = Form(...),
    instruction: str = Form(...),
) -> dict[str, Any]:
    """현재 앱 수정. 실패 시 이전 앱 유지."""
    service = _builder(request)

    try:
        app = await service.refine(session_id, instruction)
    except BuilderError as e:
        raise builder_http_error(e) from e
    except GenerationError as e:
        raise generation_http_error(e) from e

    return {
        "session_id": session_id,
        "app": app.to_dict(),
        "preview_url": _preview_url(session_id),
    }


@api_router.post("/reset")
async def reset_session(
    request: Request,
    session_id: str = Form(...),
) -> dict[str, Any]:
    """처음부터 다시."""
    session = _builder(request).reset(session_id)
    return session.to_dict()


@api_router.get("/sessions/{session_id}")
async def get_session(request: Request, session_id: str) -> dict[str, Any]:
    """세션 상태 (현재 앱 + 실행 로그)."""
    try:
        session = _builder(request).get_session(session_id)
    except BuilderError as e:
        raise builder_http_error(e) from e
    return session.to_dict()


@api_router.get("/sessions/{session_id}/preview", response_class=HTMLResponse)
async def session_preview(request: Request, session_id: str) -> HTMLResponse:
    """현재 앱 미리보기 HTML."""
    try:
        document = _builder(request).preview(session_id)
    except BuilderError as e:
        raise builder_http_error(e) from e
    return HTMLResponse(content=document)


@api_router.post("/preview", response_class=HTMLResponse)
async def stateless_preview(payload: dict[str, Any] = Body(...)) -> HTMLResponse:
    """요청 본문의 앱 JSON → 미리보기 HTML."""
    try:
        app = GeneratedApplication.from_dict(payload)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return HTMLResponse(content=synthesize_preview(app))
