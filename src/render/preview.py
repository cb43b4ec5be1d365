"""
Preview Synthesizer: 생성된 앱 → 단일 HTML 문서.

엔트리 파일(index.html)을 기준 문서로 삼고, 로컬 CSS/JS 참조를
인라인 <style>/<script>로 치환하여 sandbox iframe에서 바로 렌더 가능한
self-contained 문서를 만든다.

규칙:
- 순수 함수: I/O 없음, 공유 상태 없음, 절대 예외를 던지지 않음
- 구조 파싱이 아닌 텍스트 패턴 매칭 (best-effort)
- 파일 순서대로 누적 치환 → 같은 태그에 걸리면 나중 파일이 이김
- 엔트리 파일 자신은 이름이 아닌 identity로 제외
- type="module" 스크립트는 인라인하지 않음
"""

import logging
import re

from jinja2 import BaseLoader, Environment

from src.domain.constants import (
    INLINE_CSS_EXTENSION,
    INLINE_JS_EXTENSION,
    MODULE_SCRIPT_MARKER,
)
from src.domain.schemas import GeneratedApplication, GeneratedFile

logger = logging.getLogger(__name__)

# =============================================================================
# Fallback Document
# =============================================================================

# 파일명은 원문 그대로 노출 (autoescape 없음)
_FALLBACK_TEMPLATE = """
<html>
    <head>
        <title>App Preview</title>
        <style>
            body { font-family: sans-serif; display: flex; align-items: center; justify-content: center; height: 100vh; margin: 0; background-color: #f0f2f5; color: #333; }
            .container { text-align: center; background: white; padding: 2rem; border-radius: 8px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); }
            h2 { color: #1d4ed8; }
            ul { list-style-type: none; padding: 0; text-align: left; background: #f8fafc; border: 1px solid #e2e8f0; border-radius: 4px; padding: 1rem; max-width: 300px; margin: 1rem auto; }
            li { padding: 0.25rem 0; font-family: monospace; }
        </style>
    </head>
    <body>
        <div class="container">
            <h2>index.html Not Found</h2>
            <p>The AI generated the following files, but a preview could not be rendered automatically because a main 'index.html' file is missing.</p>
            <ul>{% for name in file_names %}<li>{{ name }}</li>{% endfor %}</ul>
        </div>
    </body>
</html>
"""

_env = Environment(loader=BaseLoader(), autoescape=False)
_fallback = _env.from_string(_FALLBACK_TEMPLATE)


def render_fallback(app: GeneratedApplication) -> str:
    """엔트리 파일이 없을 때 파일 목록을 보여주는 문서."""
    return _fallback.render(file_names=[f.name for f in app.files])


# =============================================================================
# Tag Patterns
# =============================================================================


def _stylesheet_pattern(bare_name: str) -> re.Pattern[str]:
    """href가 bare_name으로 끝나는 <link> 태그."""
    name = re.escape(bare_name)
    return re.compile(
        rf"""<link[^>]*href=["'](.*?/?){name}["'][^>]*>""",
        re.IGNORECASE,
    )


def _script_pattern(bare_name: str) -> re.Pattern[str]:
    """src가 bare_name으로 끝나고 body가 비어있는 <script> 태그."""
    name = re.escape(bare_name)
    return re.compile(
        rf"""<script[^>]*src=["'](.*?/?){name}["'][^>]*>\s*</script>""",
        re.IGNORECASE,
    )


def inline_stylesheet(html: str, file: GeneratedFile) -> str:
    """<link href=".../name.css"> → <style>code</style>."""
    replacement = f"<style>{file.code}</style>"
    # 함수 치환: code 안의 \1, \g<0> 같은 문자열이 해석되지 않도록
    return _stylesheet_pattern(file.bare_name).sub(lambda _m: replacement, html)


def inline_script(html: str, file: GeneratedFile) -> str:
    """<script src=".../name.js"></script> → <script>code</script> (module 제외)."""
    replacement = f"<script>{file.code}</script>"

    def _replace(match: re.Match[str]) -> str:
        tag = match.group(0)
        if MODULE_SCRIPT_MARKER in tag.lower():
            return tag
        return replacement

    return _script_pattern(file.bare_name).sub(_replace, html)


# =============================================================================
# Synthesizer
# =============================================================================


def synthesize_preview(app: GeneratedApplication) -> str:
    """
    생성된 앱 → sandbox 렌더용 단일 HTML 문서.

    Args:
        app: 생성된 애플리케이션 (파일 0개도 허용)

    Returns:
        HTML 텍스트. 엔트리 파일이 없으면 파일 목록 fallback 문서.
    """
    entry = app.entry_file()
    if entry is None:
        logger.info(
            f"No entry file among {len(app.files)} files, rendering fallback"
        )
        return render_fallback(app)

    html = entry.code

    for file in app.files:
        if file is entry:
            continue

        if not file.bare_name:
            continue

        if file.name.endswith(INLINE_CSS_EXTENSION):
            html = inline_stylesheet(html, file)

        if file.name.endswith(INLINE_JS_EXTENSION):
            html = inline_script(html, file)

    return html
