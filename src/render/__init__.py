"""
Render layer: 생성된 앱 → 미리보기 문서.

역할:
- 엔트리 index.html + 로컬 CSS/JS → 단일 self-contained HTML
- jinja2 (fallback 문서)
"""

from src.domain.constants import PREVIEW_SANDBOX

from .preview import render_fallback, synthesize_preview

__all__ = [
    "synthesize_preview",
    "render_fallback",
    "PREVIEW_SANDBOX",
]
