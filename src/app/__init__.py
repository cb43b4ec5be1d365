"""
App layer: 빌더 서버 (FastAPI + HTMX).

역할:
- 프롬프트/스택 입력, 첨부 업로드, 세션 관리
- Gemini 호출, 미리보기 화면
- 미리보기 합성 로직 없음 (render에 위임)
"""
