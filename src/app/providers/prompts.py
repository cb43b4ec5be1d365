"""
프롬프트 템플릿: 생성 / 수정.

템플릿 버전 변경 시 PROMPT_TEMPLATE_VERSION 업데이트.
"""

import json

from src.domain.schemas import GeneratedApplication, StackSelection

PROMPT_TEMPLATE_VERSION = "1.0.0"

ATTACHMENT_INSTRUCTION = (
    "Use the attached image as a reference or inspiration for the "
    "application's design or content."
)


def stack_guidance(stack: StackSelection) -> str:
    """스택별 생성 가이드. frontend 규칙이 backend 규칙보다 우선."""
    if stack.frontend == "React":
        return (
            'Generate a single, self-contained "index.html" file. This file MUST '
            "use React and ReactDOM from CDN links in a <script> tag. All JavaScript "
            'code, including React components, MUST be within a single <script type="text/babel"> '
            "block. Use the Babel Standalone CDN to transpile JSX in the browser. The "
            'application should be a simple "Hello World" or a basic version of the '
            "user's prompt that is renderable in this single file."
        )
    if stack.frontend == "React Native":
        return (
            "Generate a sample component for a React Native application named App.js. "
            "Include a basic explanation of how to run it."
        )
    if stack.frontend == "HTML/CSS/JS":
        return (
            'Generate a single, self-contained "index.html" file for a simple to-do '
            "list application, including all necessary HTML, CSS, and JavaScript "
            "within that one file."
        )
    if stack.backend == "Java (Spring Boot)":
        return (
            "Generate the structure for a minimal Spring Boot REST API with a "
            '"Hello World" endpoint. Include a pom.xml and a main application file.'
        )
    if stack.backend == "Python (Flask)":
        return (
            'Generate a minimal Python Flask "Hello World" application in a single '
            "app.py file. Include a requirements.txt file."
        )
    return (
        f"Tech Stack: Frontend - {stack.frontend}, Backend - {stack.backend}, "
        f"Database - {stack.database}."
    )


def build_generation_prompt(prompt: str, stack: StackSelection) -> str:
    """생성 프롬프트."""
    return f"""
You are an expert full-stack software architect. Your task is to generate a complete, runnable, and well-structured application based on the user's request.

**User Idea:** "{prompt}"

**Instructions:**
1.  **Analyze the Request:** Understand the core features the user wants.
2.  **Select Technology:** Use the specified technology stack to generate the code.
3.  **Generate Files:** Create a complete set of files required for the application to run.
4.  **CRITICAL - Create an Entrypoint:** You MUST generate a primary 'index.html' file. This file should be the main entry point for the application preview. If the project is a backend API, the 'index.html' should provide a simple API documentation or a "Welcome" message. The app preview will fail without it.
5.  **Be Complete:** Ensure all code is complete and functional. Do not use placeholder comments like "// your code here".
6.  **Provide Explanations:** For each file, provide a clear and concise explanation of its purpose and code.
7.  **Format Output:** Return the entire response as a single, valid JSON object that adheres to the provided schema.

**Technology-Specific Guidance:**
{stack_guidance(stack)}
"""


def build_refinement_prompt(instruction: str, existing_app: GeneratedApplication) -> str:
    """수정 프롬프트. 기존 파일 전체를 JSON으로 포함."""
    existing_files = json.dumps(
        [f.to_dict() for f in existing_app.files],
        indent=2,
        ensure_ascii=False,
    )
    return f"""
You are an expert full-stack software architect. You have already generated an application.
The user wants to refine it with the following instruction: "{instruction}"

Here is the code for the existing files you previously generated:
{existing_files}

**Instructions:**
1.  **Analyze the Refinement:** Understand the change the user wants.
2.  **Apply the Change:** Modify the existing code to incorporate the user's request.
3.  **Return ALL Files:** You MUST return the complete, updated set of all application files. Do not only return the changed files.
4.  **Maintain Structure:** Keep the same file names and folder structure unless the request specifically asks to change them.
5.  **Ensure 'index.html':** The 'index.html' file must remain the main entry point.
6.  **Be Complete:** Ensure all code is complete and functional.
7.  **Format Output:** Return the entire response as a single, valid JSON object that adheres to the provided schema.
"""
