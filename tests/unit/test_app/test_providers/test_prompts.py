"""
test_prompts.py - 프롬프트 템플릿 테스트
"""

import json

import pytest

from src.app.providers.prompts import (
    build_generation_prompt,
    build_refinement_prompt,
    stack_guidance,
)
from src.domain.schemas import StackSelection


class TestStackGuidance:
    """스택별 가이드 선택."""

    @pytest.mark.parametrize(
        "stack,expected",
        [
            (StackSelection("React", "Node.js", "Firebase"), "Babel Standalone"),
            (StackSelection("React Native", "Node.js", "Firebase"), "App.js"),
            (StackSelection("HTML/CSS/JS", "None", "None"), "single, self-contained"),
            (StackSelection("Vue", "Java (Spring Boot)", "PostgreSQL"), "pom.xml"),
            (StackSelection("Vue", "Python (Flask)", "MongoDB"), "requirements.txt"),
        ],
    )
    def test_known_stacks(self, stack, expected):
        assert expected in stack_guidance(stack)

    def test_frontend_rule_wins_over_backend(self):
        guidance = stack_guidance(StackSelection("React", "Python (Flask)", "None"))

        assert "Babel Standalone" in guidance
        assert "Flask" not in guidance

    def test_generic_fallback(self):
        guidance = stack_guidance(StackSelection("Angular", "Go", "Redis"))

        assert guidance == "Tech Stack: Frontend - Angular, Backend - Go, Database - Redis."


class TestGenerationPrompt:
    def test_contains_idea_and_entry_requirement(self):
        prompt = build_generation_prompt(
            "A weather dashboard",
            StackSelection("Angular", "Go", "Redis"),
        )

        assert '**User Idea:** "A weather dashboard"' in prompt
        assert "'index.html'" in prompt
        assert "Tech Stack: Frontend - Angular" in prompt


class TestRefinementPrompt:
    def test_contains_instruction_and_all_files(self, todo_app):
        prompt = build_refinement_prompt("Add a dark mode", todo_app)

        assert '"Add a dark mode"' in prompt
        assert "Return ALL Files" in prompt
        expected = json.dumps([f.to_dict() for f in todo_app.files], indent=2)
        assert expected in prompt
