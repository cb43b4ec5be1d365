"""
AI Provider Abstraction.

모델 교체 가능하게 설계.
모델명은 config만 SSOT.
"""

from .base import AppGenerator, GenerationError, GenerationResult, ProviderError
from .gemini import GeminiAppGenerator

__all__ = [
    "AppGenerator",
    "GenerationResult",
    "ProviderError",
    "GenerationError",
    "GeminiAppGenerator",
]
