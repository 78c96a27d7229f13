from __future__ import annotations

from .direction import TranslationDirection
from .translator import TranslationEngine, RemoteTranslationEngine
from .gemini_translator import GeminiTranslator
from .llm_translator import LLMTranslator
from .factory import get_translation_engine

__all__ = [
    "TranslationDirection",
    "TranslationEngine",
    "RemoteTranslationEngine",
    "GeminiTranslator",
    "LLMTranslator",
    "get_translation_engine",
]
