from __future__ import annotations

from .gemini_translator import GeminiTranslator
from .llm_translator import LLMTranslator
from .translator import TranslationEngine

TRANSLATION_ENGINES = ("gemini", "llm")


def get_translation_engine(name: str) -> TranslationEngine:
    """
    根据名称返回对应的翻译引擎实例。

    支持：
      - "gemini" : GeminiTranslator
      - "llm"    : LLMTranslator（OpenAI 兼容接口）
    """
    key = name.strip().lower()
    if key == "gemini":
        return GeminiTranslator()
    if key == "llm":
        return LLMTranslator()
    raise ValueError(f"Unknown translation engine: {name}")
