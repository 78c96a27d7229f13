import pytest

from srtlingo.translate import GeminiTranslator, LLMTranslator, get_translation_engine


def test_gemini_engine(monkeypatch):
    monkeypatch.setenv("SRTLINGO_GEMINI_API_KEY", "k")

    assert isinstance(get_translation_engine("gemini"), GeminiTranslator)
    assert isinstance(get_translation_engine(" Gemini "), GeminiTranslator)


def test_llm_engine(monkeypatch):
    monkeypatch.setenv("SRTLINGO_LLM_URL", "https://llm.example")
    monkeypatch.setenv("SRTLINGO_LLM_MODEL", "m")

    assert isinstance(get_translation_engine("llm"), LLMTranslator)


def test_unknown_engine():
    with pytest.raises(ValueError, match="Unknown translation engine"):
        get_translation_engine("google")
