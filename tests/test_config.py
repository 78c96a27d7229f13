import logging
import os

import pytest

from srtlingo.config import SrtlingoConfig
from srtlingo.env import load_dotenv_if_present
from srtlingo.log import setup_logging
from srtlingo.translate.direction import TranslationDirection


def test_defaults(tmp_path):
    config = SrtlingoConfig.from_paths(tmp_path / "movie.srt")

    assert config.input_path == (tmp_path / "movie.srt").resolve()
    assert config.output_path == (tmp_path / "movie_translated_en-fa.srt").resolve()
    assert config.direction is TranslationDirection.EN_TO_FA
    assert config.translation_engine == "gemini"
    assert config.chunk_size == 30
    assert config.throttle_seconds == 0.5


def test_direction_code_and_explicit_values(tmp_path):
    config = SrtlingoConfig.from_paths(
        tmp_path / "movie.fa.srt",
        output_path=tmp_path / "out" / "result.srt",
        direction="fa-en",
        translation_engine="LLM",
        chunk_size=10,
        throttle_seconds=-1,
    )

    assert config.direction is TranslationDirection.FA_TO_EN
    assert config.output_path == (tmp_path / "out" / "result.srt").resolve()
    assert config.translation_engine == "llm"
    assert config.chunk_size == 10
    assert config.throttle_seconds == 0.0


def test_default_output_follows_direction(tmp_path):
    config = SrtlingoConfig.from_paths(tmp_path / "movie.fa.srt", direction="fa-en")

    assert config.output_path.name == "movie.fa_translated_fa-en.srt"


def test_values_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("SRTLINGO_TRANSLATION_ENGINE", "llm")
    monkeypatch.setenv("SRTLINGO_CHUNK_SIZE", "12")
    monkeypatch.setenv("SRTLINGO_THROTTLE_SECONDS", "1.5")

    config = SrtlingoConfig.from_paths(tmp_path / "a.srt")

    assert config.translation_engine == "llm"
    assert config.chunk_size == 12
    assert config.throttle_seconds == 1.5


@pytest.mark.parametrize("value", ["abc", "0", "-4"])
def test_invalid_chunk_size_in_environment_falls_back(tmp_path, monkeypatch, value):
    monkeypatch.setenv("SRTLINGO_CHUNK_SIZE", value)
    monkeypatch.setenv("SRTLINGO_THROTTLE_SECONDS", "soon")

    config = SrtlingoConfig.from_paths(tmp_path / "a.srt")

    assert config.chunk_size == 30
    assert config.throttle_seconds == 0.5


def test_explicit_invalid_values_raise(tmp_path):
    with pytest.raises(ValueError):
        SrtlingoConfig.from_paths(tmp_path / "a.srt", chunk_size=0)
    with pytest.raises(ValueError):
        SrtlingoConfig.from_paths(tmp_path / "a.srt", direction="en-de")


def test_load_dotenv_if_present(tmp_path, monkeypatch):
    monkeypatch.delenv("SRTLINGO_TEST_ONLY", raising=False)
    monkeypatch.setenv("SRTLINGO_TEST_KEEP", "from-env")
    env_file = tmp_path / ".env"
    env_file.write_text("SRTLINGO_TEST_ONLY=loaded\nSRTLINGO_TEST_KEEP=from-file\n", encoding="utf-8")

    assert load_dotenv_if_present(env_file) is True

    assert os.environ["SRTLINGO_TEST_ONLY"] == "loaded"
    assert os.environ["SRTLINGO_TEST_KEEP"] == "from-env"
    monkeypatch.delenv("SRTLINGO_TEST_ONLY")


def test_load_dotenv_missing_file(tmp_path):
    assert load_dotenv_if_present(tmp_path / "missing.env") is False


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "srtlingo.log"

    setup_logging("debug", log_file)
    logging.getLogger("srtlingo.test").debug("hello log")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert "hello log" in log_file.read_text(encoding="utf-8")
    setup_logging("WARNING")
