from __future__ import annotations

import os
import tempfile
from typing import Callable, List

import pytest

from srtlingo.translate.direction import TranslationDirection
from srtlingo.translate.translator import TranslationEngine

_ENV_VARS = (
    "SRTLINGO_TRANSLATION_ENGINE",
    "SRTLINGO_CHUNK_SIZE",
    "SRTLINGO_THROTTLE_SECONDS",
    "SRTLINGO_GEMINI_API_KEY",
    "SRTLINGO_GEMINI_MODEL",
    "SRTLINGO_GEMINI_URL",
    "GOOGLE_API_KEY",
    "SRTLINGO_LLM_URL",
    "SRTLINGO_LLM_MODEL",
    "SRTLINGO_LLM_API_KEY",
    "SRTLINGO_LLM_TIMEOUT",
    "SRTLINGO_LLM_DEBUG",
    "SRTLINGO_LLM_RESPONSE_FORMAT_KEY",
    "SRTLINGO_HTTP_PROXY",
    "SRTLINGO_HTTPS_PROXY",
    "SRTLINGO_WEB_MAX_UPLOAD_MB",
    "SRTLINGO_LOG_LEVEL",
)


def pytest_configure(config: pytest.Config) -> None:
    # srtlingo.web.app 在导入时即创建应用，任务目录需在收集测试前指向临时目录
    os.environ.setdefault("SRTLINGO_WEB_JOBS_DIR", tempfile.mkdtemp(prefix="srtlingo-jobs-"))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeEngine(TranslationEngine):
    """记录每次调用的假翻译引擎，译文由 responder 决定。"""

    def __init__(self, responder: Callable[[List[str]], List[str]] | None = None) -> None:
        self.responder = responder or (lambda texts: list(texts))
        self.calls: List[List[str]] = []
        self.directions: List[TranslationDirection] = []

    def translate(self, texts: List[str], direction: TranslationDirection) -> List[str]:
        self.calls.append(list(texts))
        self.directions.append(direction)
        return self.responder(list(texts))


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    return FakeEngine


def build_srt(count: int) -> str:
    parts = []
    for i in range(1, count + 1):
        parts.append(f"{i}\n00:00:{i % 60:02d},000 --> 00:00:{i % 60:02d},500\nLine {i}\n")
    return "\n".join(parts)


@pytest.fixture
def srt_factory() -> Callable[[int], str]:
    return build_srt


@pytest.fixture
def sample_srt() -> str:
    return (
        "1\n00:00:01,000 --> 00:00:02,000\nHello\n\n"
        "2\n00:00:03,000 --> 00:00:04,000\nWorld"
    )
