from __future__ import annotations

import os
from typing import Any, Dict, List

from srtlingo.errors import MalformedResponseError
from srtlingo.log import get_logger

from .direction import TranslationDirection
from .prompts import build_system_instruction, build_user_prompt
from .translator import RemoteTranslationEngine, parse_string_list

logger = get_logger(__name__)

DEFAULT_GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-3-flash"


class GeminiTranslator(RemoteTranslationEngine):
    """
    通过 Google Generative Language REST 接口（generateContent）翻译字幕。

    使用 responseSchema 约束模型只返回字符串数组。

    环境变量约定：
      - SRTLINGO_GEMINI_API_KEY   # 必填（也可使用 GOOGLE_API_KEY）
      - SRTLINGO_GEMINI_MODEL     # 可选，默认 gemini-3-flash
      - SRTLINGO_GEMINI_URL       # 可选，接口根地址，可指向代理
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout=timeout)
        key = api_key or os.getenv("SRTLINGO_GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not key:
            raise RuntimeError(
                "GeminiTranslator requires SRTLINGO_GEMINI_API_KEY (or GOOGLE_API_KEY) to be set."
            )
        self.api_key = key
        self.model = model or os.getenv("SRTLINGO_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        url = base_url or os.getenv("SRTLINGO_GEMINI_URL") or DEFAULT_GEMINI_URL
        self.base_url = url.rstrip("/")

    def _endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _build_body(self, texts: List[str], direction: TranslationDirection) -> Dict[str, Any]:
        return {
            "systemInstruction": {
                "parts": [{"text": build_system_instruction(direction)}],
            },
            "contents": [
                {"role": "user", "parts": [{"text": build_user_prompt(texts)}]},
            ],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                },
            },
        }

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        candidates = data.get("candidates")
        if not candidates:
            feedback = data.get("promptFeedback")
            raise MalformedResponseError(
                f"Gemini response missing 'candidates' field (promptFeedback={feedback})"
            )
        if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
            raise MalformedResponseError(
                f"Gemini response has unexpected 'candidates' shape: {str(candidates)[:200]}"
            )
        content = candidates[0].get("content") or {}
        if not isinstance(content, dict):
            raise MalformedResponseError(
                f"Gemini candidate has unexpected 'content' shape: {str(content)[:200]}"
            )
        parts = content.get("parts") or []
        if not isinstance(parts, list):
            raise MalformedResponseError(
                f"Gemini candidate has unexpected 'parts' shape: {str(parts)[:200]}"
            )
        text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
        # 与原始行为一致：空内容按空数组处理
        return text or "[]"

    def translate(
        self,
        texts: List[str],
        direction: TranslationDirection,
    ) -> List[str]:
        if not texts:
            return []
        data = self._post_json(
            self._endpoint(),
            self._build_body(texts, direction),
            headers={"x-goog-api-key": self.api_key},
        )
        content = self._extract_text(data)
        self._debug_log("原始 content 内容", content)
        translations = parse_string_list(content)
        logger.debug(
            "Gemini 翻译完成: %d 条输入, %d 条输出 (%s)",
            len(texts),
            len(translations),
            direction.code,
        )
        return translations
