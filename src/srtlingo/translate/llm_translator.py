from __future__ import annotations

import os
from typing import Any, Dict, List

from srtlingo.errors import MalformedResponseError
from srtlingo.log import get_logger

from .direction import TranslationDirection
from .prompts import TRANSLATION_SCHEMA, build_system_instruction, build_user_prompt
from .translator import RemoteTranslationEngine, ensure_string_list, parse_json_content

logger = get_logger(__name__)


class LLMTranslator(RemoteTranslationEngine):
    """
    使用 OpenAI Chat Completions 兼容接口的 LLM 翻译引擎。

    环境变量约定（来自 .env 或系统环境）：
      - SRTLINGO_LLM_URL                  # 必填，LLM 接口完整 URL
      - SRTLINGO_LLM_MODEL                # 必填，模型名称
      - SRTLINGO_LLM_API_KEY              # 可选，用于 Authorization: Bearer
      - SRTLINGO_LLM_RESPONSE_FORMAT_KEY  # 可选，结构化输出参数名，默认 response_format，置空则不发送
    """

    def __init__(self, timeout: float | None = None) -> None:
        super().__init__(timeout=timeout)
        url = os.getenv("SRTLINGO_LLM_URL")
        model = os.getenv("SRTLINGO_LLM_MODEL")
        if not url or not model:
            raise RuntimeError(
                "LLMTranslator requires SRTLINGO_LLM_URL and SRTLINGO_LLM_MODEL to be set."
            )
        self.url = url
        self.model = model
        self.api_key = os.getenv("SRTLINGO_LLM_API_KEY")
        # 某些非 OpenAI 平台可能使用不同的参数名（例如 "format"）
        self.response_format_key = os.getenv(
            "SRTLINGO_LLM_RESPONSE_FORMAT_KEY", "response_format"
        ).strip()

    def _response_format(self) -> Dict[str, Any]:
        # OpenAI 的 strict json_schema 要求根节点为 object
        return {
            "type": "json_schema",
            "json_schema": {
                "name": "srtlingo_translation",
                "strict": True,
                "schema": {
                    "type": "object",
                    "properties": {"translations": TRANSLATION_SCHEMA},
                    "required": ["translations"],
                    "additionalProperties": False,
                },
            },
        }

    def _build_body(self, texts: List[str], direction: TranslationDirection) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_instruction(direction)},
                {"role": "user", "content": build_user_prompt(texts)},
            ],
            "temperature": 0.2,
        }
        if self.response_format_key:
            body[self.response_format_key] = self._response_format()
        return body

    @staticmethod
    def _extract_content(data: Dict[str, Any]) -> str:
        choices = data.get("choices")
        if not choices:
            raise MalformedResponseError(
                f"LLM response missing 'choices' field, got: {list(data.keys())}"
            )
        if not isinstance(choices, list) or not isinstance(choices[0], dict):
            raise MalformedResponseError(
                f"LLM response has unexpected 'choices' shape: {str(choices)[:200]}"
            )
        first = choices[0]
        content: Any = None

        # OpenAI Chat: choices[0].message.content
        message = first.get("message")
        if isinstance(message, dict):
            content = message.get("content")

        # 某些实现可能直接在 text 字段返回
        if content is None and "text" in first:
            content = first.get("text")

        # 部分兼容服务以 content parts 列表返回：[{"type": "text", "text": "..."}]
        if isinstance(content, list):
            content = "".join(
                str(part.get("text", "")) for part in content if isinstance(part, dict)
            )

        if not isinstance(content, str) or not content:
            raise MalformedResponseError(
                f"LLM response missing 'content'/'text' in first choice: {str(first)[:200]}"
            )
        return content

    def translate(
        self,
        texts: List[str],
        direction: TranslationDirection,
    ) -> List[str]:
        if not texts:
            return []

        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        data = self._post_json(self.url, self._build_body(texts, direction), headers=headers)
        content = self._extract_content(data)
        self._debug_log("原始 content 内容", content)

        parsed = parse_json_content(content.strip())
        if isinstance(parsed, dict):
            # 结构化输出：{"translations": [...]}
            parsed = parsed.get("translations")
        translations = ensure_string_list(parsed)
        logger.debug(
            "LLM 翻译完成: %d 条输入, %d 条输出 (%s)",
            len(texts),
            len(translations),
            direction.code,
        )
        return translations

