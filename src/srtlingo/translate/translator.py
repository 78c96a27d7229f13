from __future__ import annotations

import json
import os
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List

import requests

from srtlingo.errors import MalformedResponseError, TranslationServiceError
from srtlingo.log import get_logger

from .direction import TranslationDirection

logger = get_logger(__name__)

# 换行与制表符单独处理，其余控制字符（包括 \u007f）一律清理
_CONTROL_CHARS_RE = re.compile(r"[\u0000-\u0008\u000B-\u001F\u007F]")


class TranslationEngine(ABC):
    """
    翻译引擎抽象接口。

    所有具体翻译实现（Gemini / OpenAI 兼容 LLM）都应遵循该接口，
    以便在 Pipeline 中进行统一调度。
    """

    @abstractmethod
    def translate(
        self,
        texts: List[str],
        direction: TranslationDirection,
    ) -> List[str]:
        """
        将 texts 按 direction 翻译，返回与 texts 一一对应、顺序一致的译文列表。

        返回条数由后端保证，这里不做强制校验；条数不足由 Pipeline 按位置回退原文。
        """


def clean_translation(text: str) -> str:
    """
    清理单条译文：统一换行、去除控制字符、删除多余空行。

    译文中残留的空行会破坏 SRT 的块分隔，因此必须去掉。
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    normalized = _CONTROL_CHARS_RE.sub("", normalized)
    lines = [line for line in normalized.split("\n") if line.strip()]
    return "\n".join(lines).strip()


def parse_json_content(content: str) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as parse_err:
        snippet = content[:500]
        raise MalformedResponseError(
            f"Translation service returned non-JSON content (first 500 chars): {snippet}"
        ) from parse_err


def parse_string_list(content: str) -> List[str]:
    """把模型返回的 JSON 文本解析为字符串列表，格式不符时抛出 MalformedResponseError。"""
    return ensure_string_list(parse_json_content(content))


def ensure_string_list(data: Any) -> List[str]:
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise MalformedResponseError(
            "Invalid response format from translation service: expected a JSON array of strings"
        )
    return [clean_translation(item) for item in data]


class RemoteTranslationEngine(TranslationEngine):
    """
    基于 HTTP JSON 接口的翻译引擎公共部分。

    环境变量约定（来自 .env 或系统环境）：
      - SRTLINGO_LLM_TIMEOUT    # 可选，单次请求超时（秒），默认 60
      - SRTLINGO_HTTP_PROXY     # 可选，HTTP 代理
      - SRTLINGO_HTTPS_PROXY    # 可选，HTTPS 代理
      - SRTLINGO_LLM_DEBUG      # 设置为 1 时记录请求与原始响应预览
    """

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is None:
            try:
                timeout = float(os.getenv("SRTLINGO_LLM_TIMEOUT", "60") or "60")
            except ValueError:
                timeout = 60.0
        self.timeout = timeout
        self.debug = os.getenv("SRTLINGO_LLM_DEBUG", "").strip() == "1"

        http_proxy = os.getenv("SRTLINGO_HTTP_PROXY")
        https_proxy = os.getenv("SRTLINGO_HTTPS_PROXY")
        proxies: dict[str, str] = {}
        if http_proxy:
            proxies["http"] = http_proxy
        if https_proxy:
            proxies["https"] = https_proxy
        self.proxies = proxies or None

    def _debug_log(self, title: str, payload: Any, limit: int | None = 4000) -> None:
        """debug 模式下记录调试信息，对超长内容进行截断。"""
        if not self.debug:
            return
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=2)
        except TypeError:
            text = repr(payload)
        if limit is not None and len(text) > limit:
            text = text[:limit] + f"\n... (truncated, {len(text)} chars total)"
        logger.info("[LLM DEBUG] %s\n%s", title, text)

    def _post_json(
        self,
        url: str,
        body: Dict[str, Any],
        headers: Dict[str, str] | None = None,
        params: Dict[str, str] | None = None,
    ) -> Dict[str, Any]:
        """
        发送 JSON 请求并返回解析后的响应体。

        任何网络或 HTTP 层面的失败都会转换为 TranslationServiceError。
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        self._debug_log("请求体预览", body)

        try:
            response = requests.post(
                url,
                headers=request_headers,
                params=params,
                data=json.dumps(body, ensure_ascii=False).encode("utf-8"),
                timeout=self.timeout,
                proxies=self.proxies,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            detail = str(exc)
            failed = getattr(exc, "response", None)
            if failed is not None and failed.text:
                detail = f"{detail}: {failed.text[:500]}"
            raise TranslationServiceError(f"Translation request failed: {detail}") from exc

        try:
            data = response.json()
        except ValueError as json_err:
            snippet = response.text[:500]
            raise MalformedResponseError(
                f"Translation service response is not valid JSON, first 500 chars: {snippet}"
            ) from json_err

        self._debug_log("完整响应 JSON", data)
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Translation service response is not a JSON object: {type(data).__name__}"
            )
        return data
