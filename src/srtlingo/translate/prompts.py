from __future__ import annotations

import json
from typing import Any, Dict, List

from .direction import TranslationDirection

# 结构化输出：字符串数组
TRANSLATION_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
}


def build_system_instruction(direction: TranslationDirection) -> str:
    """生成字幕翻译的系统提示词。"""
    source = direction.source_language
    target = direction.target_language
    return f"""You are a professional subtitle translator.
Your task is to translate an array of movie dialogue lines from {source} to {target}.

Rules:
1. Maintain the tone: If it's slang/casual, keep it casual. If it's formal, keep it formal.
2. Do NOT translate names of characters or famous places if they are standard transliterations.
3. Return EXACTLY the same number of lines as provided in the input.
4. Keep the translation concise as it must fit on a subtitle screen.
5. Ensure the meaning is preserved perfectly for the local culture.
"""


def build_user_prompt(texts: List[str]) -> str:
    return (
        f"Translate the following {len(texts)} lines of text. "
        "Return them as a JSON array of strings in the exact same order:\n\n"
        f"{json.dumps(texts, ensure_ascii=False)}"
    )
