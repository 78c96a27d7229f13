from __future__ import annotations


class SrtlingoError(Exception):
    """srtlingo 所有自定义异常的基类。"""


class EmptyInputError(SrtlingoError):
    """
    输入文本中没有解析出任何字幕块。

    在发起任何网络请求之前抛出。
    """


class TranslationServiceError(SrtlingoError):
    """远程翻译服务调用失败（网络、鉴权、配额、HTTP 状态码等）。"""


class MalformedResponseError(TranslationServiceError):
    """翻译服务返回的内容无法解析为字符串数组。"""


class StateTransitionError(SrtlingoError):
    """TranslationState 上的非法状态迁移。"""
