"""执行器异常定义模块."""

from __future__ import annotations

import json
from typing import Any

from ..exceptions import ElasticStreamError


class ElasticExecutorError(ElasticStreamError):
    """执行器基础异常类.

    非成功状态码的通用失败也使用该异常，携带原始响应体以便排查。

    Attributes:
        status: HTTP 状态码（非 HTTP 失败时为 None）
        body: 原始响应体文本
    """

    def __init__(
        self, message: str, status: int | None = None, body: str | None = None
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class UnauthorizedError(ElasticExecutorError):
    """认证或授权失败（HTTP 401 / 403）."""

    pass


class ProtocolViolationError(ElasticExecutorError):
    """服务端响应违反分页协议.

    point-in-time 分页中，非空页缺少新的 pit_id 或排序标记时抛出。
    """

    pass


class ElasticDecodeError(ElasticExecutorError):
    """成功状态码下响应体无法解码为预期结构."""

    pass


class StreamConfigError(ElasticExecutorError):
    """流式读取配置不合法."""

    pass


def format_body(body: Any) -> str:
    """将响应体转换为用于诊断的文本."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(body)


def failure_from_response(status: int, body: Any) -> ElasticExecutorError:
    """将失败响应分类为对应的异常.

    所有操作共用这一个分类函数：401 和 403 视为授权失败，
    其他状态码一律为携带原始响应体的通用执行器异常。

    Args:
        status: HTTP 状态码
        body: 响应体

    Returns:
        待抛出的异常实例
    """
    text = format_body(body)
    if status in (401, 403):
        return UnauthorizedError(
            f"Elasticsearch 拒绝访问 (HTTP {status})", status=status, body=text
        )
    return ElasticExecutorError(
        f"Elasticsearch 返回非预期响应 (HTTP {status})，响应体: {text}",
        status=status,
        body=text,
    )
