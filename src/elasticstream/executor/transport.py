"""传输层包装模块.

对注入的 Elasticsearch 客户端做一层薄包装：发送请求、记录请求与响应日志，
并把响应统一为 (状态码, 响应体, 响应头)。状态码的解释由执行器负责。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from elastic_transport import SerializationError
from elasticsearch import Elasticsearch

from elasticstream.connection.models import Credentials
from elasticstream.typing import HeadersDict

from .exceptions import ElasticDecodeError, format_body

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
NDJSON_CONTENT_TYPE = "application/x-ndjson"

# 日志中需要脱敏的请求头（小写）
SENSITIVE_HEADERS = frozenset(
    {"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"}
)

# 由执行器自行解释的状态码，客户端不再抛出 ApiError
_EXECUTOR_HANDLED_STATUSES = tuple(range(400, 600))


def redact_headers(headers: Mapping[str, str] | None) -> HeadersDict:
    """返回敏感值被替换为 *** 的请求头副本."""
    if not headers:
        return {}
    return {
        name: "***" if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


@dataclass(frozen=True)
class RawResponse:
    """一次 HTTP 调用的原始结果."""

    status: int
    body: Any = None
    headers: HeadersDict = field(default_factory=dict)


class LoggingTransport:
    """带日志记录的传输层包装.

    每次调用前后以 DEBUG 级别记录方法、路径、请求头和请求体，
    敏感请求头会被脱敏。不做任何重试。

    由 create_client 创建的客户端在 JSON 解析失败时返回原始文本，
    错误状态码因此总能交给执行器分类；其他客户端只能报告解码失败。

    Args:
        es_client: 注入的 Elasticsearch 客户端，负责连接池与连接复用
        credentials: Basic Auth 凭据，配置后附加到每个请求
    """

    def __init__(
        self, es_client: Elasticsearch, credentials: Credentials | None = None
    ) -> None:
        if es_client is None:
            raise ValueError("es_client 不能为 None")
        options: dict[str, Any] = {
            "ignore_status": _EXECUTOR_HANDLED_STATUSES,
            "max_retries": 0,
        }
        if credentials is not None:
            options["basic_auth"] = credentials.as_tuple()
        self._client = es_client.options(**options)

    def send(
        self,
        method: str,
        path: str,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> RawResponse:
        """发送一次 HTTP 请求.

        Args:
            method: HTTP 方法
            path: 请求路径（以 / 开头）
            params: 查询参数，仅包含有值的参数
            body: 请求体，字典会被序列化为 JSON，字符串原样发送
            content_type: 请求体的 Content-Type

        Returns:
            原始响应

        Raises:
            ElasticDecodeError: 客户端未配置宽松序列化器且响应体无法反序列化时抛出
        """
        headers: HeadersDict = {"accept": JSON_CONTENT_TYPE}
        if body is not None:
            headers["content-type"] = content_type

        logger.debug(
            f"[es-req]: {method} {path} params={dict(params or {})} "
            f"headers={redact_headers(headers)} body={format_body(body)}"
        )
        try:
            response = self._client.perform_request(
                method,
                path,
                params=dict(params) if params else None,
                headers=headers,
                body=body,
            )
        except SerializationError as e:
            raise ElasticDecodeError(f"响应体反序列化失败（状态码未知）: {e}") from e

        status = response.meta.status
        response_headers = dict(response.meta.headers or {})
        logger.debug(
            f"[es-res]: {method} {path} status={status} "
            f"headers={redact_headers(response_headers)} "
            f"body={format_body(response.body)}"
        )
        return RawResponse(status=status, body=response.body, headers=response_headers)
