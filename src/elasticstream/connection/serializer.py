"""响应体序列化器模块.

代理或网关在错误状态下常返回纯文本，却仍声明 Content-Type 为 JSON。
默认的 JSON 序列化器此时抛出 SerializationError，状态码也随之丢失。
这里的序列化器在解析失败时返回原始文本，交由执行器按状态码分类。
"""

from __future__ import annotations

from typing import Any

from elastic_transport import SerializationError, Serializer
from elasticsearch.serializer import JsonSerializer

# 需要宽松解析的 JSON 类 mimetype（含 ES 兼容模式）
JSON_MIMETYPES = ("application/json", "application/vnd.elasticsearch+json")


class LenientJsonSerializer(JsonSerializer):
    """解析失败时返回原始文本的 JSON 序列化器."""

    def loads(self, data: bytes) -> Any:
        try:
            return super().loads(data)
        except SerializationError:
            return data.decode("utf-8", errors="replace")


def lenient_serializers() -> dict[str, Serializer]:
    """返回按 mimetype 注册的宽松序列化器，用于 Elasticsearch(serializers=...)."""
    serializer = LenientJsonSerializer()
    return {mimetype: serializer for mimetype in JSON_MIMETYPES}
