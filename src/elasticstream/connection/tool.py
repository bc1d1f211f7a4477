"""ES 客户端创建工具模块.

根据 ElasticConfig 创建执行器使用的 Elasticsearch 客户端。
客户端负责连接池与连接复用，执行器自身不做任何重试。

使用示例:
    from elasticstream.connection import ElasticConfig, create_client

    client = create_client(ElasticConfig(hosts=["http://localhost:9200"]))
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import Elasticsearch

from .models import ElasticConfig
from .serializer import lenient_serializers

logger = logging.getLogger(__name__)


def create_client(config: ElasticConfig, **client_options: Any) -> Elasticsearch:
    """根据连接配置创建 Elasticsearch 客户端实例.

    重试被显式关闭：执行器的失败总是立即返回给调用方。
    JSON 响应体解析失败时保留原始文本，错误状态码不会因此丢失。

    Args:
        config: 集群连接配置
        **client_options: 其余原样传给 Elasticsearch 的参数（如 node_class）

    Returns:
        Elasticsearch 客户端实例
    """
    kwargs: dict[str, Any] = {
        "hosts": config.hosts,
        "max_retries": 0,
        "retry_on_timeout": False,
        "request_timeout": config.request_timeout,
        "http_compress": config.http_compress,
        "verify_certs": config.verify_certs,
        "serializers": lenient_serializers(),
    }

    # Basic Auth 认证
    if config.credentials is not None:
        kwargs["basic_auth"] = config.credentials.as_tuple()

    # SSL/TLS 配置
    if config.ca_certs:
        kwargs["ca_certs"] = config.ca_certs

    kwargs.update(client_options)

    logger.info(f"创建 ES 客户端: hosts={config.hosts}")
    return Elasticsearch(**kwargs)
