"""ES 连接模块 - 执行器所需的集群连接配置与客户端创建.

主要组件:
    - ElasticConfig: 集群连接配置模型
    - Credentials: Basic Auth 凭据
    - create_client: 根据配置创建 Elasticsearch 客户端
    - LenientJsonSerializer: 解析失败时保留原始文本的 JSON 序列化器

使用示例:
    from elasticstream.connection import ElasticConfig, create_client

    client = create_client(ElasticConfig(hosts=["http://localhost:9200"]))
"""

from .exceptions import ConnectionConfigError, ElasticConnectionError
from .models import Credentials, ElasticConfig
from .serializer import LenientJsonSerializer, lenient_serializers
from .tool import create_client

__all__ = [
    # 工厂
    "create_client",
    "lenient_serializers",
    # 模型
    "ElasticConfig",
    "Credentials",
    "LenientJsonSerializer",
    # 异常
    "ElasticConnectionError",
    "ConnectionConfigError",
]
