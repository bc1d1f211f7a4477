"""elasticstream - Elasticsearch 请求执行与流式读取工具包.

这是一个类型安全的 Elasticsearch 执行层：把请求对象翻译为 HTTP 调用，
解码强类型响应，并把大结果集以逐条产出的惰性序列返回。

主要功能:
    - HttpExecutor: 执行单次请求（搜索、批量、增删改查、聚合）
    - HttpExecutor.stream: 基于 scroll 或 point-in-time + search_after 的流式读取
    - ElasticConfig: 集群连接配置

使用示例:
    from elasticstream import ElasticConfig, HttpExecutor, Search, StreamConfig

    executor = HttpExecutor.from_config(ElasticConfig(hosts=["http://localhost:9200"]))
    for item in executor.stream(Search(index="logs"), StreamConfig()):
        print(item.source)
"""

__version__ = "0.1.0"

# 导出连接配置
from elasticstream.connection import (
    ConnectionConfigError,
    Credentials,
    ElasticConfig,
    create_client,
)

# 导出异常
from elasticstream.exceptions import ElasticStreamError

# 导出执行器
from elasticstream.executor import (
    AggregationResult,
    CreationOutcome,
    DeletionOutcome,
    ElasticDecodeError,
    ElasticExecutorError,
    GetResult,
    HttpExecutor,
    Item,
    ProtocolViolationError,
    SearchAndAggregateResult,
    SearchResult,
    StreamConfig,
    StreamConfigError,
    UnauthorizedError,
)

# 导出请求模型
from elasticstream.request import (
    Aggregate,
    Bulk,
    Count,
    Create,
    CreateIndex,
    CreateOrUpdate,
    CreateWithId,
    DeleteById,
    DeleteByQuery,
    DeleteIndex,
    ElasticRequest,
    Exists,
    GetById,
    Search,
    SearchAndAggregate,
)

__all__ = [
    # 版本
    "__version__",
    # 执行器
    "HttpExecutor",
    "StreamConfig",
    # 连接配置
    "ElasticConfig",
    "Credentials",
    "create_client",
    # 请求
    "ElasticRequest",
    "Aggregate",
    "Bulk",
    "Count",
    "Create",
    "CreateWithId",
    "CreateOrUpdate",
    "CreateIndex",
    "DeleteById",
    "DeleteByQuery",
    "DeleteIndex",
    "Exists",
    "GetById",
    "Search",
    "SearchAndAggregate",
    # 结果
    "Item",
    "CreationOutcome",
    "DeletionOutcome",
    "GetResult",
    "SearchResult",
    "AggregationResult",
    "SearchAndAggregateResult",
    # 异常
    "ElasticStreamError",
    "ConnectionConfigError",
    "ElasticExecutorError",
    "UnauthorizedError",
    "ProtocolViolationError",
    "ElasticDecodeError",
    "StreamConfigError",
]
