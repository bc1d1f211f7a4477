"""HTTP 执行器模块.

把请求对象翻译为 Elasticsearch HTTP 调用，按状态码决策表解释响应，
并以惰性序列的形式流式读取大结果集。

主要组件:
    - HttpExecutor: 执行器
    - StreamConfig: 流式读取配置（scroll 或 point-in-time + search_after）
    - Item / GetResult / SearchResult / AggregationResult: 结果模型

使用示例:
    from elasticstream.executor import HttpExecutor, StreamConfig
    from elasticstream.request import Search

    executor = HttpExecutor(es_client)
    config = StreamConfig(search_after=True, keep_alive="2m")
    for item in executor.stream(Search(index="logs"), config):
        print(item.source)
"""

from .exceptions import (
    ElasticDecodeError,
    ElasticExecutorError,
    ProtocolViolationError,
    StreamConfigError,
    UnauthorizedError,
    failure_from_response,
)
from .models import (
    AggregationResult,
    CreationOutcome,
    DeletionOutcome,
    GetResult,
    Item,
    Page,
    PointInTimeCursor,
    SearchAndAggregateResult,
    SearchResult,
    StreamConfig,
)
from .stream import PointInTimePages, ScrollPages, iterate_pages
from .tool import HttpExecutor
from .utils import get_query_params

__all__ = [
    # 执行器
    "HttpExecutor",
    # 流式读取
    "StreamConfig",
    "Page",
    "PointInTimeCursor",
    "ScrollPages",
    "PointInTimePages",
    "iterate_pages",
    # 结果模型
    "Item",
    "CreationOutcome",
    "DeletionOutcome",
    "GetResult",
    "SearchResult",
    "AggregationResult",
    "SearchAndAggregateResult",
    # 工具函数
    "get_query_params",
    # 异常
    "ElasticExecutorError",
    "UnauthorizedError",
    "ProtocolViolationError",
    "ElasticDecodeError",
    "StreamConfigError",
    "failure_from_response",
]
