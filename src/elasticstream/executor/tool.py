"""HTTP 执行器核心工具类."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from elasticsearch import Elasticsearch

from elasticstream.connection.models import Credentials, ElasticConfig
from elasticstream.connection.tool import create_client
from elasticstream.request.models import (
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
    to_json,
)
from elasticstream.typing import JsonDict

from .exceptions import failure_from_response
from .models import (
    AggregationResult,
    CreationOutcome,
    DeletionOutcome,
    GetResult,
    Item,
    SearchAndAggregateResult,
    SearchResult,
    StreamConfig,
)
from .response import (
    CountResponse,
    CreateResponse,
    GetResponse,
    PointInTimeResponse,
    SearchWithAggregationsResponse,
)
from .stream import PointInTimePages, ScrollPages, iterate_pages
from .transport import NDJSON_CONTENT_TYPE, LoggingTransport, RawResponse
from .utils import build_path, get_query_params

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ES 路径段与参数名
BULK = "_bulk"
COUNT = "_count"
CREATE = "_create"
DELETE_BY_QUERY = "_delete_by_query"
DOC = "_doc"
KEEP_ALIVE = "keep_alive"
POINT_IN_TIME = "_pit"
SCROLL = "scroll"
SCROLL_ID = "scroll_id"
SEARCH = "_search"
SHARD_DOC = "_shard_doc"
TYPED_KEYS = "typed_keys"


class HttpExecutor:
    """HTTP 执行器.

    把请求对象翻译为一次（流式读取时为多次）HTTP 调用，并按状态码
    决策表解释响应。执行器不持有调用之间的可变状态，多个请求或流
    可以并发使用同一个实例。

    特性:
    - 所有操作共用同一个失败分类函数（401/403 为授权失败）
    - 缺省的可选查询参数不会被发送
    - scroll 与 point-in-time 两种流式分页协议
    - 不做重试，失败立即返回给调用方

    Args:
        es_client: 注入的 Elasticsearch 客户端
        credentials: Basic Auth 凭据（可选）

    使用示例:
        executor = HttpExecutor.from_config(
            ElasticConfig(hosts=["http://localhost:9200"])
        )
        outcome = executor.execute(CreateIndex(name="users"))

        for item in executor.stream(Search(index="users"), StreamConfig()):
            print(item.source)
    """

    def __init__(
        self, es_client: Elasticsearch, credentials: Credentials | None = None
    ) -> None:
        self._transport = LoggingTransport(es_client, credentials=credentials)
        self._handlers: dict[type, Callable[[Any], Any]] = {
            Aggregate: self._execute_aggregate,
            Bulk: self._execute_bulk,
            Count: self._execute_count,
            Create: self._execute_create,
            CreateWithId: self._execute_create_with_id,
            CreateIndex: self._execute_create_index,
            CreateOrUpdate: self._execute_create_or_update,
            DeleteById: self._execute_delete_by_id,
            DeleteByQuery: self._execute_delete_by_query,
            DeleteIndex: self._execute_delete_index,
            Exists: self._execute_exists,
            GetById: self._execute_get_by_id,
            Search: self._execute_search,
            SearchAndAggregate: self._execute_search_and_aggregate,
        }
        logger.info(
            f"初始化 HTTP 执行器: basic_auth={'on' if credentials else 'off'}"
        )

    @classmethod
    def from_config(
        cls, config: ElasticConfig, **client_options: Any
    ) -> HttpExecutor:
        """根据连接配置创建执行器，client_options 原样传给 create_client."""
        return cls(
            create_client(config, **client_options), credentials=config.credentials
        )

    @property
    def supported_requests(self) -> frozenset[type]:
        """执行器能够处理的请求类型."""
        return frozenset(self._handlers)

    # ========== 单次请求 ==========

    def execute(self, request: ElasticRequest) -> Any:
        """执行一次请求.

        Args:
            request: 请求对象

        Returns:
            请求类型对应的结果，参见各 _execute_* 方法

        Raises:
            UnauthorizedError: HTTP 401 / 403
            ElasticExecutorError: 其他非预期状态码
            ElasticDecodeError: 成功响应无法解码
            TypeError: 不支持的请求类型
        """
        handler = self._handlers.get(type(request))
        if handler is None:
            raise TypeError(f"不支持的请求类型: {type(request).__name__}")
        return handler(request)

    def _execute_aggregate(self, r: Aggregate) -> AggregationResult:
        response = self._send(
            "POST",
            build_path(r.index, SEARCH),
            params={TYPED_KEYS: "true"},
            body=r.body(),
        )
        if response.status == 200:
            decoded = SearchWithAggregationsResponse.from_dict(response.body)
            return AggregationResult(aggregations=decoded.aggregations)
        raise failure_from_response(response.status, response.body)

    def _execute_bulk(self, r: Bulk) -> None:
        path = build_path(r.index, BULK) if r.index else build_path(BULK)
        response = self._send(
            "POST",
            path,
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
            body=r.body,
            content_type=NDJSON_CONTENT_TYPE,
        )
        if response.status == 200:
            return None
        raise failure_from_response(response.status, response.body)

    def _execute_count(self, r: Count) -> int:
        response = self._send(
            "GET",
            build_path(r.index, COUNT),
            params=get_query_params([("routing", r.routing)]),
            body=r.body(),
        )
        if response.status == 200:
            return CountResponse.from_dict(response.body).count
        raise failure_from_response(response.status, response.body)

    def _execute_create(self, r: Create) -> str:
        response = self._send(
            "POST",
            build_path(r.index, DOC),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
            body=to_json(r.document),
        )
        if response.status == 201:
            return CreateResponse.from_dict(response.body).id
        raise failure_from_response(response.status, response.body)

    def _execute_create_with_id(self, r: CreateWithId) -> CreationOutcome:
        response = self._send(
            "POST",
            build_path(r.index, CREATE, r.id),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
            body=to_json(r.document),
        )
        if response.status == 201:
            return CreationOutcome.CREATED
        if response.status == 409:
            return CreationOutcome.ALREADY_EXISTS
        raise failure_from_response(response.status, response.body)

    def _execute_create_index(self, r: CreateIndex) -> CreationOutcome:
        body = r.definition
        if isinstance(body, str):
            body = body if body.strip() else None
        elif body:
            body = to_json(body)
        response = self._send("PUT", build_path(r.name), body=body or None)
        if response.status == 200:
            return CreationOutcome.CREATED
        if response.status == 400:
            return CreationOutcome.ALREADY_EXISTS
        raise failure_from_response(response.status, response.body)

    def _execute_create_or_update(self, r: CreateOrUpdate) -> None:
        response = self._send(
            "PUT",
            build_path(r.index, DOC, r.id),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
            body=to_json(r.document),
        )
        if response.status in (200, 201):
            return None
        raise failure_from_response(response.status, response.body)

    def _execute_delete_by_id(self, r: DeleteById) -> DeletionOutcome:
        response = self._send(
            "DELETE",
            build_path(r.index, DOC, r.id),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
        )
        return self._deletion_outcome(response)

    def _execute_delete_by_query(self, r: DeleteByQuery) -> DeletionOutcome:
        response = self._send(
            "POST",
            build_path(r.index, DELETE_BY_QUERY),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
            body=r.body(),
        )
        return self._deletion_outcome(response)

    def _execute_delete_index(self, r: DeleteIndex) -> DeletionOutcome:
        response = self._send("DELETE", build_path(r.name))
        return self._deletion_outcome(response)

    def _deletion_outcome(self, response: RawResponse) -> DeletionOutcome:
        if response.status == 200:
            return DeletionOutcome.DELETED
        if response.status == 404:
            return DeletionOutcome.NOT_FOUND
        raise failure_from_response(response.status, response.body)

    def _execute_exists(self, r: Exists) -> bool:
        response = self._send(
            "HEAD",
            build_path(r.index, DOC, r.id),
            params=get_query_params([("routing", r.routing)]),
        )
        if response.status == 200:
            return True
        if response.status == 404:
            return False
        raise failure_from_response(response.status, response.body)

    def _execute_get_by_id(self, r: GetById) -> GetResult:
        response = self._send(
            "GET",
            build_path(r.index, DOC, r.id),
            params=get_query_params([("refresh", r.refresh), ("routing", r.routing)]),
        )
        if response.status == 200:
            return GetResult(item=GetResponse.from_dict(response.body).to_item())
        if response.status == 404:
            return GetResult(item=None)
        raise failure_from_response(response.status, response.body)

    def _execute_search(self, r: Search) -> SearchResult:
        response = self._send(
            "POST",
            build_path(r.index, SEARCH),
            params=get_query_params([("routing", r.routing)]),
            body=r.body(),
        )
        if response.status == 200:
            decoded = SearchWithAggregationsResponse.from_dict(response.body)
            return SearchResult(items=decoded.items())
        raise failure_from_response(response.status, response.body)

    def _execute_search_and_aggregate(
        self, r: SearchAndAggregate
    ) -> SearchAndAggregateResult:
        params = get_query_params([("routing", r.routing)])
        params[TYPED_KEYS] = "true"
        response = self._send(
            "POST", build_path(r.index, SEARCH), params=params, body=r.body()
        )
        if response.status == 200:
            decoded = SearchWithAggregationsResponse.from_dict(response.body)
            return SearchAndAggregateResult(
                aggregations=decoded.aggregations, items=decoded.items()
            )
        raise failure_from_response(response.status, response.body)

    # ========== 流式读取 ==========

    def stream(
        self, request: Search, config: StreamConfig | None = None
    ) -> Iterator[Item]:
        """流式读取搜索结果.

        返回惰性的文档序列，每次只请求一页，且在上一页的文档全部被
        消费之后才请求下一页。重新调用 stream() 会从头开始读取。
        调用方停止迭代即视为取消，服务端游标依赖 keep_alive 过期回收。

        Args:
            request: 搜索请求
            config: 流式读取配置，默认使用 scroll 协议、keep_alive 为 1m

        Returns:
            文档迭代器

        Raises:
            TypeError: 请求类型不可流式读取
        """
        if not isinstance(request, Search):
            raise TypeError(f"不支持流式读取的请求类型: {type(request).__name__}")
        config = config or StreamConfig()
        if config.search_after:
            return iterate_pages(PointInTimePages(self, request, config))
        return iterate_pages(ScrollPages(self, request, config))

    def stream_as(
        self,
        request: Search,
        item_type: Callable[[JsonDict], T],
        config: StreamConfig | None = None,
    ) -> Iterator[T]:
        """流式读取并把每条文档转换为业务对象.

        与 stream() 相同，请求类型在调用时即校验，文档转换在迭代时进行。

        Raises:
            TypeError: 请求类型不可流式读取
            ElasticDecodeError: 文档转换失败时抛出，流随之终止
        """
        items = self.stream(request, config)
        return (item.document_as(item_type) for item in items)

    # ========== 分页请求（供流式协议使用） ==========

    def search_with_scroll(
        self, r: Search, config: StreamConfig
    ) -> SearchWithAggregationsResponse:
        """发起创建 scroll 游标的首次搜索."""
        body = r.query_body()
        if r.sort:
            body["sort"] = r.sort_body()
        response = self._send(
            "POST",
            build_path(r.index, SEARCH),
            params=get_query_params([(SCROLL, config.keep_alive), ("routing", r.routing)]),
            body=body,
        )
        if response.status == 200:
            return SearchWithAggregationsResponse.from_dict(response.body)
        raise failure_from_response(response.status, response.body)

    def get_by_scroll(
        self, scroll_id: str, config: StreamConfig
    ) -> SearchWithAggregationsResponse:
        """使用 scroll_id 读取下一页."""
        response = self._send(
            "POST",
            build_path(SEARCH, SCROLL),
            params={SCROLL: config.keep_alive},
            body={SCROLL_ID: scroll_id},
        )
        if response.status == 200:
            return SearchWithAggregationsResponse.from_dict(response.body)
        raise failure_from_response(response.status, response.body)

    def open_point_in_time(self, index: str, config: StreamConfig) -> str:
        """对索引打开 point-in-time，返回 pit_id."""
        response = self._send(
            "POST",
            build_path(index, POINT_IN_TIME),
            params={KEEP_ALIVE: config.keep_alive},
        )
        if response.status == 200:
            return PointInTimeResponse.from_dict(response.body).id
        raise failure_from_response(response.status, response.body)

    def search_after(
        self,
        r: Search,
        pit_id: str,
        config: StreamConfig,
        search_after: list[Any] | None = None,
    ) -> SearchWithAggregationsResponse:
        """在 point-in-time 上执行一页 search_after 搜索.

        请求体由查询、排序、pit 和 search_after 合并而成；未指定排序时
        按 _shard_doc 排序以保证分页稳定。
        """
        body = r.query_body()
        body["sort"] = r.sort_body() if r.sort else [SHARD_DOC]
        body["pit"] = {"id": pit_id, KEEP_ALIVE: config.keep_alive}
        if search_after is not None:
            body["search_after"] = search_after
        response = self._send("GET", build_path(SEARCH), body=body)
        if response.status == 200:
            return SearchWithAggregationsResponse.from_dict(response.body)
        raise failure_from_response(response.status, response.body)

    def _send(self, method: str, path: str, **kwargs: Any) -> RawResponse:
        return self._transport.send(method, path, **kwargs)
