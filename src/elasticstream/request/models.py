"""请求模型定义模块.

定义执行器可以处理的全部请求类型。每个请求都是不可变的数据类，
携带构造一次 HTTP 调用所需的全部参数，并自行负责请求体的序列化。

查询、排序、高亮和聚合参数既可以是普通字典，也可以是任何提供
to_dict() 方法的对象（例如 elasticsearch.dsl 的 Q、A 对象）。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from elasticstream.typing import JsonDict


def to_json(value: Any) -> Any:
    """将 DSL 对象转换为可序列化的 JSON 结构.

    Args:
        value: 字典、列表或提供 to_dict() 的 DSL 对象

    Returns:
        可直接 JSON 序列化的值
    """
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {key: to_json(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    return value


class ElasticRequest:
    """全部请求类型的基类."""

    __slots__ = ()


@dataclass(frozen=True)
class Aggregate(ElasticRequest):
    """聚合请求.

    Attributes:
        index: 索引名称
        aggregations: 聚合定义，key 为聚合名称
    """

    index: str
    aggregations: Mapping[str, Any]

    def body(self) -> JsonDict:
        return {"aggs": to_json(self.aggregations)}


@dataclass(frozen=True)
class Bulk(ElasticRequest):
    """批量请求.

    body 为调用方准备好的 NDJSON 文本，原样发送，执行器不解析逐条结果。

    Attributes:
        body: NDJSON 格式的批量操作文本
        index: 默认索引名称（可选）
        refresh: 是否刷新
        routing: 路由值
    """

    body: str
    index: str | None = None
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class Count(ElasticRequest):
    """计数请求."""

    index: str
    query: Any = None
    routing: str | None = None

    def body(self) -> JsonDict | None:
        if self.query is None:
            return None
        return {"query": to_json(self.query)}


@dataclass(frozen=True)
class Create(ElasticRequest):
    """自动生成文档 ID 的创建请求."""

    index: str
    document: Mapping[str, Any]
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class CreateWithId(ElasticRequest):
    """指定文档 ID 的创建请求，文档已存在时返回 ALREADY_EXISTS."""

    index: str
    id: str  # noqa: A003
    document: Mapping[str, Any]
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class CreateOrUpdate(ElasticRequest):
    """创建或覆盖指定 ID 的文档."""

    index: str
    id: str  # noqa: A003
    document: Mapping[str, Any]
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class CreateIndex(ElasticRequest):
    """创建索引请求.

    Attributes:
        name: 索引名称
        definition: 索引定义（settings、mappings 等），可以是字典或 JSON 文本
    """

    name: str
    definition: Mapping[str, Any] | str | None = None


@dataclass(frozen=True)
class DeleteById(ElasticRequest):
    """按 ID 删除文档."""

    index: str
    id: str  # noqa: A003
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class DeleteByQuery(ElasticRequest):
    """按查询删除文档."""

    index: str
    query: Any
    refresh: bool | None = None
    routing: str | None = None

    def body(self) -> JsonDict:
        return {"query": to_json(self.query)}


@dataclass(frozen=True)
class DeleteIndex(ElasticRequest):
    """删除索引请求."""

    name: str


@dataclass(frozen=True)
class Exists(ElasticRequest):
    """检查文档是否存在."""

    index: str
    id: str  # noqa: A003
    routing: str | None = None


@dataclass(frozen=True)
class GetById(ElasticRequest):
    """按 ID 获取文档."""

    index: str
    id: str  # noqa: A003
    refresh: bool | None = None
    routing: str | None = None


@dataclass(frozen=True)
class Search(ElasticRequest):
    """搜索请求.

    也是唯一可以流式读取的请求类型，参见 HttpExecutor.stream()。

    Attributes:
        index: 索引名称
        query: 查询定义，默认 match_all
        sort: 排序条件，为空时不指定排序
        routing: 路由值
        highlight: 高亮配置
        from_: 起始偏移
        size: 返回条数
        source_includes: 需要返回的 _source 字段

    Examples:
        >>> from elasticsearch.dsl import Q
        >>> request = Search(
        ...     index="logs",
        ...     query=Q("term", level="error"),
        ...     sort=({"timestamp": "desc"},),
        ... )
    """

    index: str
    query: Any = None
    sort: tuple[Any, ...] = ()
    routing: str | None = None
    highlight: Mapping[str, Any] | None = None
    from_: int | None = None
    size: int | None = None
    source_includes: tuple[str, ...] = ()

    def query_body(self) -> JsonDict:
        """仅包含查询部分的请求体，分页协议会在此基础上合并自己的字段."""
        if self.query is None:
            return {"query": {"match_all": {}}}
        return {"query": to_json(self.query)}

    def sort_body(self) -> list[Any]:
        return [to_json(clause) for clause in self.sort]

    def search_body(self) -> JsonDict:
        """完整的搜索请求体."""
        body = self.query_body()
        if self.sort:
            body["sort"] = self.sort_body()
        if self.highlight is not None:
            body["highlight"] = to_json(self.highlight)
        if self.from_ is not None:
            body["from"] = self.from_
        if self.size is not None:
            body["size"] = self.size
        if self.source_includes:
            body["_source"] = {"includes": list(self.source_includes)}
        return body

    def body(self) -> JsonDict:
        return self.search_body()


@dataclass(frozen=True)
class SearchAndAggregate(Search):
    """同时执行搜索与聚合的请求."""

    aggregations: Mapping[str, Any] | None = None

    def body(self) -> JsonDict:
        body = self.search_body()
        if self.aggregations:
            body["aggs"] = to_json(self.aggregations)
        return body


# 可以流式读取的请求类型
SearchRequest = Search
