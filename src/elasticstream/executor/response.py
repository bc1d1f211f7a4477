"""
ES 响应解码模块.

将 Elasticsearch 原始 JSON 响应解码为强类型的响应封装.
必需字段缺失或类型不符时抛出 ElasticDecodeError，不做静默默认.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from elasticstream.typing import JsonDict

from .exceptions import ElasticDecodeError
from .models import Item


def _require_dict(body: Any, what: str) -> JsonDict:
    if not isinstance(body, dict):
        raise ElasticDecodeError(
            f"{what} 响应体应为 JSON 对象，实际为 {type(body).__name__}"
        )
    return body


def _require(body: JsonDict, key: str, what: str) -> Any:
    try:
        return body[key]
    except KeyError:
        raise ElasticDecodeError(f"{what} 响应缺少字段 {key!r}") from None


@dataclass(frozen=True)
class CountResponse:
    """_count 响应."""

    count: int

    @classmethod
    def from_dict(cls, body: Any) -> CountResponse:
        body = _require_dict(body, "count")
        count = _require(body, "count", "count")
        if not isinstance(count, int) or isinstance(count, bool):
            raise ElasticDecodeError(f"count 字段应为整数，实际为 {count!r}")
        return cls(count=count)


@dataclass(frozen=True)
class CreateResponse:
    """创建文档（自动 ID）响应."""

    id: str  # noqa: A003

    @classmethod
    def from_dict(cls, body: Any) -> CreateResponse:
        body = _require_dict(body, "create")
        return cls(id=str(_require(body, "_id", "create")))


@dataclass(frozen=True)
class GetResponse:
    """按 ID 获取文档响应.

    found 为 False 时没有 _source。
    """

    found: bool
    source: JsonDict | None = None

    @classmethod
    def from_dict(cls, body: Any) -> GetResponse:
        body = _require_dict(body, "get")
        found = bool(body.get("found", True))
        if not found:
            return cls(found=False)
        source = _require_dict(_require(body, "_source", "get"), "get._source")
        return cls(found=True, source=source)

    def to_item(self) -> Item | None:
        if not self.found or self.source is None:
            return None
        return Item(source=self.source)


@dataclass(frozen=True)
class PointInTimeResponse:
    """打开 point-in-time 的响应."""

    id: str  # noqa: A003

    @classmethod
    def from_dict(cls, body: Any) -> PointInTimeResponse:
        body = _require_dict(body, "point-in-time")
        pit_id = _require(body, "id", "point-in-time")
        if not isinstance(pit_id, str) or not pit_id:
            raise ElasticDecodeError(f"point-in-time id 不合法: {pit_id!r}")
        return cls(id=pit_id)


@dataclass(frozen=True)
class SearchWithAggregationsResponse:
    """
    搜索响应（含聚合、scroll 与 point-in-time 信息）.

    Attributes:
        hits: 命中列表，每项为 (_source, highlight)
        aggregations: 聚合结果
        scroll_id: scroll 分页游标
        pit_id: 服务端返回的最新 point-in-time ID
        last_sort_field: 最后一条命中的排序值
    """

    hits: list[tuple[JsonDict, JsonDict | None]] = field(default_factory=list)
    aggregations: JsonDict = field(default_factory=dict)
    scroll_id: str | None = None
    pit_id: str | None = None
    last_sort_field: list[Any] | None = None

    @classmethod
    def from_dict(cls, body: Any) -> SearchWithAggregationsResponse:
        body = _require_dict(body, "search")
        hits_info = _require_dict(_require(body, "hits", "search"), "search.hits")
        raw_hits = _require(hits_info, "hits", "search.hits")
        if not isinstance(raw_hits, list):
            raise ElasticDecodeError("search.hits.hits 应为数组")

        hits: list[tuple[JsonDict, JsonDict | None]] = []
        for raw_hit in raw_hits:
            hit = _require_dict(raw_hit, "search hit")
            source = _require_dict(_require(hit, "_source", "search hit"), "_source")
            highlight = hit.get("highlight")
            if highlight is not None:
                highlight = _require_dict(highlight, "highlight")
            hits.append((source, highlight))

        last_sort_field = None
        if raw_hits:
            last_sort_field = raw_hits[-1].get("sort")

        aggregations = body.get("aggregations")
        if aggregations is None:
            aggregations = {}
        return cls(
            hits=hits,
            aggregations=_require_dict(aggregations, "aggregations"),
            scroll_id=body.get("_scroll_id"),
            pit_id=body.get("pit_id"),
            last_sort_field=last_sort_field,
        )

    def items(self) -> tuple[Item, ...]:
        return tuple(Item(source=source, highlight=hl) for source, hl in self.hits)
