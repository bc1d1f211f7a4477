"""执行器数据模型定义模块.

包含流式读取配置、分页游标、结果文档以及各类操作的返回值。
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from elasticstream.typing import JsonDict

from .exceptions import ElasticDecodeError, StreamConfigError
from .utils import validate_keep_alive

T = TypeVar("T")
C = TypeVar("C")

DEFAULT_KEEP_ALIVE = "1m"


@dataclass(frozen=True)
class StreamConfig:
    """流式读取配置.

    Attributes:
        search_after: True 时使用 point-in-time + search_after 分页，否则使用 scroll
        keep_alive: 服务端游标保留时间，每次创建或续期游标时原样发送

    Raises:
        StreamConfigError: keep_alive 不符合 ES 时间格式时抛出

    Examples:
        >>> config = StreamConfig().with_search_after().with_keep_alive("5m")
    """

    search_after: bool = False
    keep_alive: str = DEFAULT_KEEP_ALIVE

    def __post_init__(self) -> None:
        if not validate_keep_alive(self.keep_alive):
            raise StreamConfigError(f"不合法的 keep_alive: {self.keep_alive!r}")

    def with_search_after(self) -> StreamConfig:
        return dataclasses.replace(self, search_after=True)

    def with_keep_alive(self, keep_alive: str) -> StreamConfig:
        return dataclasses.replace(self, keep_alive=keep_alive)


def _convert(source: JsonDict, item_type: Callable[[JsonDict], T]) -> T:
    try:
        return item_type(source)
    except (TypeError, ValueError, KeyError) as e:
        raise ElasticDecodeError(f"文档转换失败: {e}") from e


@dataclass(frozen=True)
class Item:
    """一条结果文档.

    Attributes:
        source: 文档 _source
        highlight: 高亮片段，key 为字段名
    """

    source: JsonDict
    highlight: JsonDict | None = None

    def document_as(self, item_type: Callable[[JsonDict], T]) -> T:
        """将文档转换为业务对象.

        Args:
            item_type: 接收 _source 字典的转换函数或模型类

        Raises:
            ElasticDecodeError: 转换失败时抛出
        """
        return _convert(self.source, item_type)

    def highlight_for(self, field_name: str) -> list[str]:
        """获取指定字段的全部高亮片段."""
        if not self.highlight:
            return []
        return list(self.highlight.get(field_name, []))


@dataclass(frozen=True)
class PointInTimeCursor:
    """point-in-time 分页游标.

    Attributes:
        pit_id: 最新的 point-in-time ID
        search_after: 上一页最后一条文档的排序值，首页为 None
    """

    pit_id: str
    search_after: list[Any] | None = None


@dataclass(frozen=True)
class Page(Generic[C]):
    """一页结果.

    items 为空是唯一的结束信号；cursor 为 None 同样表示没有下一页。
    """

    items: tuple[Item, ...] = ()
    cursor: C | None = None


class CreationOutcome(Enum):
    """创建操作结果."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class DeletionOutcome(Enum):
    """删除操作结果."""

    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class GetResult:
    """按 ID 获取文档的结果，文档不存在时 item 为 None."""

    item: Item | None = None

    @property
    def found(self) -> bool:
        return self.item is not None

    def document_as(self, item_type: Callable[[JsonDict], T]) -> T | None:
        if self.item is None:
            return None
        return self.item.document_as(item_type)


@dataclass(frozen=True)
class SearchResult:
    """搜索结果."""

    items: tuple[Item, ...] = ()

    def documents_as(self, item_type: Callable[[JsonDict], T]) -> list[T]:
        return [item.document_as(item_type) for item in self.items]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class AggregationResult:
    """聚合结果.

    请求使用 typed_keys 参数，返回的聚合 key 形如 ``sterms#by_status``，
    aggregation() 支持直接使用聚合名称查找。

    Attributes:
        aggregations: 原始聚合 JSON
    """

    aggregations: JsonDict = field(default_factory=dict)

    def aggregation(self, name: str) -> JsonDict | None:
        """按聚合名称获取聚合结果.

        Args:
            name: 聚合名称（不含类型前缀）

        Returns:
            聚合 JSON，不存在时返回 None
        """
        if name in self.aggregations:
            return self.aggregations[name]
        for key, value in self.aggregations.items():
            _, sep, plain = key.partition("#")
            if sep and plain == name:
                return value
        return None

    def aggregation_type(self, name: str) -> str | None:
        """返回聚合的类型前缀，例如 sterms、avg."""
        for key in self.aggregations:
            agg_type, sep, plain = key.partition("#")
            if sep and plain == name:
                return agg_type
        return None


@dataclass(frozen=True)
class SearchAndAggregateResult(AggregationResult):
    """搜索并聚合的结果."""

    items: tuple[Item, ...] = ()

    def documents_as(self, item_type: Callable[[JsonDict], T]) -> list[T]:
        return [item.document_as(item_type) for item in self.items]
