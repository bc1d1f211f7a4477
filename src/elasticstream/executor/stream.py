"""流式分页模块.

把一次逻辑上的搜索拆成多次 HTTP 往返，按顺序逐条产出结果文档。
支持两种互斥的分页协议：

- ScrollPages: scroll 协议，缺少新的 scroll_id 时沿用上一个
- PointInTimePages: point-in-time + search_after 协议，缺少新的 pit_id
  或排序标记时视为协议违例并终止

两者都只在上一页的文档全部交给调用方之后才请求下一页，
空页是唯一的结束信号。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Protocol, TypeVar

from elasticstream.request.models import Search

from .exceptions import ProtocolViolationError
from .models import Item, Page, PointInTimeCursor, StreamConfig

if TYPE_CHECKING:
    from .tool import HttpExecutor

logger = logging.getLogger(__name__)

C = TypeVar("C")

ScrollCursor = str


class PageProducer(Protocol[C]):
    """分页生产者接口：产出首页，或根据游标产出下一页."""

    def start(self) -> Page[C]: ...

    def fetch(self, cursor: C) -> Page[C]: ...


def iterate_pages(producer: PageProducer[C]) -> Iterator[Item]:
    """按页驱动生产者并把各页文档展平为一个惰性序列.

    页的游标为 None 时结束，生产者负责在空页时返回 None 游标。
    """
    page = producer.start()
    while True:
        yield from page.items
        if page.cursor is None:
            return
        page = producer.fetch(page.cursor)


class ScrollPages:
    """scroll 分页协议.

    首次请求携带 scroll 参数创建游标，之后以 scroll_id 续读。
    非空页缺少 scroll_id 时沿用上一个已知的 scroll_id。

    Args:
        executor: HTTP 执行器
        request: 搜索请求
        config: 流式读取配置
    """

    def __init__(
        self, executor: HttpExecutor, request: Search, config: StreamConfig
    ) -> None:
        self._executor = executor
        self._request = request
        self._config = config

    def start(self) -> Page[ScrollCursor]:
        response = self._executor.search_with_scroll(self._request, self._config)
        items = response.items()
        if not items:
            return Page()
        if not response.scroll_id:
            logger.warning(
                f"索引 '{self._request.index}' 的首个 scroll 页缺少 _scroll_id，无法继续读取"
            )
            return Page(items=items)
        return Page(items=items, cursor=response.scroll_id)

    def fetch(self, cursor: ScrollCursor) -> Page[ScrollCursor]:
        response = self._executor.get_by_scroll(cursor, self._config)
        items = response.items()
        if not items:
            return Page()
        next_cursor = response.scroll_id
        if not next_cursor:
            logger.warning("scroll 响应缺少 _scroll_id，沿用上一个 scroll_id")
            next_cursor = cursor
        return Page(items=items, cursor=next_cursor)


class PointInTimePages:
    """point-in-time + search_after 分页协议.

    先对索引打开 point-in-time，首页不含文档；之后每页都必须返回
    新的 pit_id 和最后一条文档的排序值，二者缺一即为协议违例。

    Args:
        executor: HTTP 执行器
        request: 搜索请求
        config: 流式读取配置
    """

    def __init__(
        self, executor: HttpExecutor, request: Search, config: StreamConfig
    ) -> None:
        self._executor = executor
        self._request = request
        self._config = config

    def start(self) -> Page[PointInTimeCursor]:
        pit_id = self._executor.open_point_in_time(self._request.index, self._config)
        return Page(cursor=PointInTimeCursor(pit_id=pit_id))

    def fetch(self, cursor: PointInTimeCursor) -> Page[PointInTimeCursor]:
        response = self._executor.search_after(
            self._request,
            pit_id=cursor.pit_id,
            config=self._config,
            search_after=cursor.search_after,
        )
        items = response.items()
        if not items:
            return Page()
        if not response.pit_id:
            raise ProtocolViolationError(
                "Elasticsearch 响应不符合预期：缺少 pit_id 字段"
            )
        if response.last_sort_field is None:
            raise ProtocolViolationError(
                "Elasticsearch 响应不符合预期：缺少 search_after 所需的 sort 字段"
            )
        return Page(
            items=items,
            cursor=PointInTimeCursor(
                pit_id=response.pit_id, search_after=response.last_sort_field
            ),
        )
