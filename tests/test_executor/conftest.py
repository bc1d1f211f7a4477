"""执行器测试公共 fixtures."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from elasticsearch import Elasticsearch

from elasticstream.executor import HttpExecutor


def make_response(status: int, body=None, headers=None) -> SimpleNamespace:
    """构造与 elasticsearch ApiResponse 形状一致的响应对象."""
    return SimpleNamespace(
        meta=SimpleNamespace(status=status, headers=headers or {}), body=body
    )


@pytest.fixture
def es_client() -> MagicMock:
    """模拟的 Elasticsearch 客户端."""
    return MagicMock(spec=Elasticsearch)


@pytest.fixture
def client(es_client) -> MagicMock:
    """执行器通过 options() 得到的实际发送请求的客户端."""
    return es_client.options.return_value


@pytest.fixture
def executor(es_client) -> HttpExecutor:
    return HttpExecutor(es_client)


@pytest.fixture
def respond(client):
    """按顺序设置 perform_request 的返回值，每项为 (status, body)."""

    def _respond(*responses):
        client.perform_request.side_effect = [
            make_response(*response) for response in responses
        ]

    return _respond


@pytest.fixture
def search_page():
    """构造搜索响应体.

    每条命中的 sort 值为 [offset + 序号]，便于断言 search_after。
    """

    def _search_page(count, scroll_id=None, pit_id=None, offset=0, with_sort=True):
        hits = []
        for i in range(count):
            hit = {"_id": str(offset + i), "_source": {"n": offset + i}}
            if with_sort:
                hit["sort"] = [offset + i]
            hits.append(hit)
        body = {"hits": {"total": {"value": count}, "hits": hits}}
        if scroll_id is not None:
            body["_scroll_id"] = scroll_id
        if pit_id is not None:
            body["pit_id"] = pit_id
        return body

    return _search_page
