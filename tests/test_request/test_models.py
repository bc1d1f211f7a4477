"""请求模型单元测试."""

import pytest
from elasticsearch.dsl import A, Q

from elasticstream.request import (
    Aggregate,
    Count,
    DeleteByQuery,
    Search,
    SearchAndAggregate,
    to_json,
)


class TestToJson:
    """DSL 对象序列化测试."""

    def test_plain_values(self) -> None:
        assert to_json({"a": [1, (2, 3)]}) == {"a": [1, [2, 3]]}

    def test_dsl_query(self) -> None:
        """测试 elasticsearch.dsl 查询对象."""
        assert to_json(Q("term", level="error")) == {"term": {"level": "error"}}

    def test_nested_dsl_objects(self) -> None:
        """测试字典中嵌套的 DSL 对象."""
        aggs = {"by_level": A("terms", field="level")}
        assert to_json(aggs) == {"by_level": {"terms": {"field": "level"}}}


class TestSearch:
    """Search 请求体测试."""

    def test_default_query_is_match_all(self) -> None:
        assert Search(index="logs").body() == {"query": {"match_all": {}}}

    def test_full_body(self) -> None:
        """测试完整请求体."""
        request = Search(
            index="logs",
            query=Q("match", msg="timeout"),
            sort=({"ts": "desc"},),
            highlight={"fields": {"msg": {}}},
            from_=10,
            size=5,
            source_includes=("msg", "ts"),
        )

        assert request.body() == {
            "query": {"match": {"msg": "timeout"}},
            "sort": [{"ts": "desc"}],
            "highlight": {"fields": {"msg": {}}},
            "from": 10,
            "size": 5,
            "_source": {"includes": ["msg", "ts"]},
        }

    def test_query_body_has_only_query(self) -> None:
        """测试 query_body 只包含查询部分."""
        request = Search(index="logs", sort=({"ts": "asc"},), size=5)
        assert request.query_body() == {"query": {"match_all": {}}}

    def test_is_immutable(self) -> None:
        request = Search(index="logs")
        with pytest.raises(AttributeError):
            request.index = "other"


class TestOtherBodies:
    """其他请求体测试."""

    def test_search_and_aggregate(self) -> None:
        request = SearchAndAggregate(
            index="logs", size=0, aggregations={"by_level": A("terms", field="level")}
        )
        assert request.body() == {
            "query": {"match_all": {}},
            "size": 0,
            "aggs": {"by_level": {"terms": {"field": "level"}}},
        }

    def test_aggregate(self) -> None:
        request = Aggregate(index="logs", aggregations={"c": {"value_count": {"field": "id"}}})
        assert request.body() == {"aggs": {"c": {"value_count": {"field": "id"}}}}

    def test_count_without_query(self) -> None:
        assert Count(index="logs").body() is None

    def test_count_with_query(self) -> None:
        assert Count(index="logs", query=Q("term", level="error")).body() == {
            "query": {"term": {"level": "error"}}
        }

    def test_delete_by_query(self) -> None:
        assert DeleteByQuery(index="logs", query={"match_all": {}}).body() == {
            "query": {"match_all": {}}
        }
