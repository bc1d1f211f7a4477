"""执行器与流式读取使用示例.

本文件展示了如何使用 HttpExecutor 执行单次请求，以及如何用
scroll 或 point-in-time + search_after 流式读取大结果集。
"""

import logging
from dataclasses import dataclass

from elasticsearch.dsl import Q

from elasticstream import (
    CreateIndex,
    CreateWithId,
    CreationOutcome,
    Credentials,
    ElasticConfig,
    GetById,
    HttpExecutor,
    Search,
    StreamConfig,
    UnauthorizedError,
)

# 打开 DEBUG 日志可以看到每次请求与响应（敏感请求头已脱敏）
logging.basicConfig(level=logging.INFO)

executor = HttpExecutor.from_config(
    ElasticConfig(
        hosts=["http://localhost:9200"],
        credentials=Credentials("elastic", "changeme"),
    )
)


@dataclass
class User:
    name: str
    age: int
    city: str

    @classmethod
    def from_source(cls, source: dict) -> "User":
        return cls(name=source["name"], age=source["age"], city=source["city"])


# ==================== 示例1：单次请求 ====================
def example_single_requests():
    """创建索引、写入并读取文档."""
    outcome = executor.execute(CreateIndex(name="users"))
    print(f"创建索引: {outcome.value}")

    users = [
        {"name": "张三", "age": 25, "city": "北京"},
        {"name": "李四", "age": 30, "city": "上海"},
    ]
    for i, user in enumerate(users, 1):
        outcome = executor.execute(
            CreateWithId(index="users", id=str(i), document=user, refresh=True)
        )
        if outcome is CreationOutcome.ALREADY_EXISTS:
            print(f"  文档 {i} 已存在")

    result = executor.execute(GetById(index="users", id="1"))
    print(f"读取文档: {result.document_as(User.from_source)}")


# ==================== 示例2：scroll 流式读取 ====================
def example_scroll_stream():
    """使用 scroll 逐条读取全部文档."""
    request = Search(index="users", query=Q("range", age={"gte": 18}))
    for item in executor.stream(request, StreamConfig(keep_alive="2m")):
        print(f"  {item.source}")


# ==================== 示例3：point-in-time 流式读取 ====================
def example_search_after_stream():
    """使用 point-in-time + search_after 读取并转换为业务对象."""
    request = Search(index="users", sort=({"age": "asc"},), size=500)
    config = StreamConfig().with_search_after().with_keep_alive("5m")
    for user in executor.stream_as(request, User.from_source, config):
        print(f"  {user.name} ({user.age})")


def main():
    """运行所有示例."""
    print("=" * 50)
    print("elasticstream 执行器示例")
    print("=" * 50)

    try:
        print("\n1. 单次请求示例")
        print("-" * 50)
        example_single_requests()

        print("\n2. scroll 流式读取示例")
        print("-" * 50)
        example_scroll_stream()

        print("\n3. point-in-time 流式读取示例")
        print("-" * 50)
        example_search_after_stream()
    except UnauthorizedError:
        print("认证失败，请检查用户名和密码")


if __name__ == "__main__":
    main()
