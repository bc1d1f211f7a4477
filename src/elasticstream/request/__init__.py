"""请求模型模块.

定义执行器可处理的全部请求类型:
    - Search / SearchAndAggregate / Aggregate / Count: 查询类请求
    - Create / CreateWithId / CreateOrUpdate / CreateIndex: 创建类请求
    - DeleteById / DeleteByQuery / DeleteIndex: 删除类请求
    - Exists / GetById: 读取类请求
    - Bulk: 批量请求

使用示例:
    from elasticstream.request import GetById

    request = GetById(index="users", id="1", routing="tenant-a")
"""

from .models import (
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
    SearchRequest,
    to_json,
)

__all__ = [
    "ElasticRequest",
    "SearchRequest",
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
    "to_json",
]
