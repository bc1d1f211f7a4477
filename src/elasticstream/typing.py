"""elasticstream 类型定义模块."""

from typing import Any, Dict, List, Optional, Tuple

# JSON 对象类型
JsonDict = Dict[str, Any]

# 查询参数对类型
# 格式: [(参数名, 可选值), ...]
QueryParamPairs = List[Tuple[str, Optional[Any]]]

# 请求头字典类型
HeadersDict = Dict[str, str]
