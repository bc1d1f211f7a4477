"""执行器工具函数模块.

提供查询参数组装、路径拼接和 keep-alive 格式校验功能。
"""

import re
from typing import Any
from urllib.parse import quote

from elasticstream.typing import QueryParamPairs

# ES keep-alive 时间格式正则：数字 + 时间单位（nanos, micros, ms, s, m, h, d）
_KEEP_ALIVE_PATTERN = re.compile(r"^(\d+)(nanos|micros|ms|s|m|h|d)$")


def render_param(value: Any) -> str:
    """将参数值转换为查询字符串中的文本表示.

    布尔值使用 ES 认可的小写形式。

    Examples:
        >>> render_param(True)
        'true'
        >>> render_param("wait_for")
        'wait_for'
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_query_params(parameters: QueryParamPairs) -> dict[str, str]:
    """组装查询参数，只保留有值的参数.

    缺省的可选参数会被完全省略，不会以 ``key=`` 的形式发送。

    Args:
        parameters: (参数名, 可选值) 列表

    Returns:
        参数名到文本值的映射

    Examples:
        >>> get_query_params([("refresh", "true"), ("routing", None)])
        {'refresh': 'true'}
    """
    return {
        name: render_param(value) for name, value in parameters if value is not None
    }


def build_path(*segments: str) -> str:
    """拼接请求路径，对每一段做 URL 转义.

    Examples:
        >>> build_path("my-index", "_doc", "a/b")
        '/my-index/_doc/a%2Fb'
    """
    return "/" + "/".join(quote(segment, safe=",*") for segment in segments)


def validate_keep_alive(value: str) -> bool:
    """校验值是否符合 ES keep-alive 时间格式.

    Examples:
        >>> validate_keep_alive("1m")
        True
        >>> validate_keep_alive("1 minute")
        False
    """
    if not isinstance(value, str) or not value:
        return False
    return _KEEP_ALIVE_PATTERN.match(value) is not None
