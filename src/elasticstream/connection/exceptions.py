"""ES 连接配置异常定义模块."""

from ..exceptions import ElasticStreamError


class ElasticConnectionError(ElasticStreamError):
    """连接配置基础异常类.

    所有连接相关异常的基类，继承自 ElasticStreamError。
    """

    pass


class ConnectionConfigError(ElasticConnectionError):
    """连接配置校验异常.

    当连接配置参数不合法时抛出，例如 hosts 为空、request_timeout 小于 0 等。
    """

    pass
