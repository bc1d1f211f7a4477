"""elasticstream 异常定义模块."""


class ElasticStreamError(Exception):
    """elasticstream 基础异常类.

    包内所有异常均继承自该类，调用方可以统一捕获。
    """

    pass
