"""ES 连接配置数据模型定义模块.

提供执行器连接相关的数据模型，包括：
- Credentials: Basic Auth 凭据
- ElasticConfig: 集群连接配置
"""

from dataclasses import dataclass, field

from .exceptions import ConnectionConfigError


@dataclass(frozen=True)
class Credentials:
    """Basic Auth 凭据.

    配置后会附加到执行器发出的每一个请求上。

    Attributes:
        username: 用户名
        password: 密码
    """

    username: str
    password: str

    def __post_init__(self) -> None:
        """校验凭据合法性."""
        if not self.username:
            raise ConnectionConfigError("username 不能为空")

    def __repr__(self) -> str:
        # 避免密码出现在日志或异常信息中
        return f"Credentials(username={self.username!r}, password='***')"

    def as_tuple(self) -> tuple[str, str]:
        """转换为 elasticsearch 客户端 basic_auth 参数所需的元组."""
        return (self.username, self.password)


@dataclass
class ElasticConfig:
    """集群连接配置模型.

    定义执行器所连接的 ES 集群地址、认证方式和传输层参数。

    Attributes:
        hosts: ES 节点地址列表（必需，不可为空）
        credentials: Basic Auth 凭据，默认不认证
        ca_certs: CA 证书文件路径
        verify_certs: 是否验证 SSL 证书，默认 True
        request_timeout: 请求超时时间（秒），默认 30，必须 >= 0
        http_compress: 是否启用 HTTP 压缩，默认 True

    Raises:
        ConnectionConfigError: 当参数不合法时抛出

    Examples:
        >>> config = ElasticConfig(
        ...     hosts=["http://localhost:9200"],
        ...     credentials=Credentials("elastic", "changeme"),
        ... )
    """

    hosts: list[str] = field(default_factory=list)
    credentials: Credentials | None = None
    ca_certs: str | None = None
    verify_certs: bool = True
    request_timeout: int = 30
    http_compress: bool = True

    def __post_init__(self) -> None:
        """校验连接配置参数合法性."""
        if not self.hosts:
            raise ConnectionConfigError("hosts 不能为空，请提供至少一个 ES 节点地址")
        if self.request_timeout < 0:
            raise ConnectionConfigError(
                f"request_timeout 必须 >= 0，当前值: {self.request_timeout}"
            )
