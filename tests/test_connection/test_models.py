"""连接配置数据模型（Credentials、ElasticConfig）单元测试."""

import pytest

from elasticstream.connection.exceptions import ConnectionConfigError
from elasticstream.connection.models import Credentials, ElasticConfig


class TestCredentials:
    """Credentials 数据模型测试."""

    def test_as_tuple(self) -> None:
        """测试转换为 basic_auth 元组."""
        assert Credentials("elastic", "changeme").as_tuple() == ("elastic", "changeme")

    def test_repr_hides_password(self) -> None:
        """测试 repr 不暴露密码."""
        text = repr(Credentials("elastic", "changeme"))
        assert "elastic" in text
        assert "changeme" not in text

    def test_empty_username_raises(self) -> None:
        """测试用户名为空时抛出异常."""
        with pytest.raises(ConnectionConfigError, match="username"):
            Credentials("", "changeme")


class TestElasticConfig:
    """ElasticConfig 数据模型测试."""

    # --- 正常创建 ---

    def test_create_with_hosts(self) -> None:
        """测试使用 hosts 创建配置."""
        config = ElasticConfig(hosts=["http://localhost:9200"])
        assert config.hosts == ["http://localhost:9200"]
        assert config.credentials is None
        assert config.verify_certs is True
        assert config.request_timeout == 30

    def test_create_with_credentials(self) -> None:
        """测试使用 Basic Auth 创建配置."""
        credentials = Credentials("elastic", "changeme")
        config = ElasticConfig(hosts=["http://localhost:9200"], credentials=credentials)
        assert config.credentials == credentials

    def test_zero_timeout_allowed(self) -> None:
        """测试 request_timeout 为 0 合法."""
        assert ElasticConfig(hosts=["http://a:9200"], request_timeout=0).request_timeout == 0

    # --- 校验失败 ---

    def test_empty_hosts_raises(self) -> None:
        """测试空 hosts 抛出 ConnectionConfigError."""
        with pytest.raises(ConnectionConfigError, match="hosts 不能为空"):
            ElasticConfig(hosts=[])

    def test_default_hosts_raises(self) -> None:
        """测试未提供 hosts 抛出异常."""
        with pytest.raises(ConnectionConfigError):
            ElasticConfig()

    def test_negative_timeout_raises(self) -> None:
        """测试负的 request_timeout 抛出异常."""
        with pytest.raises(ConnectionConfigError, match="request_timeout"):
            ElasticConfig(hosts=["http://localhost:9200"], request_timeout=-1)
