"""Tests for proxy and user-agent configuration."""

import pytest

from amazon_util.errors import AmazonUtilError
from amazon_util.network import NetworkConfiguration, ProxyConfigurationError, parse_port


class TestFromEnviron:
    """Test reading PROXY_HOST / PROXY_PORT."""

    def test_no_proxy_when_host_unset(self):
        """No PROXY_HOST means a direct connection."""
        config = NetworkConfiguration.from_environ({}, version="1.2.3")

        assert config.proxy_host is None
        assert config.proxy_port is None
        assert config.proxy_url is None

    def test_proxy_host_and_port(self):
        """Host and port are carried through as given."""
        config = NetworkConfiguration.from_environ(
            {"PROXY_HOST": "proxy.local", "PROXY_PORT": "8080"},
            version="1.2.3",
        )

        assert config.proxy_host == "proxy.local"
        assert config.proxy_port == 8080
        assert config.proxy_url == "http://proxy.local:8080"

    def test_proxy_host_without_port(self):
        """A host with no port does not invent port 0."""
        config = NetworkConfiguration.from_environ({"PROXY_HOST": "proxy.local"}, version="1.2.3")

        assert config.proxy_host == "proxy.local"
        assert config.proxy_port is None
        assert config.proxy_url == "http://proxy.local"

    def test_port_without_host_is_ignored(self):
        """A port alone does not configure a proxy."""
        config = NetworkConfiguration.from_environ({"PROXY_PORT": "3128"}, version="1.2.3")

        assert config.proxy_host is None
        assert config.proxy_port is None

    def test_non_numeric_port_fails(self):
        """PROXY_PORT=abc is a configuration error, not port 0."""
        with pytest.raises(ProxyConfigurationError) as exc_info:
            NetworkConfiguration.from_environ({"PROXY_HOST": "proxy.local", "PROXY_PORT": "abc"})

        assert "PROXY_PORT" in str(exc_info.value)
        assert "'abc'" in str(exc_info.value)

    def test_non_numeric_port_fails_without_host(self):
        """The port is validated even when no host is set."""
        with pytest.raises(ProxyConfigurationError):
            NetworkConfiguration.from_environ({"PROXY_PORT": "abc"})

    def test_underscored_port_fails(self):
        """PROXY_PORT=8_080 is rejected rather than read as 8080."""
        with pytest.raises(ProxyConfigurationError):
            NetworkConfiguration.from_environ({"PROXY_HOST": "proxy.local", "PROXY_PORT": "8_080"})

    def test_reads_process_environment(self, monkeypatch):
        """Without an explicit mapping, os.environ is used."""
        monkeypatch.setenv("PROXY_HOST", "proxy.corp")
        monkeypatch.setenv("PROXY_PORT", "3128")

        config = NetworkConfiguration.from_environ()

        assert config.proxy_host == "proxy.corp"
        assert config.proxy_port == 3128

    def test_user_agent_includes_version(self):
        """User agent is product name plus version."""
        config = NetworkConfiguration.from_environ({}, version="2.5.0")

        assert config.user_agent == "amazon-util 2.5.0"

    def test_user_agent_uses_build_version(self, monkeypatch):
        """BUILD_VERSION feeds the user agent when no version is given."""
        monkeypatch.setenv("BUILD_VERSION", "9.9.9-dev.1")

        config = NetworkConfiguration.from_environ({})

        assert config.user_agent == "amazon-util 9.9.9-dev.1"


class TestParsePort:
    """Test PROXY_PORT parsing."""

    @pytest.mark.parametrize("value,expected", [("1", 1), ("8080", 8080), (" 443 ", 443), ("65535", 65535)])
    def test_valid_ports(self, value, expected):
        assert parse_port(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "abc",
            "80.5",
            "8080x",
            "0",
            "-1",
            "+8080",
            "65536",
            "",
            # Forms int() accepts but a port number does not
            "8_080",
            "\u0668\u0660\u0668\u0660",
            "\uff18\uff10\uff18\uff10",
        ],
    )
    def test_invalid_ports(self, value):
        with pytest.raises(ProxyConfigurationError):
            parse_port(value)

    def test_error_is_value_error(self):
        """Callers catching ValueError also see proxy parse errors."""
        with pytest.raises(ValueError):
            parse_port("abc")

    def test_error_is_amazon_util_error(self):
        with pytest.raises(AmazonUtilError):
            parse_port("abc")


class TestBotocoreConfig:
    """Test translation into botocore Config."""

    def test_config_without_proxy(self):
        config = NetworkConfiguration(user_agent="amazon-util 1.0.0").to_botocore_config()

        assert config.user_agent_extra == "amazon-util 1.0.0"
        assert config.proxies is None

    def test_config_with_proxy(self):
        config = NetworkConfiguration(
            user_agent="amazon-util 1.0.0",
            proxy_host="proxy.local",
            proxy_port=8080,
        ).to_botocore_config()

        assert config.user_agent_extra == "amazon-util 1.0.0"
        assert config.proxies == {
            "http": "http://proxy.local:8080",
            "https": "http://proxy.local:8080",
        }
