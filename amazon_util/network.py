"""Proxy and user-agent settings applied to every AWS client.

Settings come from the process environment:
    - PROXY_HOST: proxy host name (optional)
    - PROXY_PORT: proxy port (optional, must be an integer)
"""

import os
import re
from dataclasses import dataclass
from typing import Mapping, Optional

import structlog
from botocore.config import Config as BotocoreConfig

from .errors import AmazonUtilError
from .version import get_user_agent

logger = structlog.get_logger(__name__)

MAX_PORT = 65535
PORT_PATTERN = re.compile(r"\d+", re.ASCII)


class ProxyConfigurationError(AmazonUtilError, ValueError):
    """Raised when proxy environment variables cannot be parsed."""

    label = "Proxy Configuration Error"


def parse_port(value: str) -> int:
    """Parse a PROXY_PORT value.

    Raises:
        ProxyConfigurationError: If the value is not an integer in 1..65535
    """
    digits = value.strip()
    if not PORT_PATTERN.fullmatch(digits):
        raise ProxyConfigurationError(
            "Invalid value for PROXY_PORT",
            f"Received: {value!r}",
            "Expected: an integer port number, e.g. 8080",
        )

    port = int(digits)

    if not 0 < port <= MAX_PORT:
        raise ProxyConfigurationError(
            "Invalid value for PROXY_PORT",
            f"Received: {value!r}",
            f"Expected: a port number between 1 and {MAX_PORT}",
        )
    return port


@dataclass(frozen=True)
class NetworkConfiguration:
    """Network settings shared by all clients of one AWSClients context.

    Attributes:
        user_agent: Product identifier appended to the SDK user agent
        proxy_host: Proxy host name, or None for a direct connection
        proxy_port: Proxy port, or None to use the scheme default
    """

    user_agent: str
    proxy_host: Optional[str] = None
    proxy_port: Optional[int] = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None, version: Optional[str] = None):
        """Build configuration from PROXY_HOST / PROXY_PORT.

        Args:
            environ: Mapping to read instead of os.environ (for tests)
            version: Product version (default: amazon_util.version)

        Raises:
            ProxyConfigurationError: If PROXY_PORT is set but not a valid port
        """
        environ = os.environ if environ is None else environ

        proxy_host = environ.get("PROXY_HOST") or None
        raw_port = environ.get("PROXY_PORT")
        proxy_port = parse_port(raw_port) if raw_port else None

        if proxy_port is not None and proxy_host is None:
            logger.warning("PROXY_PORT is set without PROXY_HOST, ignoring proxy", proxy_port=proxy_port)

        return cls(
            user_agent=get_user_agent(version),
            proxy_host=proxy_host,
            proxy_port=proxy_port if proxy_host else None,
        )

    @property
    def proxy_url(self) -> Optional[str]:
        if not self.proxy_host:
            return None
        if self.proxy_port is None:
            return f"http://{self.proxy_host}"
        return f"http://{self.proxy_host}:{self.proxy_port}"

    def to_botocore_config(self) -> BotocoreConfig:
        """botocore Config carrying the user agent and, if set, the proxy."""
        proxy_url = self.proxy_url
        if proxy_url is None:
            return BotocoreConfig(user_agent_extra=self.user_agent)
        return BotocoreConfig(
            user_agent_extra=self.user_agent,
            proxies={"http": proxy_url, "https": proxy_url},
        )
