"""AWS client factory: CloudFormation and STS clients plus IAM role assumption.

This package builds boto3 clients for a region and optional static credentials,
and exchanges a role ARN for temporary session credentials.
"""

from .clients import (
    MAX_SESSION_NAME_LENGTH,
    AssumeRoleError,
    AWSClients,
    create,
    create_from_basic,
    sanitize_session_name,
)
from .credentials import BasicCredentials, Credentials, InvalidCredentialsError, SessionCredentials
from .errors import AmazonUtilError
from .network import NetworkConfiguration, ProxyConfigurationError
from .regions import Region, UnknownRegionError, resolve_region
from .version import __version__

__all__ = [
    "AWSClients",
    "AmazonUtilError",
    "AssumeRoleError",
    "BasicCredentials",
    "Credentials",
    "InvalidCredentialsError",
    "MAX_SESSION_NAME_LENGTH",
    "NetworkConfiguration",
    "ProxyConfigurationError",
    "Region",
    "SessionCredentials",
    "UnknownRegionError",
    "__version__",
    "create",
    "create_from_basic",
    "resolve_region",
    "sanitize_session_name",
]
