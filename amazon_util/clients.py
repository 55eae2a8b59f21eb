"""AWS client factory bound to one region and one set of credentials.

Usage:
    from amazon_util import AWSClients

    clients = AWSClients.from_basic_credentials("AKIA...", "secret", "us-east-1")
    cfn = clients.create_cloudformation_client()

    session_credentials = clients.assume_role(
        role_arn="arn:aws:iam::123456789012:role/Deployer",
        external_id=None,
        session_name="build 42",
        duration_seconds=3600,
    )
"""

import re
from typing import Any, Dict, Optional

import boto3
import structlog

from .credentials import BasicCredentials, Credentials, SessionCredentials
from .errors import AmazonUtilError
from .network import NetworkConfiguration
from .regions import resolve_region

logger = structlog.get_logger(__name__)

UNSUPPORTED_SESSION_NAME_CHARS = re.compile(r"[^A-Za-z0-9_+=,.@-]")
MAX_SESSION_NAME_LENGTH = 64


class AssumeRoleError(AmazonUtilError):
    """Raised when STS role assumption fails for any reason."""

    label = "Assume Role Error"

    def __init__(self, role_arn: str, cause: BaseException):
        super().__init__(
            f"Failed to assume role {role_arn}",
            "Check that the caller is allowed to assume the role and that the external id matches",
            f"{type(cause).__name__}: {cause}",
        )
        self.role_arn = role_arn
        self.cause = cause


def sanitize_session_name(session_name: str) -> str:
    """Make a string usable as an STS RoleSessionName.

    Replaces every character outside [A-Za-z0-9_+=,.@-] with "_" and truncates
    to 64 characters.
    """
    return UNSUPPORTED_SESSION_NAME_CHARS.sub("_", session_name or "")[:MAX_SESSION_NAME_LENGTH]


class AWSClients:
    """Creates CloudFormation and STS clients for one region.

    When no credentials are given the clients use boto3's default credential
    chain (environment, shared config, instance/task role).

    Attributes:
        credentials: Explicit credentials, or None for the default chain
        region_info: Resolved region descriptor
        network: Proxy and user-agent settings applied to every client
    """

    __slots__ = ("credentials", "region_info", "network")

    def __init__(
        self,
        credentials: Optional[Credentials],
        region: str,
        network: Optional[NetworkConfiguration] = None,
    ):
        """Initialize clients for a region.

        Args:
            credentials: BasicCredentials or SessionCredentials, or None
            region: AWS region identifier (e.g. "us-east-1")
            network: Network settings (default: read from the environment)

        Raises:
            UnknownRegionError: If region is not a known AWS region
            ProxyConfigurationError: If PROXY_PORT is invalid
        """
        region_info = resolve_region(region)
        network = network or NetworkConfiguration.from_environ()

        object.__setattr__(self, "credentials", credentials)
        object.__setattr__(self, "region_info", region_info)
        object.__setattr__(self, "network", network)

        logger.info(
            "AWSClients initialized",
            region=region_info.name,
            partition=region_info.partition,
            explicit_credentials=credentials is not None,
            has_proxy=network.proxy_host is not None,
        )

    def __setattr__(self, name: str, value: Any) -> None:
        """Reject assignment; a context never changes after construction."""
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"AWSClients(region={self.region!r}, credentials={self.credentials!r})"

    @classmethod
    def from_existing_credentials(cls, credentials: Credentials, region: str) -> "AWSClients":
        """Clients signed with credentials the caller already holds.

        Args:
            credentials: BasicCredentials, or SessionCredentials from assume_role
            region: AWS region identifier
        """
        return cls(credentials, region)

    @classmethod
    def from_default_credential_provider_chain(cls, region: str) -> "AWSClients":
        """Clients that resolve credentials through boto3's default chain.

        Args:
            region: AWS region identifier
        """
        return cls(None, region)

    @classmethod
    def from_basic_credentials(cls, access_key_id: str, secret_access_key: str, region: str) -> "AWSClients":
        """Clients signed with a long-term access key pair.

        Args:
            access_key_id: AWS access key id
            secret_access_key: AWS secret access key
            region: AWS region identifier

        Raises:
            InvalidCredentialsError: If either key is blank
        """
        return cls.from_existing_credentials(BasicCredentials(access_key_id, secret_access_key), region)

    @property
    def region(self) -> str:
        return self.region_info.name

    def _client(self, service_name: str):
        kwargs: Dict[str, Any] = {
            "region_name": self.region,
            "config": self.network.to_botocore_config(),
        }
        if self.credentials is not None:
            kwargs.update(self.credentials.to_client_kwargs())

        logger.debug(
            "Creating AWS client",
            service=service_name,
            region=self.region,
            credentials="explicit" if self.credentials is not None else "default-chain",
        )
        return boto3.client(service_name, **kwargs)

    def create_cloudformation_client(self):
        """CloudFormation client bound to this region and credentials."""
        return self._client("cloudformation")

    def create_sts_client(self):
        """STS client bound to this region and credentials."""
        return self._client("sts")

    def assume_role(
        self,
        role_arn: str,
        external_id: Optional[str],
        session_name: str,
        duration_seconds: int,
    ) -> SessionCredentials:
        """Assume an IAM role and return its temporary credentials.

        Args:
            role_arn: ARN of the IAM role to assume
            external_id: External id required by the role's trust policy;
                omitted from the request when None or empty
            session_name: Session name, sanitized before use
            duration_seconds: Requested credential lifetime

        Returns:
            SessionCredentials from the STS response

        Raises:
            AssumeRoleError: If the STS call fails or returns no credentials
        """
        request = {
            "RoleArn": role_arn,
            "RoleSessionName": sanitize_session_name(session_name),
            "DurationSeconds": duration_seconds,
        }
        if external_id:
            request["ExternalId"] = external_id

        logger.debug(
            "Assuming IAM role",
            role_arn=role_arn,
            session_name=request["RoleSessionName"],
            duration_seconds=duration_seconds,
            has_external_id="ExternalId" in request,
        )

        try:
            response = self.create_sts_client().assume_role(**request)
            credentials = response["Credentials"]
            session_credentials = SessionCredentials(
                access_key_id=credentials["AccessKeyId"],
                secret_access_key=credentials["SecretAccessKey"],
                session_token=credentials["SessionToken"],
                expiration=credentials.get("Expiration"),
            )
        except Exception as e:
            logger.error(
                "Failed to assume role",
                role_arn=role_arn,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise AssumeRoleError(role_arn, e) from e

        logger.info(
            "Role assumed successfully",
            role_arn=role_arn,
            expires_at=session_credentials.expiration.isoformat() if session_credentials.expiration else None,
        )
        return session_credentials


def create(
    credentials: Optional[Credentials],
    region: str,
    network: Optional[NetworkConfiguration] = None,
) -> AWSClients:
    """Create an AWSClients context; None credentials means the default chain."""
    return AWSClients(credentials, region, network)


def create_from_basic(access_key_id: str, secret_access_key: str, region: str) -> AWSClients:
    """Create an AWSClients context signed with a long-term access key pair."""
    return AWSClients.from_basic_credentials(access_key_id, secret_access_key, region)
