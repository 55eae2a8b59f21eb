"""Credential value types passed to and returned from AWSClients."""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional, Union

from .errors import AmazonUtilError


class InvalidCredentialsError(AmazonUtilError, ValueError):
    """Raised when an explicit credential field is blank."""

    label = "Invalid Credentials"


def _require(owner: str, **fields: str) -> None:
    blank = [name for name, value in fields.items() if not isinstance(value, str) or not value.strip()]
    if blank:
        raise InvalidCredentialsError(
            f"{owner} has blank fields: {', '.join(blank)}",
            "Pass non-empty credentials, or None to use the default credential chain",
        )


@dataclass(frozen=True)
class BasicCredentials:
    """Long-term access key pair.

    Attributes:
        access_key_id: AWS access key id
        secret_access_key: AWS secret access key (sensitive)
    """

    access_key_id: str
    secret_access_key: str

    def __post_init__(self):
        _require(
            "BasicCredentials",
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
        )

    def to_client_kwargs(self) -> Dict[str, str]:
        """Keyword arguments for boto3.client()."""
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
        }

    def __repr__(self) -> str:
        return f"BasicCredentials(access_key_id={self.access_key_id!r})"


@dataclass(frozen=True)
class SessionCredentials:
    """Temporary credentials issued by STS.

    Attributes:
        access_key_id: Temporary access key id
        secret_access_key: Temporary secret access key (sensitive)
        session_token: Session token (sensitive)
        expiration: When STS says the credentials stop working, if known
    """

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: Optional[datetime] = None

    def __post_init__(self):
        _require(
            "SessionCredentials",
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token,
        )

    def to_client_kwargs(self) -> Dict[str, str]:
        """Keyword arguments for boto3.client()."""
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
        }

    def __repr__(self) -> str:
        expiration = self.expiration.isoformat() if self.expiration else None
        return f"SessionCredentials(access_key_id={self.access_key_id!r}, expiration={expiration!r})"


Credentials = Union[BasicCredentials, SessionCredentials]
