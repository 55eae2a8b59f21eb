"""Region lookup against botocore's bundled endpoint data.

Usage:
    from amazon_util.regions import resolve_region

    region = resolve_region("eu-west-1")
    print(region.name, region.partition)
"""

from dataclasses import dataclass
from typing import Dict, Optional

import boto3
import structlog

from .errors import AmazonUtilError

logger = structlog.get_logger(__name__)

#: Services whose endpoints define which regions are usable
REGION_SERVICES = ("cloudformation", "sts")


class UnknownRegionError(AmazonUtilError):
    """Raised when a region name does not map to any known endpoint."""

    label = "Unknown Region"

    def __init__(self, region: Optional[str]):
        super().__init__(
            f"Unknown AWS region: {region!r}",
            "Use a region identifier such as 'us-east-1' or 'eu-west-1'",
        )
        self.region = region


@dataclass(frozen=True)
class Region:
    """A region name together with the partition it belongs to."""

    name: str
    partition: str

    def __str__(self) -> str:
        return self.name


def known_regions(session: Optional[boto3.session.Session] = None) -> Dict[str, str]:
    """Map every region that serves CloudFormation or STS to its partition.

    Args:
        session: boto3 session to query (default: a fresh session)

    Returns:
        Dictionary of region name to partition name (e.g. {"us-east-1": "aws"})
    """
    session = session or boto3.session.Session()
    regions: Dict[str, str] = {}
    for partition in session.get_available_partitions():
        for service in REGION_SERVICES:
            for name in session.get_available_regions(service, partition_name=partition):
                regions.setdefault(name, partition)
    return regions


def resolve_region(name: Optional[str], session: Optional[boto3.session.Session] = None) -> Region:
    """Resolve a region identifier to a Region descriptor.

    Args:
        name: Region identifier, e.g. "us-east-1"
        session: boto3 session used to read endpoint data

    Returns:
        Region with name and partition

    Raises:
        UnknownRegionError: If the name is empty or not a known region
    """
    candidate = name.strip() if isinstance(name, str) else ""
    if not candidate:
        raise UnknownRegionError(name)

    partition = known_regions(session).get(candidate)
    if partition is None:
        logger.error("Unknown AWS region", region=name)
        raise UnknownRegionError(name)

    return Region(name=candidate, partition=partition)
