"""Product version lookup used for the AWS user-agent string."""

import os
import tomllib
from importlib import metadata
from pathlib import Path
from typing import Optional

PRODUCT_NAME = "amazon-util"
UNKNOWN_VERSION = "unknown"

#: Source-tree pyproject, only present when running from a checkout
PYPROJECT_PATH = Path(__file__).parent.parent / "pyproject.toml"


def _installed_version() -> Optional[str]:
    try:
        return metadata.version(PRODUCT_NAME)
    except metadata.PackageNotFoundError:
        return None


def _source_tree_version() -> Optional[str]:
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            return tomllib.load(f).get("project", {}).get("version")
    except (OSError, tomllib.TOMLDecodeError):
        return None


def get_version() -> str:
    """Current product version.

    Lookup order: BUILD_VERSION (set by release builds), installed
    distribution metadata, the checkout's pyproject.toml, then "unknown".
    """
    return (
        os.getenv("BUILD_VERSION")
        or _installed_version()
        or _source_tree_version()
        or UNKNOWN_VERSION
    )


def get_user_agent(version: Optional[str] = None) -> str:
    """Product identifier sent with every AWS request, e.g. "amazon-util 1.0.0"."""
    return f"{PRODUCT_NAME} {version or get_version()}"


__version__ = get_version()
