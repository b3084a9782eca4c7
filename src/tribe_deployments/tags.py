"""Deployment tag policy for tribe-deployments library."""

import logging
from typing import Iterable, Optional

from .constants import UNTAGGED
from .types import DeploymentRecord

logger = logging.getLogger(__name__)


def normalize_tag(tag: Optional[str]) -> str:
    """
    Return the tag to store for a deployment.

    Args:
        tag: User supplied tag, possibly None or empty

    Returns:
        The tag itself, or "untagged" when none was given
    """
    if tag is None or not tag.strip():
        return UNTAGGED
    return tag


def check_unique_tag(tag: str, deployments: Iterable[DeploymentRecord]) -> int:
    """
    Count existing deployments carrying the same tag.

    Matching is case-insensitive; deployments without a tag never match.

    Args:
        tag: Tag of the new deployment
        deployments: Existing deployments of the same contract type

    Returns:
        Number of matching deployments
    """
    return sum(
        1
        for d in deployments
        if d.tag and d.tag.lower() == tag.lower()
    )


def warn_on_duplicate_tag(tag: str, deployments: Iterable[DeploymentRecord]) -> int:
    """
    Log how many deployments already use a tag.

    Duplicates are allowed; the warning is emitted even for a count of zero.

    Returns:
        Number of matching deployments
    """
    num_matches = check_unique_tag(tag, deployments)
    logger.warning("There are %d deployments with the same tag of %s", num_matches, tag)
    return num_matches
