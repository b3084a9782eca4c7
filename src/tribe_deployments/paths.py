"""Path management utilities for tribe-deployments library."""

from pathlib import Path
from typing import Optional, Union

from .constants import DEPLOYMENTS_FOLDER


def get_deployments_dir(root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get the deployments folder.

    Args:
        root: Custom deployments folder (defaults to ./deployments)

    Returns:
        Absolute path to the deployments folder
    """
    if root is None:
        return Path.cwd() / DEPLOYMENTS_FOLDER
    return Path(root).absolute()


def get_registry_path(network: str, root: Optional[Union[Path, str]] = None) -> Path:
    """
    Get registry file path for a network.

    Args:
        network: Network name, e.g. "testnet"
        root: Custom deployments folder (defaults to ./deployments)

    Returns:
        Path to <deployments>/<network>.json
    """
    return get_deployments_dir(root) / f"{network}.json"
