"""
tribe-deployments: deploy smart contracts and keep a per-network deployment registry
"""

from importlib.metadata import PackageNotFoundError, version

from .deployments import DeploymentOrchestrator, save_deployment_data
from .exceptions import (
    ArtifactNotFoundError,
    ConfirmationError,
    DeployFailedError,
    DeploymentError,
    MalformedRegistryError,
    NetworkNotFoundError,
    RegistryWriteError,
    SignerUnavailableError,
    VerificationError,
)
from .registry import RegistryStore
from .tags import check_unique_tag
from .types import (
    DeploymentOutcome,
    StandardDeployment,
    UpgradableDeployment,
    VerificationStatus,
)
from .versions import compute_version

try:
    __version__ = version("tribe-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentOrchestrator",
    "save_deployment_data",
    "RegistryStore",
    "compute_version",
    "check_unique_tag",
    "StandardDeployment",
    "UpgradableDeployment",
    "DeploymentOutcome",
    "VerificationStatus",
    "DeploymentError",
    "NetworkNotFoundError",
    "SignerUnavailableError",
    "DeployFailedError",
    "RegistryWriteError",
    "MalformedRegistryError",
    "ArtifactNotFoundError",
    "VerificationError",
    "ConfirmationError",
]
