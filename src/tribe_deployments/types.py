"""Data types and dataclasses for tribe-deployments library."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import MalformedRegistryError


@dataclass(frozen=True)
class BaseDeployment:
    """Fields shared by every deployment record."""

    tag: Optional[str]  # None only for records written without a tag
    address: str  # Address users interact with
    version: str  # Bytecode hash without metadata
    date: str  # ISO 8601 creation time of this record
    args: Dict[str, Any]  # Named constructor arguments, opaque to the registry

    @property
    def is_upgradable(self) -> bool:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        """Return the registry file representation of this record."""
        result: Dict[str, Any] = {}
        if self.tag is not None:
            result["tag"] = self.tag
        result.update(
            address=self.address,
            version=self.version,
            date=self.date,
            args=self.args,
            isUpgradable=self.is_upgradable,
        )
        return result


@dataclass(frozen=True)
class StandardDeployment(BaseDeployment):
    """A deployed instance that is not behind an upgradable proxy."""

    @property
    def is_upgradable(self) -> bool:
        return False


@dataclass(frozen=True)
class UpgradableDeployment(BaseDeployment):
    """A deployed instance following the upgradable proxy pattern."""

    implementation: str  # Logic contract address

    def __post_init__(self) -> None:
        if not self.implementation:
            raise ValueError("Upgradable deployments require an implementation address")

    @property
    def is_upgradable(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["implementation"] = self.implementation
        return result


DeploymentRecord = Union[StandardDeployment, UpgradableDeployment]

# Contract type name -> deployments, oldest first
Registry = Dict[str, List[DeploymentRecord]]


def record_from_dict(data: Dict[str, Any]) -> DeploymentRecord:
    """
    Build the matching record variant from its registry file representation.

    Args:
        data: Dictionary as written by to_dict()

    Returns:
        UpgradableDeployment if isUpgradable is set, otherwise StandardDeployment

    Raises:
        MalformedRegistryError: If required fields are missing, or an
            upgradable record has no implementation address
    """
    try:
        common: Dict[str, Any] = {
            "tag": data.get("tag"),
            "address": data["address"],
            "version": data["version"],
            "date": data["date"],
            "args": data.get("args") or {},
        }
    except (KeyError, TypeError) as e:
        raise MalformedRegistryError(f"Deployment record is missing field {e}") from e

    if data.get("isUpgradable"):
        if not data.get("implementation"):
            raise MalformedRegistryError(
                f"Upgradable deployment at {data['address']} has no implementation address"
            )
        return UpgradableDeployment(implementation=data["implementation"], **common)

    return StandardDeployment(**common)


@dataclass
class ContractArtifact:
    """Compiled contract as produced by the hardhat compiler."""

    contract_name: str  # e.g. "Tribe"
    source_name: str  # e.g. "contracts/Tribe.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # Creation bytecode, 0x-prefixed

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"


@dataclass
class DeployedContract:
    """Result of a successful deployment submission."""

    address: str
    transaction_hash: str


class VerificationStatus(Enum):
    """Terminal verification states of a deployment run."""

    VERIFIED = "verified"
    FAILED = "failed"
    SKIPPED = "skipped"  # Record has no implementation address


@dataclass
class DeploymentOutcome:
    """Everything a completed deployment run produced."""

    record: DeploymentRecord
    registry_path: Path
    verification: VerificationStatus
    verification_error: Optional[Exception] = None
