"""Shared pytest fixtures for tribe-deployments tests."""

import json
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from tribe_deployments.artifacts import load_artifact
from tribe_deployments.exceptions import VerificationError
from tribe_deployments.registry import RegistryStore
from tribe_deployments.types import ContractArtifact, DeployedContract

DEPLOYER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
DEPLOY_TX_HASH = "0x" + "ab" * 32


@dataclass
class StubSigner:
    address: str


class StubChainClient:
    """Chain client recording calls instead of talking to a node."""

    def __init__(
        self,
        address: str = DEPLOYED_ADDRESS,
        signers: Optional[List[StubSigner]] = None,
        deploy_error: Optional[Exception] = None,
    ):
        self.address = address
        self.signers = signers if signers is not None else [StubSigner(DEPLOYER)]
        self.deploy_error = deploy_error
        self.deploy_calls: List[Tuple[Any, ContractArtifact, Sequence[Any]]] = []
        self.confirmation_calls: List[Tuple[str, int]] = []

    async def get_signers(self) -> List[StubSigner]:
        return self.signers

    async def deploy(self, signer, artifact, constructor_arguments) -> DeployedContract:
        self.deploy_calls.append((signer, artifact, constructor_arguments))
        if self.deploy_error is not None:
            raise self.deploy_error
        return DeployedContract(address=self.address, transaction_hash=DEPLOY_TX_HASH)

    async def wait_for_confirmations(self, transaction_hash: str, confirmations: int) -> None:
        self.confirmation_calls.append((transaction_hash, confirmations))


class StubExplorer:
    """Explorer client that records requests and optionally fails."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls: List[Tuple[str, Sequence[Any]]] = []

    async def verify(self, address: str, constructor_arguments: Sequence[Any]) -> None:
        self.calls.append((address, constructor_arguments))
        if self.error is not None:
            raise self.error


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_registry_json(fixtures_dir: Path) -> Dict[str, Any]:
    """Load and return the sample registry fixture."""
    with open(fixtures_dir / "sample_registry.json") as f:
        return json.load(f)


@pytest.fixture
def temp_deployments_dir(tmp_path: Path) -> Path:
    """Return a not yet existing deployments folder."""
    return tmp_path / "deployments"


@pytest.fixture
def store(temp_deployments_dir: Path) -> RegistryStore:
    return RegistryStore(temp_deployments_dir)


@pytest.fixture
def populated_store(temp_deployments_dir: Path, fixtures_dir: Path) -> RegistryStore:
    """Registry store whose testnet registry is the sample fixture."""
    temp_deployments_dir.mkdir(parents=True)
    shutil.copy(fixtures_dir / "sample_registry.json", temp_deployments_dir / "testnet.json")
    return RegistryStore(temp_deployments_dir)


@pytest.fixture
def artifacts_root(fixtures_dir: Path) -> Path:
    return fixtures_dir / "artifacts"


@pytest.fixture
def tribe_artifact_path(artifacts_root: Path) -> Path:
    return artifacts_root / "contracts" / "Tribe.sol" / "Tribe.json"


@pytest.fixture
def tribe_artifact(tribe_artifact_path: Path) -> ContractArtifact:
    return load_artifact(tribe_artifact_path)


@pytest.fixture
def chain_factory():
    """Return the stub chain client class for tests needing custom behavior."""
    return StubChainClient


@pytest.fixture
def chain() -> StubChainClient:
    return StubChainClient()


@pytest.fixture
def explorer() -> StubExplorer:
    return StubExplorer()


@pytest.fixture
def failing_explorer() -> StubExplorer:
    return StubExplorer(VerificationError("Explorer rejected request: Invalid API Key"))
