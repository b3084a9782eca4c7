"""Deployment orchestration for tribe-deployments library."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .chain import ChainClient
from .config import DeployConfig
from .exceptions import SignerUnavailableError
from .explorer import ExplorerClient
from .registry import RegistryStore
from .tags import normalize_tag, warn_on_duplicate_tag
from .types import (
    ContractArtifact,
    DeployedContract,
    DeploymentOutcome,
    DeploymentRecord,
    StandardDeployment,
    UpgradableDeployment,
    VerificationStatus,
)
from .versions import compute_version

logger = logging.getLogger(__name__)


def build_record(
    deployed: DeployedContract,
    version: str,
    date: str,
    args: Dict[str, Any],
    is_upgradable: bool,
    tag: Optional[str] = None,
) -> DeploymentRecord:
    """
    Build the registry record of a deployed contract.

    The deployed instance's own address is recorded as the implementation
    of upgradable deployments; no separate proxy is created.
    """
    common: Dict[str, Any] = {
        "tag": normalize_tag(tag),
        "address": deployed.address,
        "version": version,
        "date": date,
        "args": args,
    }
    if is_upgradable:
        return UpgradableDeployment(implementation=deployed.address, **common)
    return StandardDeployment(**common)


def save_deployment_data(
    store: RegistryStore,
    network: str,
    contract_type: str,
    record: DeploymentRecord,
) -> Path:
    """
    Append a deployment to the network's registry.

    A missing registry is treated as the first deployment on the network.
    Tag duplicates are reported but never prevent the write.

    Args:
        store: Registry storage
        network: Network name
        contract_type: Registry key, e.g. "tribe"
        record: Deployment to append

    Returns:
        Path of the written registry file
    """
    registry = store.load_or_initialize(network)
    deployments = registry.setdefault(contract_type, [])

    warn_on_duplicate_tag(record.tag, deployments)

    logger.debug("Registering new deployment of %s with tag '%s'", contract_type, record.tag)
    deployments.append(record)

    path = store.save(network, registry)
    logger.debug("Updated %s deployment file.", network)
    return path


class DeploymentOrchestrator:
    """Deploys a contract, records it, waits for finality and verifies it."""

    def __init__(
        self,
        chain: ChainClient,
        explorer: Optional[ExplorerClient] = None,
        store: Optional[RegistryStore] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            chain: Client used to deploy and await confirmations
            explorer: Verification client; verification is skipped when None
            store: Registry storage (defaults to ./deployments)
        """
        self.chain = chain
        self.explorer = explorer
        self.store = store if store is not None else RegistryStore()

    async def run(self, config: DeployConfig, artifact: ContractArtifact) -> DeploymentOutcome:
        """
        Run one deployment.

        Deployment and registry failures propagate; nothing is recorded if
        the deployment itself fails. Verification failures are logged and
        reported in the outcome only.

        Returns:
            DeploymentOutcome with the persisted record and verification status

        Raises:
            SignerUnavailableError: If the configured signer does not exist
            DeployFailedError: If the deployment fails
            RegistryWriteError: If the registry cannot be written
            ConfirmationError: If waiting for confirmations fails
        """
        signer = await self._select_signer(config.signer_index)

        logger.debug("Deploying to %s", config.network)
        logger.debug("'%s' will be used as the deployment account", signer.address)

        version = compute_version(artifact.bytecode)
        logger.debug("Implementation version is %s", version)

        deployed = await self.chain.deploy(signer, artifact, config.constructor_arguments)
        logger.debug("Deployed contract to %s", deployed.address)

        record = build_record(
            deployed,
            version,
            datetime.now(timezone.utc).isoformat(),
            config.args,
            config.is_upgradable,
            config.tag,
        )

        logger.debug("Saving deployment data...")
        path = save_deployment_data(self.store, config.network, config.contract_type, record)

        if not isinstance(record, UpgradableDeployment):
            return DeploymentOutcome(record, path, VerificationStatus.SKIPPED)

        logger.debug("Waiting for %d confirmations", config.confirmations)
        await self.chain.wait_for_confirmations(deployed.transaction_hash, config.confirmations)

        status, error = await self._verify(record.implementation, config.constructor_arguments)
        return DeploymentOutcome(record, path, status, error)

    async def _select_signer(self, index: int) -> Any:
        signers = await self.chain.get_signers()
        if index >= len(signers):
            raise SignerUnavailableError(
                f"Deployment account #{index} requested but {len(signers)} signers available"
            )
        return signers[index]

    async def _verify(
        self, address: str, constructor_arguments: List[Any]
    ) -> Tuple[VerificationStatus, Optional[Exception]]:
        if self.explorer is None:
            logger.info("No explorer configured, skipping verification of %s", address)
            return VerificationStatus.SKIPPED, None

        logger.debug("Attempting to verify implementation contract with the block explorer")
        try:
            await self.explorer.verify(address, constructor_arguments)
        except Exception as e:
            logger.error("Failed to verify contract: %s", e)
            return VerificationStatus.FAILED, e

        return VerificationStatus.VERIFIED, None


async def list_signer_addresses(chain: ChainClient) -> List[str]:
    """Return the addresses of all signers available to the chain client."""
    return [signer.address for signer in await chain.get_signers()]
