"""Network and deployment configuration for tribe-deployments library."""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_CONFIRMATIONS, LOCALHOST_MNEMONIC, NETWORK_CONFIG
from .exceptions import NetworkNotFoundError, SignerUnavailableError


def get_network_config(network: str) -> Dict[str, Any]:
    """
    Get configuration for a network.

    The RPC URL can be overridden with the <NETWORK>_RPC_URL environment
    variable, e.g. TESTNET_RPC_URL.

    Args:
        network: Network name ("mainnet", "testnet" or "localhost")

    Returns:
        Copy of the network configuration

    Raises:
        NetworkNotFoundError: If network is not configured
    """
    if network not in NETWORK_CONFIG:
        raise NetworkNotFoundError(
            f"Network '{network}' is not configured "
            f"(available: {', '.join(NETWORK_CONFIG)})"
        )

    config = dict(NETWORK_CONFIG[network])
    rpc_override = os.environ.get(f"{network.upper()}_RPC_URL")
    if rpc_override:
        config["rpc_url"] = rpc_override
    return config


def get_mnemonic(network: str) -> str:
    """
    Get the mnemonic of the deployment accounts for a network.

    Raises:
        NetworkNotFoundError: If network is not configured
        SignerUnavailableError: If the mnemonic environment variable is unset or empty
    """
    config = get_network_config(network)
    env_name = config["mnemonic_env"]
    if env_name is None:
        return LOCALHOST_MNEMONIC

    mnemonic = os.environ.get(env_name, "")
    if not mnemonic.strip():
        raise SignerUnavailableError(
            f"No mnemonic configured for network '{network}': set ${env_name}"
        )
    return mnemonic


def get_explorer_api_key(network: str) -> Optional[str]:
    """Get the block explorer API key for a network, if any."""
    env_name = get_network_config(network)["explorer_api_key_env"]
    if env_name is None:
        return None
    return os.environ.get(env_name) or None


@dataclass
class DeployConfig:
    """Inputs of one deployment run."""

    network: str
    contract_type: str  # Registry key, e.g. "tribe"
    tag: Optional[str] = None
    is_upgradable: bool = False
    confirmations: int = DEFAULT_CONFIRMATIONS
    args: Dict[str, Any] = field(default_factory=dict)  # Recorded in the registry
    constructor_arguments: List[Any] = field(default_factory=list)  # Passed on-chain
    signer_index: int = 0
