"""Chain client used to deploy contracts for tribe-deployments library."""

import asyncio
import logging
from typing import Any, List, Optional, Protocol, Sequence

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import ValidationError
from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from .config import get_mnemonic, get_network_config
from .constants import DEFAULT_SIGNER_COUNT, HD_PATH_PREFIX
from .exceptions import ConfirmationError, DeployFailedError, SignerUnavailableError
from .types import ContractArtifact, DeployedContract

logger = logging.getLogger(__name__)

Account.enable_unaudited_hdwallet_features()


class ChainClient(Protocol):
    """Capabilities the orchestrator needs from a blockchain client."""

    async def get_signers(self) -> Sequence[Any]:
        ...

    async def deploy(
        self,
        signer: Any,
        artifact: ContractArtifact,
        constructor_arguments: Sequence[Any],
    ) -> DeployedContract:
        ...

    async def wait_for_confirmations(self, transaction_hash: str, confirmations: int) -> None:
        ...


def derive_signers(mnemonic: str, count: int = DEFAULT_SIGNER_COUNT) -> List[LocalAccount]:
    """
    Derive accounts from a mnemonic along the standard Ethereum HD path.

    Args:
        mnemonic: BIP-39 mnemonic phrase
        count: Number of accounts to derive

    Returns:
        Accounts m/44'/60'/0'/0/0 .. m/44'/60'/0'/0/<count - 1>

    Raises:
        SignerUnavailableError: If the mnemonic is invalid
    """
    try:
        return [
            Account.from_mnemonic(mnemonic, account_path=f"{HD_PATH_PREFIX}/{i}")
            for i in range(count)
        ]
    except (ValidationError, ValueError) as e:
        raise SignerUnavailableError(f"Invalid deployment mnemonic: {e}") from e


class Web3ChainClient:
    """ChainClient backed by web3.py and locally signed transactions."""

    def __init__(
        self,
        rpc_url: str,
        chain_id: int,
        mnemonic: str,
        signer_count: int = DEFAULT_SIGNER_COUNT,
        poll_interval: float = 3.0,
    ):
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self.chain_id = chain_id
        self._mnemonic = mnemonic
        self._signer_count = signer_count
        self._signers: Optional[List[LocalAccount]] = None
        self.poll_interval = poll_interval

    @classmethod
    def for_network(cls, network: str, **kwargs: Any) -> "Web3ChainClient":
        """Build a client from the configured network and its mnemonic."""
        config = get_network_config(network)
        return cls(config["rpc_url"], config["chain_id"], get_mnemonic(network), **kwargs)

    async def get_signers(self) -> List[LocalAccount]:
        if self._signers is None:
            self._signers = derive_signers(self._mnemonic, self._signer_count)
        return self._signers

    async def deploy(
        self,
        signer: LocalAccount,
        artifact: ContractArtifact,
        constructor_arguments: Sequence[Any],
    ) -> DeployedContract:
        """
        Deploy a contract and wait for it to be mined.

        Returns:
            DeployedContract with the new address and the creation transaction hash

        Raises:
            DeployFailedError: If submission fails or the transaction reverts
        """
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

        try:
            nonce = await self.w3.eth.get_transaction_count(signer.address)
            tx = await factory.constructor(*constructor_arguments).build_transaction(
                {"from": signer.address, "nonce": nonce, "chainId": self.chain_id}
            )
            signed = signer.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
            logger.debug("Submitted deployment transaction %s", tx_hash.to_0x_hex())
            receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
        except (Web3Exception, ValueError, OSError, asyncio.TimeoutError) as e:
            raise DeployFailedError(
                f"Failed to deploy {artifact.contract_name}: {e}"
            ) from e

        if receipt["status"] != 1 or receipt["contractAddress"] is None:
            raise DeployFailedError(
                f"Deployment transaction {tx_hash.to_0x_hex()} reverted"
            )

        return DeployedContract(
            address=receipt["contractAddress"],
            transaction_hash=tx_hash.to_0x_hex(),
        )

    async def wait_for_confirmations(self, transaction_hash: str, confirmations: int) -> None:
        """
        Wait until a mined transaction has the given number of confirmations.

        The block containing the transaction counts as the first confirmation.

        Raises:
            ConfirmationError: If the receipt or the chain height cannot be read
        """
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(transaction_hash)
            target_block = receipt["blockNumber"] + confirmations - 1

            while await self.w3.eth.block_number < target_block:
                await asyncio.sleep(self.poll_interval)
        except (Web3Exception, ValueError, OSError, asyncio.TimeoutError) as e:
            raise ConfirmationError(
                f"Failed waiting for confirmations of {transaction_hash}: {e}"
            ) from e
