"""Block explorer source verification for tribe-deployments library."""

import asyncio
import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

import requests
from eth_abi import encode

from .artifacts import find_build_info, get_artifact_path, load_build_info
from .config import get_explorer_api_key, get_network_config
from .exceptions import VerificationError
from .types import ContractArtifact

logger = logging.getLogger(__name__)


class ExplorerClient(Protocol):
    """Capability to verify contract source with a block explorer."""

    async def verify(self, address: str, constructor_arguments: Sequence[Any]) -> None:
        ...


def encode_constructor_arguments(abi: List[Dict[str, Any]], arguments: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments as expected by Etherscan.

    Args:
        abi: Contract ABI
        arguments: Positional constructor arguments

    Returns:
        Hex string without 0x prefix, empty for argument-less constructors

    Raises:
        VerificationError: If the argument count does not match the constructor
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    types = [inp["type"] for inp in constructor["inputs"]] if constructor else []

    if len(types) != len(arguments):
        raise VerificationError(
            f"Constructor expects {len(types)} arguments, got {len(arguments)}"
        )
    if not types:
        return ""

    return encode(types, list(arguments)).hex()


class EtherscanVerifier:
    """ExplorerClient for Etherscan-compatible APIs such as BscScan."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        artifact: ContractArtifact,
        compiler_version: str,
        standard_json_input: Dict[str, Any],
        poll_interval: float = 5.0,
        max_polls: int = 12,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.artifact = artifact
        self.compiler_version = compiler_version
        self.standard_json_input = standard_json_input
        self.poll_interval = poll_interval
        self.max_polls = max_polls

    @classmethod
    def for_network(
        cls,
        network: str,
        artifact: ContractArtifact,
        artifact_path: Optional[Union[Path, str]] = None,
        **kwargs: Any,
    ) -> Optional["EtherscanVerifier"]:
        """
        Build a verifier for a network from its configuration and the artifact's build info.

        Args:
            network: Network name
            artifact: Artifact to verify
            artifact_path: File the artifact was loaded from; its debug file
                locates the build info (defaults to the ./artifacts layout)

        Returns:
            None if the network has no explorer API or no API key is set
        """
        config = get_network_config(network)
        api_key = get_explorer_api_key(network)
        if config["explorer_api_url"] is None or api_key is None:
            return None

        if artifact_path is None:
            artifact_path = get_artifact_path(artifact.contract_name, artifact.source_name)
        build_info = load_build_info(find_build_info(artifact_path))
        return cls(
            config["explorer_api_url"],
            api_key,
            artifact,
            f"v{build_info['solc_version']}",
            build_info["input"],
            **kwargs,
        )

    async def verify(self, address: str, constructor_arguments: Sequence[Any]) -> None:
        await asyncio.to_thread(self.verify_sync, address, constructor_arguments)

    def verify_sync(self, address: str, constructor_arguments: Sequence[Any]) -> None:
        """
        Submit source code and wait for the explorer's verdict.

        Raises:
            VerificationError: If submission fails, the explorer rejects the
                source, the contract is already verified, or polling times out
        """
        guid = self._submit(address, constructor_arguments)
        logger.debug("Verification of %s submitted with guid %s", address, guid)

        for _ in range(self.max_polls):
            time.sleep(self.poll_interval)
            result = self._request(
                "GET",
                params={
                    "apikey": self.api_key,
                    "module": "contract",
                    "action": "checkverifystatus",
                    "guid": guid,
                },
            )["result"]

            if "pending" in result.lower():
                continue
            if result.startswith("Pass"):
                logger.info("Verified %s at %s", self.artifact.fully_qualified_name, address)
                return
            raise VerificationError(f"Verification of {address} failed: {result}")

        raise VerificationError(
            f"Verification of {address} still pending after {self.max_polls} checks"
        )

    def _submit(self, address: str, constructor_arguments: Sequence[Any]) -> str:
        data = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(self.standard_json_input),
            "codeformat": "solidity-standard-json-input",
            "contractname": self.artifact.fully_qualified_name,
            "compilerversion": self.compiler_version,
            # Misspelling is part of the Etherscan API
            "constructorArguements": encode_constructor_arguments(
                self.artifact.abi, constructor_arguments
            ),
        }
        response = self._request("POST", data=data)
        return response["result"]

    def _request(self, method: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = requests.request(method, self.api_url, timeout=30, **kwargs)
        except requests.RequestException as e:
            raise VerificationError(f"Network error during explorer call: {e}") from e

        if response.status_code != 200:
            raise VerificationError(
                f"Explorer request failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise VerificationError(f"Explorer returned a non-JSON response: {e}") from e

        # status "0" carries the reason in "result", e.g. already verified
        if result.get("status") != "1" and "pending" not in str(result.get("result", "")).lower():
            raise VerificationError(f"Explorer rejected request: {result.get('result')}")

        return result
