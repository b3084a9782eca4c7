"""Compiled contract artifact parsing for tribe-deployments library."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import ArtifactNotFoundError, DeploymentError
from .types import ContractArtifact


def get_artifact_path(
    contract_name: str,
    source_name: Optional[str] = None,
    artifacts_root: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Get the hardhat artifact path of a contract.

    Args:
        contract_name: Contract name, e.g. "Tribe"
        source_name: Source file relative to the project (defaults to contracts/<name>.sol)
        artifacts_root: Artifacts folder (defaults to ./artifacts)

    Returns:
        Path to <artifacts>/<source>/<name>.json
    """
    if artifacts_root is None:
        artifacts_root = Path.cwd() / "artifacts"
    if source_name is None:
        source_name = f"contracts/{contract_name}.sol"
    return Path(artifacts_root) / source_name / f"{contract_name}.json"


def parse_artifact(data: Dict[str, Any]) -> ContractArtifact:
    """
    Build a ContractArtifact from decoded hardhat artifact content.

    Raises:
        DeploymentError: If a required field is missing or the bytecode is empty
    """
    try:
        artifact = ContractArtifact(
            contract_name=data["contractName"],
            source_name=data["sourceName"],
            abi=data["abi"],
            bytecode=data["bytecode"],
        )
    except KeyError as e:
        raise DeploymentError(f"Artifact is missing field {e}") from e

    # Abstract contracts and interfaces compile to empty bytecode
    if artifact.bytecode in ("", "0x"):
        raise DeploymentError(
            f"Artifact {artifact.fully_qualified_name} has no bytecode and cannot be deployed"
        )

    return artifact


def load_artifact(file_path: Union[Path, str]) -> ContractArtifact:
    """
    Load a hardhat artifact JSON file.

    Args:
        file_path: Path to the artifact file

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: If the artifact file does not exist
        DeploymentError: If the artifact is incomplete
    """
    path = Path(file_path)
    if not path.exists():
        raise ArtifactNotFoundError(
            f"Contract artifact not found at {path}. Compile the contracts first."
        )

    with open(path) as f:
        data = json.load(f)

    return parse_artifact(data)


def load_build_info(build_info_path: Union[Path, str]) -> Dict[str, Any]:
    """
    Load a hardhat build-info file holding the solc standard JSON input.

    Returns:
        Dictionary with "solc_version" and "input" keys
    """
    path = Path(build_info_path)
    if not path.exists():
        raise ArtifactNotFoundError(f"Build info not found at {path}")

    with open(path) as f:
        data = json.load(f)

    try:
        return {"solc_version": data["solcLongVersion"], "input": data["input"]}
    except KeyError as e:
        raise DeploymentError(f"Build info {path} is missing field {e}") from e


def find_build_info(artifact_path: Union[Path, str]) -> Path:
    """
    Resolve the build-info file referenced by an artifact's debug file.

    Hardhat writes <Name>.dbg.json next to each artifact with a relative
    "buildInfo" path.
    """
    artifact_path = Path(artifact_path)
    dbg_path = artifact_path.with_name(f"{artifact_path.stem}.dbg.json")
    if not dbg_path.exists():
        raise ArtifactNotFoundError(f"Artifact debug file not found at {dbg_path}")

    with open(dbg_path) as f:
        data = json.load(f)

    try:
        return (dbg_path.parent / data["buildInfo"]).resolve()
    except KeyError as e:
        raise DeploymentError(f"Debug file {dbg_path} is missing field {e}") from e
