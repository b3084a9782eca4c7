"""Per-network deployment registry storage for tribe-deployments library."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .exceptions import MalformedRegistryError, RegistryWriteError
from .paths import get_deployments_dir, get_registry_path
from .types import Registry, record_from_dict

logger = logging.getLogger(__name__)


def serialize_registry(registry: Registry) -> Dict[str, Any]:
    """
    Convert a registry to its JSON-compatible form.

    Contract type order and per-type record order are preserved.
    """
    return {
        contract_type: [record.to_dict() for record in records]
        for contract_type, records in registry.items()
    }


def deserialize_registry(data: Any) -> Registry:
    """
    Rebuild a registry from its JSON-compatible form.

    Args:
        data: Decoded registry file content

    Returns:
        Registry mapping contract type -> records, oldest first

    Raises:
        MalformedRegistryError: If the content is not a mapping of lists of records
    """
    if not isinstance(data, dict):
        raise MalformedRegistryError("Registry content must be an object")

    registry: Registry = {}
    for contract_type, records in data.items():
        if not isinstance(records, list):
            raise MalformedRegistryError(
                f"Deployments of '{contract_type}' must be a list"
            )
        registry[contract_type] = [record_from_dict(record) for record in records]

    return registry


class RegistryStore:
    """Reads and writes one registry file per network."""

    def __init__(self, root: Optional[Union[Path, str]] = None):
        """
        Initialize the registry store.

        Args:
            root: Deployments folder (defaults to ./deployments)
        """
        self.root = get_deployments_dir(root)

    def path_for(self, network: str) -> Path:
        return get_registry_path(network, self.root)

    def load(self, network: str) -> Optional[Registry]:
        """
        Load the persisted registry for a network.

        Args:
            network: Network name

        Returns:
            Registry, or None if no registry file exists for the network

        Raises:
            MalformedRegistryError: If the file exists but cannot be decoded
        """
        path = self.path_for(network)
        try:
            with open(path) as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            raise MalformedRegistryError(f"Registry file {path} is not valid JSON: {e}") from e

        return deserialize_registry(data)

    def load_or_initialize(self, network: str) -> Registry:
        """
        Load the registry for a network, creating the deployments folder on first use.

        Returns:
            Persisted registry, or an empty one for a first deployment
        """
        registry = self.load(network)
        if registry is not None:
            return registry

        logger.debug("no existing deployments found, creating folder")
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RegistryWriteError(f"Failed to create {self.root}: {e}") from e
        return {}

    def save(self, network: str, registry: Registry) -> Path:
        """
        Overwrite the registry file for a network.

        The content is written to a temporary file in the same folder and
        moved into place, so readers never observe a partial write.

        Args:
            network: Network name
            registry: Full registry to persist

        Returns:
            Path of the written registry file

        Raises:
            RegistryWriteError: If the file cannot be written
        """
        path = self.path_for(network)
        content = serialize_registry(registry)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{network}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(content, f, indent=2)
                    f.write("\n")
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise RegistryWriteError(f"Failed to write registry {path}: {e}") from e

        return path
