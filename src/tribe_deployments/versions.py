"""Implementation version derivation for tribe-deployments library."""

import re

from eth_utils import keccak

# Unlinked library references emitted by solc: __$<34 hex chars>$__
_LIBRARY_PLACEHOLDER = re.compile(r"__\$([0-9a-fA-F]{34})\$__")


def trim_bytecode_metadata(bytecode: str) -> str:
    """
    Strip the CBOR-encoded compiler metadata solc appends to bytecode.

    The last 2 bytes of the bytecode hold the metadata length, which does
    not include those 2 bytes themselves.

    Args:
        bytecode: Hex bytecode, with or without 0x prefix

    Returns:
        Bytecode without the metadata section, or the input unchanged if it
        is too short or the encoded length does not fit
    """
    if len(bytecode) <= 4:
        return bytecode

    metadata_length = int(bytecode[-4:], 16) * 2 + 4
    if metadata_length > len(bytecode):
        return bytecode

    return bytecode[: len(bytecode) - metadata_length]


def hash_bytecode(bytecode: str) -> str:
    """
    Hash bytecode with keccak-256.

    Library placeholders are replaced with hex-safe stand-ins so that
    unlinked bytecode can be hashed.

    Returns:
        0x-prefixed hex digest
    """
    bytecode = _LIBRARY_PLACEHOLDER.sub(lambda m: f"000{m.group(1)}000", bytecode)
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return "0x" + keccak(hexstr=bytecode).hex()


def compute_version(bytecode: str) -> str:
    """
    Derive the implementation version of a contract from its bytecode.

    Builds of the same logic that differ only in compiler metadata share a
    version; any change in the logic changes it.

    Args:
        bytecode: Creation bytecode as found in the compiled artifact

    Returns:
        0x-prefixed keccak-256 of the bytecode without metadata
    """
    return hash_bytecode(trim_bytecode_metadata(bytecode))
