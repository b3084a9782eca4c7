"""Configuration constants for tribe-deployments library."""

# Confirmation depth awaited before explorer verification
DEFAULT_CONFIRMATIONS = 5

# Stored in place of a missing or empty deployment tag
UNTAGGED = "untagged"

# Registry files live under <cwd>/deployments/<network>.json
DEPLOYMENTS_FOLDER = "deployments"

# Hardhat-style HD wallet derivation for mnemonic accounts
HD_PATH_PREFIX = "m/44'/60'/0'/0"
DEFAULT_SIGNER_COUNT = 20

# Well-known development mnemonic used by local hardhat nodes
LOCALHOST_MNEMONIC = "test test test test test test test test test test test junk"

# Network configuration; explorers are Etherscan-compatible (BscScan)
NETWORK_CONFIG = {
    "mainnet": {
        "chain_id": 56,
        "chain_name": "BNB Smart Chain",
        "rpc_url": "https://bsc-dataseed.binance.org/",
        "mnemonic_env": "MAINNET_MNEMONIC",
        "block_explorer_url": "https://bscscan.com",
        "explorer_api_url": "https://api.bscscan.com/api",
        "explorer_api_key_env": "BSCSCAN_API_KEY",
    },
    "testnet": {
        "chain_id": 97,
        "chain_name": "BNB Smart Chain Testnet",
        "rpc_url": "https://data-seed-prebsc-1-s1.binance.org:8545/",
        "mnemonic_env": "TESTNET_MNEMONIC",
        "block_explorer_url": "https://testnet.bscscan.com",
        "explorer_api_url": "https://api-testnet.bscscan.com/api",
        "explorer_api_key_env": "BSCSCAN_API_KEY",
    },
    "localhost": {
        "chain_id": 1776,
        "chain_name": "Local Hardhat Node",
        "rpc_url": "http://127.0.0.1:8545",
        "mnemonic_env": None,  # always LOCALHOST_MNEMONIC
        "block_explorer_url": None,
        "explorer_api_url": None,
        "explorer_api_key_env": None,
    },
}
