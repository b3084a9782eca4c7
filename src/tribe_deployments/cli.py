"""Command line entry point for tribe-deployments library."""

import argparse
import asyncio
import logging
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .artifacts import get_artifact_path, load_artifact
from .chain import Web3ChainClient
from .config import DeployConfig
from .constants import DEFAULT_CONFIRMATIONS, NETWORK_CONFIG
from .deployments import DeploymentOrchestrator, list_signer_addresses
from .exceptions import DeploymentError
from .explorer import EtherscanVerifier
from .registry import RegistryStore

logger = logging.getLogger("tribe_deployments")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tribe-deployments",
        description="Deploy contracts and record them in the per-network registry",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    deploy = subparsers.add_parser("deploy", help="Deploy a contract")
    deploy.add_argument("--network", required=True, choices=list(NETWORK_CONFIG))
    deploy.add_argument("--contract", default="Tribe", help="Contract name in the artifacts")
    deploy.add_argument("--type", dest="contract_type", default="tribe", help="Registry key")
    deploy.add_argument("--tag", default="tribe-token-prod")
    deploy.add_argument("--artifact", help="Artifact path (defaults to ./artifacts/contracts/<Contract>.sol)")
    deploy.add_argument("--confirmations", type=int, default=DEFAULT_CONFIRMATIONS)
    deploy.add_argument("--not-upgradable", dest="is_upgradable", action="store_false")
    deploy.add_argument("--deployments-dir", help="Registry folder (defaults to ./deployments)")

    accounts = subparsers.add_parser("accounts", help="Print the list of accounts")
    accounts.add_argument("--network", required=True, choices=list(NETWORK_CONFIG))

    return parser


async def _deploy(args: argparse.Namespace) -> None:
    artifact_path = args.artifact or get_artifact_path(args.contract)
    artifact = load_artifact(artifact_path)

    chain = Web3ChainClient.for_network(args.network)
    try:
        explorer = EtherscanVerifier.for_network(args.network, artifact, artifact_path)
    except DeploymentError as e:
        logger.warning("Verification disabled: %s", e)
        explorer = None
    orchestrator = DeploymentOrchestrator(chain, explorer, RegistryStore(args.deployments_dir))

    config = DeployConfig(
        network=args.network,
        contract_type=args.contract_type,
        tag=args.tag,
        is_upgradable=args.is_upgradable,
        confirmations=args.confirmations,
    )
    outcome = await orchestrator.run(config, artifact)
    logger.info(
        "Deployed %s at %s (verification: %s)",
        args.contract_type,
        outcome.record.address,
        outcome.verification.value,
    )


async def _accounts(args: argparse.Namespace) -> None:
    for address in await list_signer_addresses(Web3ChainClient.for_network(args.network)):
        print(address)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "deploy":
            asyncio.run(_deploy(args))
        else:
            asyncio.run(_accounts(args))
    except DeploymentError as e:
        logger.error("%s", e)
        return 1

    return 0
