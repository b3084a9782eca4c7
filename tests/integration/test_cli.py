"""Integration tests for the command line entry point."""

import json
import logging
import shutil
from pathlib import Path
from types import SimpleNamespace

import pytest

from tribe_deployments import cli
from tribe_deployments.cli import build_parser, main
from tribe_deployments.explorer import EtherscanVerifier

FIRST_ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class TestParser:
    """Test command line parsing."""

    def test_deploy_defaults(self):
        args = build_parser().parse_args(["deploy", "--network", "testnet"])

        assert args.contract == "Tribe"
        assert args.contract_type == "tribe"
        assert args.tag == "tribe-token-prod"
        assert args.confirmations == 5
        assert args.is_upgradable is True

    def test_not_upgradable_flag(self):
        args = build_parser().parse_args(["deploy", "--network", "testnet", "--not-upgradable"])
        assert args.is_upgradable is False

    def test_unknown_network_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["deploy", "--network", "ropsten"])


class TestMain:
    """Test the main entry point."""

    def test_accounts_prints_signers(self, tmp_path: Path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert main(["accounts", "--network", "localhost"]) == 0

        lines = capsys.readouterr().out.split()
        assert len(lines) == 20
        assert lines[0] == FIRST_ACCOUNT

    def test_missing_mnemonic_fails(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("TESTNET_MNEMONIC", raising=False)

        assert main(["accounts", "--network", "testnet"]) == 1

    def test_missing_artifact_fails(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main(["deploy", "--network", "localhost"]) == 1
        assert not (tmp_path / "deployments").exists()


class TestDeployWithCustomArtifact:
    """Test deploying an artifact outside the ./artifacts layout."""

    @pytest.fixture
    def elsewhere(self, tmp_path: Path, monkeypatch, chain_factory) -> Path:
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("BSCSCAN_API_KEY", "KEY")
        monkeypatch.setenv("TESTNET_MNEMONIC", "unused")
        monkeypatch.setattr(
            cli, "Web3ChainClient", SimpleNamespace(for_network=lambda network: chain_factory())
        )
        return tmp_path / "elsewhere"

    def test_missing_build_info_disables_verification(
        self, elsewhere: Path, tribe_artifact_path: Path, caplog
    ):
        artifact_path = elsewhere / "Tribe.json"
        artifact_path.parent.mkdir(parents=True)
        shutil.copy(tribe_artifact_path, artifact_path)

        with caplog.at_level(logging.WARNING):
            code = main(["deploy", "--network", "testnet", "--artifact", str(artifact_path)])

        assert code == 0
        assert "Verification disabled" in caplog.text
        with open(elsewhere.parent / "deployments" / "testnet.json") as f:
            assert len(json.load(f)["tribe"]) == 1

    def test_build_info_found_next_to_artifact(
        self, elsewhere: Path, artifacts_root: Path, monkeypatch
    ):
        shutil.copytree(artifacts_root, elsewhere)
        artifact_path = elsewhere / "contracts" / "Tribe.sol" / "Tribe.json"

        built = []
        original = EtherscanVerifier.for_network

        def spy(network, artifact, path=None, **kwargs):
            verifier = original(network, artifact, path, **kwargs)
            built.append((path, verifier))
            return None

        monkeypatch.setattr(cli.EtherscanVerifier, "for_network", spy)

        assert main(["deploy", "--network", "testnet", "--artifact", str(artifact_path)]) == 0

        path, verifier = built[0]
        assert str(path) == str(artifact_path)
        assert verifier.compiler_version == "v0.6.12+commit.27d51765"
