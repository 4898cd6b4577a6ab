"""Tests for deploying the factory contract from its artifact"""

import json
from unittest.mock import MagicMock

import pytest

import deploy_factory
from connect_to_eth import DEFAULT_FACTORY_ARTIFACT, get_contract_info
from deploy_factory import deploy_contract, load_artifact
from errors import ConfigurationError
from tests.conftest import WALLET_ADDRESS

TX_HASH = bytes.fromhex("34" * 32)
FACTORY_ADDRESS = "0x" + "fa" * 20


def write_artifact(tmp_path, bytecode="6080"):
    path = tmp_path / "NFTFactory.json"
    path.write_text(json.dumps({"abi": get_contract_info(DEFAULT_FACTORY_ARTIFACT), "bytecode": bytecode}))
    return path


def make_w3(status=1):
    w3 = MagicMock()
    w3.eth.chain_id = 11155111
    w3.eth.get_transaction_count.return_value = 3
    w3.eth.gas_price = 1000
    w3.eth.estimate_gas.return_value = 1500000
    w3.eth.account.sign_transaction.return_value = MagicMock(raw_transaction=b"signed")
    w3.eth.send_raw_transaction.return_value = TX_HASH
    w3.eth.wait_for_transaction_receipt.return_value = MagicMock(status=status, contractAddress=FACTORY_ADDRESS)
    return w3


class TestLoadArtifact:

    def test_shipped_artifact_needs_compiling(self):
        with pytest.raises(ConfigurationError, match="no bytecode"):
            load_artifact(DEFAULT_FACTORY_ARTIFACT)

    def test_bytecode_gets_hex_prefix(self, tmp_path):
        abi, bytecode = load_artifact(write_artifact(tmp_path))
        assert bytecode == "0x6080"
        assert any(item.get("name") == "createNFT" for item in abi)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_artifact(tmp_path / "nope.json")


class TestDeployContract:

    def test_returns_deployed_address(self, tmp_path, capsys):
        w3 = make_w3()
        account = MagicMock(address=WALLET_ADDRESS, key=b"\x11" * 32)

        address = deploy_contract(w3, account, write_artifact(tmp_path))

        assert address == FACTORY_ADDRESS
        assert w3.eth.contract.call_args.kwargs["bytecode"] == "0x6080"
        w3.eth.send_raw_transaction.assert_called_once_with(b"signed")
        assert "0x" + "34" * 32 in capsys.readouterr().out

    def test_reverted_deployment(self, tmp_path):
        w3 = make_w3(status=0)
        account = MagicMock(address=WALLET_ADDRESS, key=b"\x11" * 32)

        with pytest.raises(ConfigurationError, match="reverted"):
            deploy_contract(w3, account, write_artifact(tmp_path))


def test_main_requires_rpc_and_wallet(monkeypatch, capsys):
    monkeypatch.setattr(deploy_factory, "load_dotenv", lambda: None)
    monkeypatch.delenv("RPC_NODE", raising=False)
    monkeypatch.delenv("WALLET", raising=False)

    assert deploy_factory.main() == 2
    assert "RPC_NODE and WALLET" in capsys.readouterr().out
