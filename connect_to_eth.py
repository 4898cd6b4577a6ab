import json
import os

from eth_account import Account
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware  # Necessary for POA chains
from web3.providers.rpc import HTTPProvider

from errors import ConfigurationError

DEFAULT_FACTORY_ARTIFACT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "artifacts", "NFTFactory.json")


def connect_to(rpc_url):
    w3 = Web3(HTTPProvider(rpc_url))
    # inject the poa compatibility middleware to the innermost layer
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    if not w3.is_connected():
        raise ConfigurationError(f"Failed to connect to provider at {rpc_url}")
    return w3


def load_identity(secret_key):
    """
        Build the signing account from its secret key (hex, 0x prefix optional).
        The same account object is handed to every call that signs.
    """
    try:
        return Account.from_key(secret_key)
    except (ValueError, TypeError) as e:
        raise ConfigurationError("WALLET is not a valid private key") from e


def get_contract_info(artifact_path):
    """
        Load the ABI from a compiled contract artifact.
        The artifact is either the bare ABI list or an object with an "abi" key.
    """
    try:
        with open(artifact_path, "r") as f:
            artifact = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to read contract artifact {artifact_path}: {e}") from e

    abi = artifact["abi"] if isinstance(artifact, dict) else artifact
    if not isinstance(abi, list):
        raise ConfigurationError(f"Contract artifact {artifact_path} has no ABI")
    return abi


def load_factory(w3, address, artifact_path=DEFAULT_FACTORY_ARTIFACT):
    if not Web3.is_address(address):
        raise ConfigurationError(f"NFT_FACTORY_ADDRESS {address!r} is not a valid address")

    abi = get_contract_info(artifact_path)
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
