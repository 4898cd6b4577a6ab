import json
import os
import sys

from dotenv import load_dotenv
from web3 import Web3

from connect_to_eth import DEFAULT_FACTORY_ARTIFACT, connect_to, load_identity
from errors import ConfigurationError

# No need to install_solc or use py-solc-x compilation here
# since the artifact holds the bytecode compiled from contracts/NFTFactory.sol.


def load_artifact(artifact_path):
    try:
        with open(artifact_path, "r") as f:
            contract_artifact = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to read contract artifact {artifact_path}: {e}") from e

    bytecode = contract_artifact.get("bytecode") if isinstance(contract_artifact, dict) else None
    if not bytecode:
        raise ConfigurationError(
            f"{artifact_path} has no bytecode. Compile contracts/NFTFactory.sol and add its bytecode to the artifact.")

    # Ensure bytecode is a hex string (Remix usually provides it this way)
    if not bytecode.startswith('0x'):
        bytecode = '0x' + bytecode
    return contract_artifact["abi"], bytecode


def deploy_contract(w3, account, artifact_path=DEFAULT_FACTORY_ARTIFACT):
    """
        Deploys the NFT factory from its compiled artifact.
        Returns the address to put in NFT_FACTORY_ADDRESS.
    """
    abi, bytecode = load_artifact(artifact_path)
    print(f"Deploying NFTFactory to chain ID {w3.eth.chain_id}")

    Contract = w3.eth.contract(abi=abi, bytecode=bytecode)
    transaction = Contract.constructor().build_transaction({
        'chainId': w3.eth.chain_id,
        'from': account.address,
        'nonce': w3.eth.get_transaction_count(account.address),
        'gasPrice': w3.eth.gas_price
    })
    transaction['gas'] = w3.eth.estimate_gas(transaction)

    signed_txn = w3.eth.account.sign_transaction(transaction, private_key=account.key)
    tx_hash = w3.eth.send_raw_transaction(signed_txn.raw_transaction)
    print(f"Deployment transaction hash: {Web3.to_hex(tx_hash)}")

    tx_receipt = w3.eth.wait_for_transaction_receipt(tx_hash)
    if tx_receipt.status != 1:
        raise ConfigurationError(f"Factory deployment reverted, tx {Web3.to_hex(tx_hash)}")

    print(f"NFTFactory deployed at address: {tx_receipt.contractAddress}")
    return tx_receipt.contractAddress


def main():
    load_dotenv()
    rpc_node = os.environ.get("RPC_NODE")
    secret = os.environ.get("WALLET")
    if not rpc_node or not secret:
        print("Error: RPC_NODE and WALLET must be set")
        return 2

    try:
        account = load_identity(secret)
        w3 = connect_to(rpc_node)
        deploy_contract(w3, account)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
