from dataclasses import dataclass

import requests
from web3 import Web3
from web3.exceptions import Web3Exception
from web3.logs import DISCARD

from errors import MintError

# Every token is a one-of-one whose record can never be updated
MAX_SUPPLY = 1
IS_MUTABLE = False


@dataclass(frozen=True)
class MintResult:
    token_address: str
    tx_hash: str = ""


# Helper function to build, sign, and send a transaction to a contract function
def send_transaction(w3, account, contract, function_name, *args):

    tx_params = {
        'chainId': w3.eth.chain_id,
        'from': account.address,
        'nonce': w3.eth.get_transaction_count(account.address),
        'gasPrice': w3.eth.gas_price
    }

    transaction = contract.functions[function_name](*args).build_transaction(tx_params)
    transaction['gas'] = w3.eth.estimate_gas(transaction)

    signed_txn = w3.eth.account.sign_transaction(transaction, private_key=account.key)
    tx_hash = w3.eth.send_raw_transaction(signed_txn.raw_transaction)

    return w3.eth.wait_for_transaction_receipt(tx_hash)


class NftFactory:
    """
        Creates one token per call on the factory contract, signed by account.
        Supply and mutability are fixed here and never taken from the caller.
    """

    def __init__(self, w3, account, contract):
        self.w3 = w3
        self.account = account
        self.contract = contract

    def create(self, uri, name, symbol, seller_fee_basis_points, creators):
        addresses = [creator.address for creator in creators]
        shares = [creator.share for creator in creators]

        try:
            tx_receipt = send_transaction(self.w3, self.account, self.contract, "createNFT",
                                          uri, name, symbol, seller_fee_basis_points,
                                          addresses, shares, MAX_SUPPLY, IS_MUTABLE)
        except (Web3Exception, ValueError, requests.exceptions.RequestException) as e:
            raise MintError(f"createNFT failed for {name}: {e}") from e

        tx_hash = Web3.to_hex(tx_receipt.transactionHash)
        if tx_receipt.status != 1:
            raise MintError(f"createNFT reverted for {name}, tx {tx_hash}")

        events = self.contract.events.NFTCreated().process_receipt(tx_receipt, errors=DISCARD)
        if not events:
            raise MintError(f"No NFTCreated event in tx {tx_hash}")

        return MintResult(token_address=events[0]['args']['token'], tx_hash=tx_hash)


def mint_nft(factory, metadata_uri, name, seller_fee, symbol, creators, explorer_url=None):
    print("Step 3 - Minting NFT")
    result = factory.create(metadata_uri, name, symbol, seller_fee, creators)
    print("   Success!")
    if explorer_url:
        print(f"   Minted NFT: {explorer_url}/address/{result.token_address}")
    else:
        print(f"   Minted NFT: {result.token_address}")
    return result
