import pytest
from web3 import Web3

from catalog import AssetRecord, Attribute, Creator
from mint_nft import MintResult

WALLET_ADDRESS = Web3.to_checksum_address("0x" + "ab" * 20)
OTHER_ADDRESS = Web3.to_checksum_address("0x" + "cd" * 20)


class StubStorage:
    """Hands out the given uris in order and records what was pinned."""

    def __init__(self, uris):
        self.uris = list(uris)
        self.calls = []

    def pin_file(self, data, file_name):
        self.calls.append(("file", file_name, data))
        return self.uris.pop(0)

    def pin_json(self, document, name):
        self.calls.append(("json", name, document))
        return self.uris.pop(0)


class StubFactory:

    def __init__(self, addresses, error=None):
        self.addresses = list(addresses)
        self.error = error
        self.calls = []

    def create(self, uri, name, symbol, seller_fee_basis_points, creators):
        self.calls.append((uri, name, symbol, seller_fee_basis_points, creators))
        if self.error is not None:
            raise self.error
        return MintResult(token_address=self.addresses.pop(0))


def make_record(file_name="car1.png", display_name="Mitsubishi Blue", creators=None, royalty=500, **kwargs):
    if creators is None:
        creators = (Creator(WALLET_ADDRESS, 100),)
    fields = dict(
        file_name=file_name,
        display_name=display_name,
        mime_type="image/png",
        description="This is a blue Mitsubishi car",
        attributes=(Attribute("Speed", "Average"), Attribute("Type", "Common")),
        royalty_basis_points=royalty,
        symbol="QNPIY",
        creators=tuple(creators),
    )
    fields.update(kwargs)
    return AssetRecord(**fields)


@pytest.fixture
def upload_dir(tmp_path):
    for name in ("car1.png", "car2.png", "car3.png"):
        (tmp_path / name).write_bytes(b"\x89PNG" + name.encode())
    return tmp_path
