import json
import mimetypes
from dataclasses import dataclass
from typing import Tuple

from web3 import Web3

from errors import ConfigurationError, ValidationError

WALLET_PLACEHOLDER = "wallet"
DEFAULT_MIME_TYPE = "image/png"
MAX_BASIS_POINTS = 10000  # 10000 bp = 100%
TOTAL_SHARES = 100


@dataclass(frozen=True)
class Attribute:
    trait_type: str
    value: str


@dataclass(frozen=True)
class Creator:
    address: str
    share: int


@dataclass(frozen=True)
class AssetRecord:
    file_name: str
    display_name: str
    mime_type: str
    description: str
    attributes: Tuple[Attribute, ...]
    royalty_basis_points: int
    symbol: str
    creators: Tuple[Creator, ...]


def _require(entry, key, index):
    if key not in entry:
        raise ValidationError(f"Catalog entry {index} is missing '{key}'")
    return entry[key]


def _as_int(value, key, index):
    # bool is an int subclass but never a valid share or fee
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Catalog entry {index}: '{key}' must be an integer, got {value!r}")
    return value


def _parse_attributes(raw, index):
    if not isinstance(raw, list):
        raise ValidationError(f"Catalog entry {index}: 'attributes' must be a list")

    attributes = []
    for attribute in raw:
        if not isinstance(attribute, dict) or "trait_type" not in attribute or "value" not in attribute:
            raise ValidationError(f"Catalog entry {index}: attributes need 'trait_type' and 'value'")
        attributes.append(Attribute(str(attribute["trait_type"]), str(attribute["value"])))
    return tuple(attributes)


def _parse_creators(raw, wallet_address, index):
    if raw is None:
        return (Creator(wallet_address, TOTAL_SHARES),)
    if not isinstance(raw, list):
        raise ValidationError(f"Catalog entry {index}: 'creators' must be a list")

    creators = []
    for creator in raw:
        if not isinstance(creator, dict):
            raise ValidationError(f"Catalog entry {index}: creators need 'address' and 'share'")
        address = str(_require(creator, "address", index))
        if address == WALLET_PLACEHOLDER:
            address = wallet_address
        if not Web3.is_address(address):
            raise ValidationError(f"Creator {address!r} is not a valid address")
        share = _as_int(_require(creator, "share", index), "share", index)
        # contract calls only accept checksummed addresses
        creators.append(Creator(Web3.to_checksum_address(address), share))
    return tuple(creators)


def parse_record(entry, wallet_address, index=0):
    """
        Turn one catalog entry into an AssetRecord.
        A malformed entry raises ValidationError so only that asset is skipped.
    """
    if not isinstance(entry, dict):
        raise ValidationError(f"Catalog entry {index} must be an object")

    file_name = str(_require(entry, "fileName", index))
    mime_type = entry.get("mimeType") or mimetypes.guess_type(file_name)[0] or DEFAULT_MIME_TYPE

    return AssetRecord(
        file_name=file_name,
        display_name=str(_require(entry, "displayName", index)),
        mime_type=mime_type,
        description=str(entry.get("description", "")),
        attributes=_parse_attributes(entry.get("attributes", []), index),
        royalty_basis_points=_as_int(_require(entry, "sellerFeeBasisPoints", index), "sellerFeeBasisPoints", index),
        symbol=str(_require(entry, "symbol", index)),
        creators=_parse_creators(entry.get("creators"), wallet_address, index),
    )


def read_catalog(path):
    """
        Read the raw catalog entries from a JSON file, keeping declared order.
        The file holds a list of entries or an object with an "assets" list.
        Only an unreadable file or a bad top-level shape is a ConfigurationError.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read catalog {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Catalog {path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        data = data.get("assets")
    if not isinstance(data, list):
        raise ConfigurationError(f"Catalog {path} must hold a list of assets")
    return data


def load_catalog(path, wallet_address):
    # A creator address of "wallet" (or no creators at all) stands for the minting wallet
    return [parse_record(entry, wallet_address, index) for index, entry in enumerate(read_catalog(path))]


def validate_record(record):
    """
        Reject a record before anything is uploaded for it.
        Raises ValidationError naming the first broken rule.
    """
    for field, value in (("fileName", record.file_name), ("displayName", record.display_name), ("symbol", record.symbol)):
        if not value.strip():
            raise ValidationError(f"{field} must not be empty")

    if not 0 <= record.royalty_basis_points <= MAX_BASIS_POINTS:
        raise ValidationError(
            f"sellerFeeBasisPoints must be between 0 and {MAX_BASIS_POINTS}, got {record.royalty_basis_points}")

    if not record.creators:
        raise ValidationError("At least one creator is required")

    for creator in record.creators:
        if not Web3.is_address(creator.address):
            raise ValidationError(f"Creator {creator.address!r} is not a valid address")
        if not Web3.is_checksum_address(creator.address):
            raise ValidationError(f"Creator {creator.address!r} is not checksummed")
        if not 0 <= creator.share <= TOTAL_SHARES:
            raise ValidationError(f"Creator share must be between 0 and {TOTAL_SHARES}, got {creator.share}")

    total = sum(creator.share for creator in record.creators)
    if total != TOTAL_SHARES:
        raise ValidationError(f"Creator shares must sum to {TOTAL_SHARES}, got {total}")
