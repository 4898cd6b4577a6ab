import argparse
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

from catalog import AssetRecord, parse_record, read_catalog, validate_record
from config import load_settings
from connect_to_eth import connect_to, load_factory, load_identity
from errors import AssetReadError, ConfigurationError, MintError, StorageUploadError, ValidationError
from ipfs import PinataStorage
from mint_nft import NftFactory, mint_nft
from upload_image import upload_image, upload_metadata

# Failures that happen before anything is sent over the network
LOCAL_ERRORS = (ValidationError, AssetReadError)
ASSET_ERRORS = (ValidationError, StorageUploadError, MintError)


@dataclass
class AssetResult:
    name: str
    file_name: str = ""
    record: Optional[AssetRecord] = None
    image_uri: Optional[str] = None
    metadata_uri: Optional[str] = None
    token_address: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self):
        return self.error is None and self.token_address is not None

    @property
    def label(self):
        return f"{self.name} ({self.file_name})" if self.file_name else self.name


@dataclass
class BatchReport:
    results: List[AssetResult]

    @property
    def succeeded(self):
        return [r for r in self.results if r.ok]

    @property
    def failed(self):
        return [r for r in self.results if not r.ok]

    @property
    def exit_code(self):
        return 1 if self.failed else 0


def mint_asset(record, storage, factory, upload_path, explorer_url=None, result=None):
    """
        Validate, upload the image, upload the metadata and mint one asset.
        Errors propagate; result (if given) is filled in as each step returns.
    """
    if result is None:
        result = AssetResult(record.display_name, record.file_name, record)

    validate_record(record)

    # Step 1 - Upload Image
    result.image_uri = upload_image(storage, upload_path, record.file_name)
    # Step 2 - Upload Metadata
    result.metadata_uri = upload_metadata(storage, result.image_uri, record.mime_type,
                                          record.display_name, record.description, record.attributes)
    # Step 3 - Mint NFT
    minted = mint_nft(factory, result.metadata_uri, record.display_name, record.royalty_basis_points,
                      record.symbol, record.creators, explorer_url)
    result.token_address = minted.token_address
    return result


def _new_result(entry, index):
    if isinstance(entry, AssetRecord):
        return AssetResult(entry.display_name, entry.file_name, entry)
    if isinstance(entry, dict):
        return AssetResult(str(entry.get("displayName", f"catalog entry {index}")), str(entry.get("fileName", "")))
    return AssetResult(f"catalog entry {index}")


def run_batch(catalog, storage, factory, wallet_address, upload_path,
              cooldown_seconds=5, explorer_url=None, sleep=time.sleep):
    """
        Mint every asset in catalog order, one at a time.
        Entries are AssetRecords or raw catalog entries, parsed here so a
        malformed one fails on its own. A failing asset is reported and
        skipped; the rest still run. Assets that reached the network are
        followed by a fixed cooldown.
    """
    results = []
    for index, entry in enumerate(catalog):
        result = _new_result(entry, index)
        results.append(result)
        print(f"Minting {result.name} to an NFT in Wallet {wallet_address}")

        try:
            if result.record is None:
                result.record = parse_record(entry, wallet_address, index)
            mint_asset(result.record, storage, factory, upload_path, explorer_url, result)
        except ASSET_ERRORS as e:
            result.error = e
            print(f"   Failed to mint {result.label}: {e}")
            if isinstance(e, LOCAL_ERRORS):
                continue

        # set timeout to avoid rate limit
        sleep(cooldown_seconds)

    report = BatchReport(results)
    print(f"Done: {len(report.succeeded)} minted, {len(report.failed)} failed")
    for failure in report.failed:
        print(f"   {failure.label}: {failure.error}")
    return report


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Upload images and metadata to IPFS and mint one NFT per catalog entry.")
    parser.add_argument("catalog", nargs="?", help="catalog JSON file (default: CATALOG_PATH or catalog.json)")
    parser.add_argument("--upload-path", help="directory holding the image files (default: UPLOAD_PATH or uploads/)")
    parser.add_argument("--cooldown", type=float, help="seconds to wait between assets (default: COOLDOWN_SECONDS or 5)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    load_dotenv()

    try:
        settings = load_settings()
        account = load_identity(settings.wallet_secret)
        w3 = connect_to(settings.rpc_node)
        contract = load_factory(w3, settings.factory_address)
        catalog = read_catalog(args.catalog or settings.catalog_path)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 2

    if args.cooldown is not None and args.cooldown < 0:
        print("Error: --cooldown must not be negative")
        return 2

    storage = PinataStorage(settings.pinata_api_key, settings.pinata_api_secret, timeout=settings.storage_timeout)
    factory = NftFactory(w3, account, contract)

    report = run_batch(
        catalog,
        storage,
        factory,
        account.address,
        args.upload_path or settings.upload_path,
        cooldown_seconds=settings.cooldown_seconds if args.cooldown is None else args.cooldown,
        explorer_url=settings.explorer_url,
    )
    return report.exit_code


if __name__ == "__main__":
    sys.exit(main())
