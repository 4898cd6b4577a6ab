import os

from errors import AssetReadError


def upload_image(storage, base_path, file_name):
    """
        Read the image at base_path/file_name and pin it.
        Returns the content-addressed uri of the image.
    """
    print("Step 1 - Uploading Image")
    file_path = os.path.join(base_path, file_name)
    try:
        with open(file_path, "rb") as f:
            img_bytes = f.read()
    except OSError as e:
        raise AssetReadError(f"Failed to read image {file_path}: {e}") from e

    img_uri = storage.pin_file(img_bytes, file_name)
    print(f"   Image URI: {img_uri}")
    return img_uri


def build_metadata(img_uri, img_type, nft_name, description, attributes):
    # wallets and marketplaces read exactly these keys
    return {
        "name": nft_name,
        "description": description,
        "image": img_uri,
        "attributes": [{"trait_type": a.trait_type, "value": a.value} for a in attributes],
        "properties": {
            "files": [
                {
                    "type": img_type,
                    "uri": img_uri,
                },
            ]
        },
    }


def upload_metadata(storage, img_uri, img_type, nft_name, description, attributes):
    print("Step 2 - Uploading Metadata")
    nft_metadata = build_metadata(img_uri, img_type, nft_name, description, attributes)
    metadata_uri = storage.pin_json(nft_metadata, f"{nft_name}.json")
    print(f"   Metadata URI: {metadata_uri}")
    return metadata_uri
