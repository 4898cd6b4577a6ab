import json

import requests

from errors import StorageUploadError

PINATA_BASE_URL = "https://api.pinata.cloud/"
PIN_FILE_ENDPOINT = "pinning/pinFileToIPFS"
PIN_JSON_ENDPOINT = "pinning/pinJSONToIPFS"
IPFS_PREFIX = "ipfs://"


class PinataStorage:
    """
        Pins raw files and JSON documents to IPFS through Pinata.
        Both calls return a content-addressed uri of the form ipfs://<cid>.
    """

    def __init__(self, api_key, api_secret, timeout=60, base_url=PINATA_BASE_URL):
        self.base_url = base_url
        self.timeout = timeout
        self.headers = {"pinata_api_key": api_key, "pinata_secret_api_key": api_secret}

    def pin_file(self, data, file_name):
        assert isinstance(data, bytes), "pin_file expects the file contents as bytes"

        files = {"file": (file_name, data)}
        payload = {"pinataMetadata": json.dumps({"name": file_name})}
        return self._post(PIN_FILE_ENDPOINT, file_name, files=files, data=payload)

    def pin_json(self, document, name):
        assert isinstance(document, dict), "pin_json expects a dictionary"

        body = {"pinataContent": document, "pinataMetadata": {"name": name}}
        return self._post(PIN_JSON_ENDPOINT, name, json=body)

    def _post(self, endpoint, name, **kwargs):
        try:
            response = requests.post(self.base_url + endpoint, headers=self.headers, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            cid = response.json()["IpfsHash"]
        except requests.exceptions.RequestException as e:
            raise StorageUploadError(f"Error uploading {name} to Pinata: {e}") from e
        except (ValueError, KeyError, TypeError) as e:
            raise StorageUploadError(f"Pinata returned no content hash for {name}") from e

        return IPFS_PREFIX + cid
