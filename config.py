import os
from dataclasses import dataclass

from errors import ConfigurationError

REQUIRED_VARIABLES = (
    "RPC_NODE",
    "WALLET",
    "NFT_FACTORY_ADDRESS",
    "PINATA_API_KEY",
    "PINATA_SECRET_API_KEY",
)

DEFAULT_UPLOAD_PATH = "uploads/"
DEFAULT_CATALOG_PATH = "catalog.json"
DEFAULT_COOLDOWN_SECONDS = 5.0  # stay under the pinning and RPC rate limits
DEFAULT_STORAGE_TIMEOUT = 60.0
DEFAULT_EXPLORER_URL = "https://sepolia.etherscan.io"


@dataclass(frozen=True)
class Settings:
    rpc_node: str
    wallet_secret: str
    factory_address: str
    pinata_api_key: str
    pinata_api_secret: str
    upload_path: str = DEFAULT_UPLOAD_PATH
    catalog_path: str = DEFAULT_CATALOG_PATH
    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS
    storage_timeout: float = DEFAULT_STORAGE_TIMEOUT
    explorer_url: str = DEFAULT_EXPLORER_URL


def _get(environ, name):
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip().strip('"')
    return value or None


def _get_seconds(environ, name, default):
    value = _get(environ, name)
    if value is None:
        return default
    try:
        seconds = float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {value!r}")
    if seconds < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value!r}")
    return seconds


def load_settings(environ=None):
    """
        Read the minting settings from the environment.
        Call dotenv.load_dotenv() first if a .env file should be honoured.
        Every missing required variable is reported in a single error.
    """
    if environ is None:
        environ = os.environ

    missing = [name for name in REQUIRED_VARIABLES if _get(environ, name) is None]
    if missing:
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

    return Settings(
        rpc_node=_get(environ, "RPC_NODE"),
        wallet_secret=_get(environ, "WALLET"),
        factory_address=_get(environ, "NFT_FACTORY_ADDRESS"),
        pinata_api_key=_get(environ, "PINATA_API_KEY"),
        pinata_api_secret=_get(environ, "PINATA_SECRET_API_KEY"),
        upload_path=_get(environ, "UPLOAD_PATH") or DEFAULT_UPLOAD_PATH,
        catalog_path=_get(environ, "CATALOG_PATH") or DEFAULT_CATALOG_PATH,
        cooldown_seconds=_get_seconds(environ, "COOLDOWN_SECONDS", DEFAULT_COOLDOWN_SECONDS),
        storage_timeout=_get_seconds(environ, "STORAGE_TIMEOUT", DEFAULT_STORAGE_TIMEOUT),
        explorer_url=(_get(environ, "EXPLORER_URL") or DEFAULT_EXPLORER_URL).rstrip("/"),
    )
