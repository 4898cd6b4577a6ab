class MintPipelineError(Exception):
    pass


class ConfigurationError(MintPipelineError):
    """Missing or invalid settings. Nothing has been minted when this is raised."""


class ValidationError(MintPipelineError):
    """An asset record breaks a royalty or creator-share invariant."""


class StorageUploadError(MintPipelineError):
    """Image or metadata could not be pinned."""


class AssetReadError(StorageUploadError):
    """The local image file is missing or unreadable."""


class MintError(MintPipelineError):
    """The token-creation transaction failed or was rejected."""
