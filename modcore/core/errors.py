# modcore/core/errors.py
from __future__ import annotations

__all__ = [
    "ModCoreError",
    "PathInvalidError",
    "InvalidManifestError",
    "ModConfigError",
    "ModsDirectoryError",
    "CatalogFetchError",
    "ConfigError",
]



class ModCoreError(Exception):
    """Base class for every error raised by modcore."""
    pass



class PathInvalidError(ModCoreError):
    """Raised when a manifest path has no parent folder to act as the mod root."""
    def __init__(self, path: object):
        super().__init__(f"Mod path not found for manifest '{path}'")
        self.path = path



class InvalidManifestError(ModCoreError):
    """Raised when a manifest can't be read, parsed or doesn't match the expected shape."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message



class ModConfigError(ModCoreError):
    """Raised when a mod's config.json (holding the enabled flag) can't be read."""
    pass



class ModsDirectoryError(ModCoreError):
    """Raised when the mods directory exists but can't be listed."""
    pass



class CatalogFetchError(ModCoreError):
    def __init__(self, url: str, status: int, body: str):
        super().__init__(f"Failed to fetch mod database from '{url}' (HTTP {status}): {body[:200]}")
        self.url = url
        self.status = status
        self.body = body



class ConfigError(ModCoreError):
    pass
