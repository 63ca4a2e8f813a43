# modcore/semver/__init__.py
from .semver import (
    ModVersion,
    parseModVersion,
    tryParseModVersion,
    fixVersion,
    compareVersions,
    isNewerVersion,
)

__all__ = [
    "ModVersion",
    "parseModVersion",
    "tryParseModVersion",
    "fixVersion",
    "compareVersions",
    "isNewerVersion",
]
