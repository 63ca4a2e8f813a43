# modcore/mods/local.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TypeAlias, Union

from modcore.mods.manifest import ModManifest

__all__ = [
    "MissingDep",
    "DisabledDep",
    "ConflictingMod",
    "MissingDll",
    "InvalidManifest",
    "DuplicateMod",
    "Outdated",
    "ModValidationError",
    "LocalMod",
    "FailedMod",
    "UnsafeLocalMod",
]



# ----- Validation errors -----
# Recorded on mods, never raised.

@dataclass(frozen=True, slots=True)
class MissingDep:
    uniqueName: str

    def __str__(self) -> str:
        return f"Missing dependency: {self.uniqueName}"



@dataclass(frozen=True, slots=True)
class DisabledDep:
    uniqueName: str

    def __str__(self) -> str:
        return f"Dependency is disabled: {self.uniqueName}"



@dataclass(frozen=True, slots=True)
class ConflictingMod:
    uniqueName: str

    def __str__(self) -> str:
        return f"Conflicts with enabled mod: {self.uniqueName}"



@dataclass(frozen=True, slots=True)
class MissingDll:
    path: str

    def __str__(self) -> str:
        return f"Mod DLL not found: {self.path}"



@dataclass(frozen=True, slots=True)
class InvalidManifest:
    message: str

    def __str__(self) -> str:
        return f"Invalid manifest: {self.message}"



@dataclass(frozen=True, slots=True)
class DuplicateMod:
    # Folder of the mod that claimed the unique name first
    otherPath: str

    def __str__(self) -> str:
        return f"Duplicate of mod at {self.otherPath}"



@dataclass(frozen=True, slots=True)
class Outdated:
    # Version available in the remote database
    remoteVersion: str

    def __str__(self) -> str:
        return f"Outdated, {self.remoteVersion} is available"



ModValidationError: TypeAlias = Union[
    MissingDep,
    DisabledDep,
    ConflictingMod,
    MissingDll,
    InvalidManifest,
    DuplicateMod,
    Outdated,
]



# ----- Mods -----

@dataclass(slots=True)
class LocalMod:
    """A mod folder whose manifest loaded successfully."""
    manifest: ModManifest
    # Absolute path of the folder holding the manifest
    modPath: str
    enabled: bool
    errors: list[ModValidationError] = field(default_factory=list)

    @property
    def uniqueName(self) -> str:
        return self.manifest.uniqueName



@dataclass(slots=True)
class FailedMod:
    """A mod folder that could not become a LocalMod."""
    # Absolute path of the folder holding the manifest
    modPath: str
    # modPath relative to the mods directory, for display
    displayPath: str
    error: InvalidManifest | DuplicateMod



UnsafeLocalMod: TypeAlias = Union[LocalMod, FailedMod]
