# modcore/mods/manifest.py
from __future__ import annotations
from pydantic import BaseModel, Field, ConfigDict

__all__ = ["ModWarning", "ModManifest", "ModStubConfig"]



class ModWarning(BaseModel):
    """A warning the mod author wants shown before the mod is first enabled."""
    model_config = ConfigDict(extra="ignore")

    title: str
    body: str



class ModManifest(BaseModel):
    """Represents a validated mod manifest.json."""
    model_config = ConfigDict(extra="ignore")

    uniqueName: str
    name: str
    author: str
    version: str
    filename: str | None = None
    owmlVersion: str | None = None
    dependencies: list[str] | None = None
    conflicts: list[str] | None = None
    pathsToPreserve: list[str] | None = None
    warning: ModWarning | None = None
    donateLink: str | None = None
    donateLinks: list[str] | None = None

    @property
    def authorSegment(self) -> str:
        """The part of uniqueName before the first dot, by convention the author's handle."""
        return self.uniqueName.split(".", 1)[0]



class ModStubConfig(BaseModel):
    """The part of a mod's config.json the manager cares about."""
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    settings: dict[str, object] | None = Field(default=None)
