# modcore/interfaces.py
from __future__ import annotations
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from modcore.config import Config
    from modcore.db.local import LocalDatabase
    from modcore.mods.local import LocalMod
    from modcore.mods.remote import RemoteDatabase, RemoteMod

__all__ = ["AnalyticsEventName", "AnalyticsSink", "ModInstaller"]



class AnalyticsEventName(Enum):
    MOD_UPDATE = "mod_update"



class AnalyticsSink(Protocol):
    """Fire-and-forget event reporting. Failures are logged and otherwise ignored."""

    def sendEvent(self, eventName: AnalyticsEventName, uniqueName: str) -> None: ...



class ModInstaller(Protocol):
    """Downloads and installs mods. Implemented outside modcore."""

    async def installModsParallel(
        self,
        uniqueNames: Sequence[str],
        config: Config,
        remoteDb: RemoteDatabase,
        localDb: LocalDatabase,
    ) -> list[LocalMod]:
        """Install or update the named mods concurrently; return the mods that ended up installed."""
        ...

    async def installOwml(self, config: Config, remoteOwml: RemoteMod, forceReinstall: bool) -> None:
        """Install the given loader runtime release into config.owmlPath."""
        ...
