# modcore/app/state.py
from __future__ import annotations
import asyncio
import logging
from pathlib import Path

from modcore.config import Config
from modcore.core.logging import configureLogging
from modcore.core.locks import Shared
from modcore.db.local import LocalDatabase
from modcore.interfaces import AnalyticsSink, ModInstaller
from modcore.mods.remote import RemoteDatabase
from modcore.updates import updateAll

logger = logging.getLogger(__name__)

__all__ = ["SessionState"]



class SessionState:
    """
    Session-wide databases and config, each behind a reader/writer lock.

    LocalDatabase itself isn't safe for concurrent use; every task that touches
    it goes through here.
    """

    def __init__(
        self,
        config: Config,
        *,
        localDb: LocalDatabase | None = None,
        remoteDb: RemoteDatabase | None = None,
    ) -> None:
        self.config: Shared[Config] = Shared(config)
        self.localDb: Shared[LocalDatabase] = Shared(localDb or LocalDatabase.empty())
        self.remoteDb: Shared[RemoteDatabase] = Shared(remoteDb or RemoteDatabase.empty())

    @classmethod
    def load(cls, path: Path | str | None = None) -> SessionState:
        """
        Start a session from the settings file at `path` (default location when
        None). Logging is configured from the settings before anything else runs.
        Both databases start empty; call the refresh methods to fill them.
        """
        config = Config.get(path)
        configureLogging(devMode=config.devMode, logFile=config.logFile)
        logger.debug("Session started from settings at %s", config.path)
        return cls(config)

    async def refreshLocalDb(self) -> None:
        """Rescan the mods directory, then re-apply the known remote versions."""
        async with self.config.read() as config:
            owmlPath = config.owmlPath
            followSymlinks = config.allowSymlinks

        newDb = await asyncio.to_thread(LocalDatabase.fetch, owmlPath, followSymlinks=followSymlinks)
        async with self.remoteDb.read() as remoteDb:
            newDb.validateUpdates(remoteDb)
        await self.localDb.replace(newDb)

    async def refreshRemoteDb(self) -> None:
        """Fetch the remote database and mark outdated local mods against it."""
        async with self.config.read() as config:
            url = config.databaseUrl

        newRemote = await RemoteDatabase.fetch(url)
        await self.remoteDb.replace(newRemote)
        async with self.localDb.write() as localDb:
            localDb.validateUpdates(newRemote)

    async def updateAll(
        self,
        *,
        installer: ModInstaller,
        analytics: AnalyticsSink | None = None,
        dry: bool = False,
    ) -> bool:
        """Run the bulk update with both databases held for reading."""
        async with self.config.read() as config:
            async with self.localDb.read() as localDb:
                async with self.remoteDb.read() as remoteDb:
                    changed = await updateAll(
                        config,
                        localDb,
                        remoteDb,
                        installer=installer,
                        analytics=analytics,
                        dry=dry,
                    )
        if changed and not dry:
            await self.refreshLocalDb()
        return changed
