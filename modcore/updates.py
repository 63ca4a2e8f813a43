# modcore/updates.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from modcore.constants import OWML_UNIQUE_NAME
from modcore.db.local import LocalDatabase
from modcore.interfaces import AnalyticsEventName, AnalyticsSink, ModInstaller
from modcore.mods.local import LocalMod
from modcore.mods.remote import RemoteDatabase, RemoteMod
from modcore.semver.semver import isNewerVersion

if TYPE_CHECKING:
    from modcore.config import Config

logger = logging.getLogger(__name__)

__all__ = ["UpdatePlan", "checkModNeedsUpdate", "planUpdates", "updateAll"]



@dataclass
class UpdatePlan:
    # Remote entries of every regular mod that has a newer version available
    mods: list[RemoteMod] = field(default_factory=list)
    # The loader runtime as currently installed, if it is
    owml: LocalMod | None = None
    # Remote loader runtime release, set only when it needs installing
    remoteOwml: RemoteMod | None = None

    @property
    def owmlNeedsUpdate(self) -> bool:
        return self.remoteOwml is not None

    @property
    def hasChanges(self) -> bool:
        return self.owmlNeedsUpdate or bool(self.mods)



def checkModNeedsUpdate(
    localMod: LocalMod,
    remoteDb: RemoteDatabase,
    *,
    owmlUniqueName: str = OWML_UNIQUE_NAME,
) -> tuple[bool, RemoteMod | None]:
    """
    Check a local mod against the remote database.

    Returns (needsUpdate, remoteMod). remoteMod is None when the mod has no
    remote counterpart, in which case needsUpdate is False.
    """
    if localMod.uniqueName == owmlUniqueName:
        remoteMod = remoteDb.getOwml()
    else:
        remoteMod = remoteDb.getMod(localMod.uniqueName)
    if remoteMod is None:
        return False, None
    return isNewerVersion(remoteMod.version, localMod.manifest.version), remoteMod



def planUpdates(config: Config, localDb: LocalDatabase, remoteDb: RemoteDatabase) -> UpdatePlan:
    """Work out what updateAll would install, without touching anything."""
    plan = UpdatePlan()

    for localMod in localDb.valid():
        needsUpdate, remoteMod = checkModNeedsUpdate(localMod, remoteDb)
        if needsUpdate and remoteMod is not None:
            logger.info("%s: %s -> %s", localMod.manifest.name, localMod.manifest.version, remoteMod.version)
            plan.mods.append(remoteMod)

    plan.owml = LocalDatabase.getOwml(config.owmlPath)
    if plan.owml is not None:
        needsUpdate, remoteOwml = checkModNeedsUpdate(plan.owml, remoteDb)
        if needsUpdate and remoteOwml is not None:
            logger.info("OWML: %s -> %s", plan.owml.manifest.version, remoteOwml.version)
            plan.remoteOwml = remoteOwml

    return plan



def _reportUpdated(analytics: AnalyticsSink | None, updated: list[LocalMod]) -> None:
    for localMod in updated:
        logger.info("Updated %s to %s", localMod.uniqueName, localMod.manifest.version)
        if analytics is None:
            continue
        try:
            analytics.sendEvent(AnalyticsEventName.MOD_UPDATE, localMod.uniqueName)
        except Exception as err:
            logger.debug("Analytics event for %s dropped: %s", localMod.uniqueName, err)



async def updateAll(
    config: Config,
    localDb: LocalDatabase,
    remoteDb: RemoteDatabase,
    *,
    installer: ModInstaller,
    analytics: AnalyticsSink | None = None,
    dry: bool = False,
) -> bool:
    """
    Check every mod *and OWML* for updates and install them.

    OWML is updated whenever it's outdated, even in a dry run, since every other
    mod needs it. With `dry` the regular mods are only reported.

    Returns whether anything needed updating. Installer errors propagate.
    """
    plan = planUpdates(config, localDb, remoteDb)

    if plan.remoteOwml is not None:
        await installer.installOwml(config, plan.remoteOwml, False)

    if not plan.mods:
        return plan.owmlNeedsUpdate

    if dry:
        logger.info("Dry run, %d mod(s) left as they are", len(plan.mods))
        return True

    uniqueNames = [remoteMod.uniqueName for remoteMod in plan.mods]
    updated = await installer.installModsParallel(uniqueNames, config, remoteDb, localDb)
    _reportUpdated(analytics, updated)
    return True
