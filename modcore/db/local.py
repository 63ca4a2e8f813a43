# modcore/db/local.py
from __future__ import annotations
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from modcore.constants import MOD_MANIFEST_NAME, MODS_DIR_NAME, OWML_MANIFEST_NAME
from modcore.core.errors import (
    InvalidManifestError,
    ModCoreError,
    ModsDirectoryError,
    PathInvalidError,
)
from modcore.core.jsonutils import fixJsonFile, readJsonFile
from modcore.mods.local import (
    DuplicateMod,
    FailedMod,
    InvalidManifest,
    LocalMod,
    Outdated,
    UnsafeLocalMod,
)
from modcore.mods.manifest import ModManifest
from modcore.mods.search import searchList
from modcore.mods.toggle import getModEnabled
from modcore.mods.validate import checkMod
from modcore.semver.semver import fixVersion

if TYPE_CHECKING:
    from modcore.mods.remote import RemoteDatabase

logger = logging.getLogger(__name__)

__all__ = ["LocalDatabase", "readLocalMod", "readManifest"]

# folder -> enabled flag
EnabledReader = Callable[[Path], bool]



def readManifest(manifestPath: Path) -> ModManifest:
    """
    Repair, parse and shape-check a manifest file. The version is normalized.

    Raises InvalidManifestError carrying the reader/parser diagnostic.
    """
    fixJsonFile(manifestPath)
    try:
        raw = readJsonFile(manifestPath)
        manifest = ModManifest.model_validate(raw)
    except OSError as err:
        raise InvalidManifestError(f"Could not read '{manifestPath}': {err}") from err
    except ValueError as err:
        # json.JSONDecodeError and pydantic.ValidationError both land here
        raise InvalidManifestError(str(err)) from err
    manifest.version = fixVersion(manifest.version)
    return manifest



def readLocalMod(manifestPath: Path | str, *, isEnabled: EnabledReader = getModEnabled) -> LocalMod:
    """
    Read the manifest at `manifestPath` and build the LocalMod it describes.

    The manifest's folder is the mod folder. Raises PathInvalidError if there is
    no such folder, InvalidManifestError if the manifest is unusable and
    ModConfigError if the enabled flag can't be read.
    """
    manifestPath = Path(manifestPath)
    logger.debug("Loading mod with manifest: %s", manifestPath)
    if not manifestPath.name or manifestPath.parent == manifestPath:
        raise PathInvalidError(manifestPath)
    folderPath = manifestPath.parent

    manifest = readManifest(manifestPath)
    return LocalMod(
        manifest=manifest,
        modPath=str(folderPath),
        enabled=isEnabled(folderPath),
        errors=[],
    )



def _findManifests(modsPath: Path, manifestName: str, *, followSymlinks: bool) -> Iterator[Path]:
    """
    Yield every `manifestName` under modsPath, at any depth.

    Within a folder the manifest comes first, then subfolders in case-insensitive
    name order, depth first. Only failing to list modsPath itself is an error.
    """
    pending: list[Path] = [modsPath]
    visited: set[Path] = set()
    while pending:
        current = pending.pop()
        resolved = current.resolve(strict=False)
        if resolved in visited:
            continue
        visited.add(resolved)

        try:
            entries = sorted(current.iterdir(), key=lambda entry: entry.name.lower())
        except OSError as err:
            if current == modsPath:
                raise ModsDirectoryError(f"Failed to read mods directory '{modsPath}': {err}") from err
            logger.warning("Skipping unreadable folder '%s': %s", current, err)
            continue

        subDirs: list[Path] = []
        for entry in entries:
            if entry.is_dir():
                if entry.is_symlink() and not followSymlinks:
                    continue
                subDirs.append(entry)
            elif entry.name == manifestName:
                yield entry

        pending.extend(reversed(subDirs))



class LocalDatabase:
    """
    The mods installed on this machine.

    `mods` maps a unique name to its LocalMod, or the absolute folder path to a
    FailedMod for folders that didn't load or lost a unique name collision.

    Not safe for concurrent use; share it through app.state.SessionState.
    """

    def __init__(self, mods: dict[str, UnsafeLocalMod] | None = None, *, modsPath: Path | None = None) -> None:
        self.mods: dict[str, UnsafeLocalMod] = mods if mods is not None else {}
        # Root the mods were scanned from, if any
        self.modsPath = modsPath

    @classmethod
    def empty(cls) -> LocalDatabase:
        return cls()

    # ----- Construction -----

    @classmethod
    def fetch(
        cls,
        owmlPath: Path | str,
        *,
        modsDirName: str = MODS_DIR_NAME,
        manifestName: str = MOD_MANIFEST_NAME,
        isEnabled: EnabledReader = getModEnabled,
        followSymlinks: bool = False,
    ) -> LocalDatabase:
        """
        Construct a validated database of every mod under `owmlPath / modsDirName`.

        A missing mods directory gives an empty database. Raises ModsDirectoryError
        only when the directory exists but can't be read.
        """
        logger.debug("Begin construction of local db at %s", owmlPath)
        modsPath = Path(owmlPath).absolute() / modsDirName
        if not modsPath.is_dir():
            logger.debug("No mods directory at %s, local db is empty", modsPath)
            return cls()

        db = cls(cls._getLocalMods(modsPath, manifestName, isEnabled, followSymlinks), modsPath=modsPath)
        db.validate()
        logger.info(
            "Local db built from %s: %d valid, %d failed",
            modsPath,
            sum(1 for _ in db.valid()),
            sum(1 for mod in db.all() if isinstance(mod, FailedMod)),
        )
        return db

    @staticmethod
    def _getLocalMods(
        modsPath: Path,
        manifestName: str,
        isEnabled: EnabledReader,
        followSymlinks: bool,
    ) -> dict[str, UnsafeLocalMod]:
        mods: dict[str, UnsafeLocalMod] = {}
        for manifestPath in _findManifests(modsPath, manifestName, followSymlinks=followSymlinks):
            folder = manifestPath.parent
            path = str(folder)
            try:
                displayPath = str(folder.relative_to(modsPath))
            except ValueError:
                displayPath = path

            try:
                localMod = readLocalMod(manifestPath, isEnabled=isEnabled)
            except ModCoreError as err:
                logger.warning("Failed to load mod at %s: %s", path, err)
                mods[path] = FailedMod(
                    modPath=path,
                    displayPath=displayPath,
                    error=InvalidManifest(str(err)),
                )
                continue

            existing = mods.get(localMod.uniqueName)
            if isinstance(existing, LocalMod):
                logger.warning(
                    "Mod at %s has the same unique name (%s) as the mod at %s",
                    path, localMod.uniqueName, existing.modPath,
                )
                mods[path] = FailedMod(
                    modPath=path,
                    displayPath=displayPath,
                    error=DuplicateMod(existing.modPath),
                )
            else:
                mods[localMod.uniqueName] = localMod
        return mods

    @staticmethod
    def getOwml(owmlPath: Path | str, *, manifestName: str = OWML_MANIFEST_NAME) -> LocalMod | None:
        """
        Load the loader runtime as a LocalMod, or None if it isn't installed or
        its manifest is unusable. It is always enabled and starts without errors.
        """
        manifestPath = Path(owmlPath) / manifestName
        if not manifestPath.is_file():
            return None
        try:
            manifest = readManifest(manifestPath)
        except InvalidManifestError as err:
            logger.warning("Failed to load OWML manifest at %s: %s", manifestPath, err)
            return None
        return LocalMod(
            manifest=manifest,
            modPath=str(owmlPath),
            enabled=True,
            errors=[],
        )

    # ----- Queries -----

    def getMod(self, uniqueName: str) -> LocalMod | None:
        """The valid mod with this unique name, or None."""
        localMod = self.mods.get(uniqueName)
        if isinstance(localMod, LocalMod):
            return localMod
        return None

    def getModUnsafe(self, key: str) -> UnsafeLocalMod | None:
        """Any stored entry, by unique name (valid mods) or folder path (failed mods)."""
        return self.mods.get(key)

    def getModMut(self, uniqueName: str) -> LocalMod | None:
        """
        Same as getMod. Kept separate so callers that toggle or rewrite a mod say
        so at the call site.
        """
        return self.getMod(uniqueName)

    def active(self) -> Iterator[LocalMod]:
        return (localMod for localMod in self.valid() if localMod.enabled)

    def valid(self) -> Iterator[LocalMod]:
        return (localMod for localMod in self.all() if isinstance(localMod, LocalMod))

    def invalid(self) -> Iterator[UnsafeLocalMod]:
        """Failed mods, plus enabled mods that carry validation errors."""
        for localMod in self.all():
            if isinstance(localMod, FailedMod):
                yield localMod
            elif isinstance(localMod, LocalMod) and localMod.enabled and localMod.errors:
                yield localMod

    def all(self) -> Iterator[UnsafeLocalMod]:
        return iter(self.mods.values())

    def dependent(self, localMod: LocalMod) -> Iterator[LocalMod]:
        """Mods that directly depend on `localMod`. Not transitive."""
        target = localMod.uniqueName
        return (
            other for other in self.valid()
            if other.manifest.dependencies is not None and target in other.manifest.dependencies
        )

    def search(self, query: str) -> list[UnsafeLocalMod]:
        return searchList(list(self.all()), query, self._searchFields)

    # ----- Validation -----

    def validate(self) -> None:
        """Re-derive the errors of every valid mod. Previous errors are discarded."""
        names = [localMod.uniqueName for localMod in self.valid()]
        for name in names:
            localMod = self.getMod(name)
            assert localMod is not None
            localMod.errors = checkMod(localMod, self)

    def validateUpdates(self, remoteDb: RemoteDatabase) -> None:
        """
        Mark every valid mod with a newer remote version as Outdated.

        Adds to the errors from validate(); calling it again doesn't add a second
        Outdated error.
        """
        from modcore.updates import checkModNeedsUpdate

        for localMod in self.valid():
            needsUpdate, remoteMod = checkModNeedsUpdate(localMod, remoteDb)
            if not needsUpdate or remoteMod is None:
                continue
            if any(isinstance(err, Outdated) for err in localMod.errors):
                continue
            localMod.errors.append(Outdated(remoteMod.version))

    # ----- Search -----

    def _relativePath(self, modPath: str) -> str:
        if self.modsPath is None:
            return modPath
        try:
            return str(Path(modPath).relative_to(self.modsPath))
        except ValueError:
            return modPath

    def _searchFields(self, localMod: UnsafeLocalMod) -> list[str]:
        if isinstance(localMod, LocalMod):
            manifest = localMod.manifest
            return [
                manifest.name,
                manifest.uniqueName,
                manifest.author,
                manifest.authorSegment,
                self._relativePath(localMod.modPath),
            ]
        if isinstance(localMod, FailedMod):
            return [localMod.displayPath, Path(localMod.modPath).name]
        raise TypeError(f"Not a local mod: {type(localMod).__name__}")

    def __len__(self) -> int:
        return len(self.mods)
