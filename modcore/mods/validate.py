# modcore/mods/validate.py
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING

from modcore.mods.local import (
    ConflictingMod,
    DisabledDep,
    LocalMod,
    MissingDep,
    MissingDll,
    ModValidationError,
)

if TYPE_CHECKING:
    from modcore.db.local import LocalDatabase

__all__ = ["checkMod"]



def checkMod(localMod: LocalMod, db: LocalDatabase) -> list[ModValidationError]:
    """
    Derive the validation errors of `localMod` against the rest of `db`.

    Rules:
      - every declared dependency must be a valid mod in the database (MissingDep)
      - when localMod is enabled, its dependencies must be enabled too (DisabledDep)
      - when localMod is enabled, no mod it declares a conflict with may be enabled (ConflictingMod)
      - a declared `filename` must exist in the mod folder (MissingDll)

    Only direct declarations are inspected, so dependency cycles are harmless.
    """
    errors: list[ModValidationError] = []
    manifest = localMod.manifest

    for depName in manifest.dependencies or []:
        depMod = db.getMod(depName)
        if depMod is None:
            errors.append(MissingDep(depName))
        elif localMod.enabled and not depMod.enabled:
            errors.append(DisabledDep(depName))

    if localMod.enabled:
        for conflictName in manifest.conflicts or []:
            if conflictName == manifest.uniqueName:
                continue
            other = db.getMod(conflictName)
            if other is not None and other.enabled:
                errors.append(ConflictingMod(conflictName))

    if manifest.filename:
        dllPath = Path(localMod.modPath) / manifest.filename
        if not dllPath.is_file():
            errors.append(MissingDll(str(dllPath)))

    return errors
