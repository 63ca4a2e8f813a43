# modcore/mods/toggle.py
from __future__ import annotations
import logging
from pathlib import Path

from pydantic import ValidationError

from modcore.constants import MOD_CONFIG_NAME
from modcore.core.errors import ModConfigError
from modcore.core.jsonutils import fixJsonFile, readJsonFile
from modcore.mods.manifest import ModStubConfig

logger = logging.getLogger(__name__)

__all__ = ["getModEnabled"]



def getModEnabled(modPath: Path | str, *, configName: str = MOD_CONFIG_NAME) -> bool:
    """
    Read the enabled flag of the mod in `modPath` from its config.json.

    A mod without a config.json has never been toggled and counts as enabled.
    Raises ModConfigError if the file exists but can't be read.
    """
    configPath = Path(modPath) / configName
    if not configPath.is_file():
        return True

    fixJsonFile(configPath)
    try:
        raw = readJsonFile(configPath)
        return ModStubConfig.model_validate(raw).enabled
    except (OSError, ValueError) as err:
        # pydantic.ValidationError is a ValueError
        kind = "Invalid" if isinstance(err, ValidationError) else "Unreadable"
        raise ModConfigError(f"{kind} mod config at '{configPath}': {err}") from err
