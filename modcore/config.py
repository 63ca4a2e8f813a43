# modcore/config.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Any, cast

import json5
from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError

from modcore.constants import DEFAULT_DATABASE_URL
from modcore.core.errors import ConfigError

logger = logging.getLogger(__name__)

__all__ = ["CONFIG_DIR", "CONFIG_PATH", "Config", "deepMerge"]



CONFIG_DIR = Path(os.path.expanduser("~/.modcore"))
CONFIG_PATH = CONFIG_DIR / "settings.json5"



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = {}
        for key, value in first.items():
            out[key] = cast(JsonValue, value)
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], cast(JsonValue, value))
            else:
                out[key] = cast(JsonValue, value)
        return cast(JsonValue, out)

    return cast(JsonValue, second)



class Config(BaseModel):
    """User settings for the mod manager."""
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    owmlPath: str = Field(default_factory=lambda: str(CONFIG_DIR / "OWML"))
    databaseUrl: str = DEFAULT_DATABASE_URL
    # Follow symlinked folders while scanning the mods directory
    allowSymlinks: bool = False
    # DEBUG logging instead of INFO
    devMode: bool = False
    # JSON log file, console only when unset
    logFile: str | None = None
    # Where this config was loaded from / will be saved to
    path: str | None = Field(default=None, exclude=True)

    @classmethod
    def defaultValues(cls) -> dict[str, Any]:
        return cls().model_dump(mode="json")

    @classmethod
    def get(cls, path: Path | str | None = None) -> Config:
        """
        Load the config at `path` (default ~/.modcore/settings.json5) merged over
        the defaults. A missing file gives the defaults. Raises ConfigError when
        the file exists but can't be parsed or holds invalid values.
        """
        filePath = Path(path) if path is not None else CONFIG_PATH
        user: JsonValue = {}
        if filePath.is_file():
            try:
                user = json5.loads(filePath.read_text(encoding="utf-8"))
            except (OSError, ValueError) as err:
                raise ConfigError(f"Failed to parse '{filePath}': {err}") from err
            if not isinstance(user, dict):
                raise ConfigError(f"Config at '{filePath}' must be an object")
        else:
            logger.debug("No config at '%s', using defaults", filePath)

        merged = deepMerge(cast(JsonValue, cls.defaultValues()), user)
        try:
            config = cls.model_validate(merged)
        except ValidationError as err:
            raise ConfigError(f"Invalid config at '{filePath}': {err}") from err
        config.path = str(filePath)
        return config

    def save(self, path: Path | str | None = None) -> Path:
        target = Path(path) if path is not None else Path(self.path) if self.path else CONFIG_PATH
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            json5.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        self.path = str(target)
        logger.debug("Config saved to '%s'", target)
        return target
