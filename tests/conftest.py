import json
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

from modcore.core.logging import DevFormatter, JsonFormatter
from modcore.core.logging.setup import NO_PROPAGATE



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



def makeManifest(uniqueName: str, **overrides: Any) -> dict[str, Any]:
    author, _, name = uniqueName.partition(".")
    manifest: dict[str, Any] = {
        "uniqueName": uniqueName,
        "name": name or uniqueName,
        "author": author,
        "version": "1.0.0",
    }
    manifest.update(overrides)
    return manifest



def writeMod(
    modsPath: Path,
    folder: str,
    manifest: dict[str, Any] | str,
    *,
    enabled: bool | None = None,
) -> Path:
    """Write a mod folder. `manifest` may be raw text to simulate hand-edited files."""
    modDir = modsPath / folder
    modDir.mkdir(parents=True, exist_ok=True)
    text = manifest if isinstance(manifest, str) else json.dumps(manifest, indent=2)
    (modDir / "manifest.json").write_text(text, encoding="utf-8")
    if enabled is not None:
        (modDir / "config.json").write_text(json.dumps({"enabled": enabled, "settings": {}}), encoding="utf-8")
    return modDir



@pytest.fixture()
def owmlPath(tmp_path: Path) -> Path:
    path = tmp_path / "OWML"
    path.mkdir()
    return path



@pytest.fixture()
def modsPath(owmlPath: Path) -> Path:
    path = owmlPath / "Mods"
    path.mkdir()
    return path



@pytest.fixture()
def restoreRootLogger():
    """Yields the root logger and removes whatever configureLogging attached to it."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (DevFormatter, JsonFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = True
