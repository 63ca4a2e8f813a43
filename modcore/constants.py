# modcore/constants.py
from __future__ import annotations

__all__ = [
    "OWML_UNIQUE_NAME",
    "OWML_MANIFEST_NAME",
    "MOD_MANIFEST_NAME",
    "MOD_CONFIG_NAME",
    "MODS_DIR_NAME",
    "DEFAULT_DATABASE_URL",
]



# Unique name of the loader runtime. It is never looked up in the regular catalog.
OWML_UNIQUE_NAME = "Alek.OWML"

# Manifest of the loader runtime, found directly in the OWML folder.
OWML_MANIFEST_NAME = "OWML.Manifest.json"

# Per-mod files, found in every mod folder.
MOD_MANIFEST_NAME = "manifest.json"
MOD_CONFIG_NAME = "config.json"

# Subfolder of the OWML folder that holds installed mods.
MODS_DIR_NAME = "Mods"

DEFAULT_DATABASE_URL = "https://ow-mods.github.io/ow-mod-db/database.json"
