# modcore/__init__.py
from .db.local import LocalDatabase
from .mods.local import LocalMod, FailedMod, UnsafeLocalMod
from .mods.remote import RemoteDatabase, RemoteMod
from .updates import checkModNeedsUpdate, planUpdates, updateAll

__all__ = [
    "LocalDatabase",
    "LocalMod",
    "FailedMod",
    "UnsafeLocalMod",
    "RemoteDatabase",
    "RemoteMod",
    "checkModNeedsUpdate",
    "planUpdates",
    "updateAll",
]
