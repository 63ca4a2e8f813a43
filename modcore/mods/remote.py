# modcore/mods/remote.py
from __future__ import annotations
import logging
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from modcore.constants import OWML_UNIQUE_NAME
from modcore.core.errors import CatalogFetchError
from modcore.http.client import request

logger = logging.getLogger(__name__)

__all__ = ["RemoteModPrerelease", "RemoteMod", "RemoteDatabase"]



class RemoteModPrerelease(BaseModel):
    model_config = ConfigDict(extra="ignore")

    downloadUrl: str
    version: str



class RemoteMod(BaseModel):
    """One entry of the remote mod database."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    uniqueName: str
    name: str = ""
    author: str = ""
    version: str
    downloadUrl: str = ""
    downloadCount: int = 0
    description: str = ""
    slug: str = ""
    repo: str = ""
    required: bool | None = None
    parent: str | None = None
    prerelease: RemoteModPrerelease | None = None
    alpha: bool | None = None
    tags: list[str] = Field(default_factory=list)



class RemoteDatabase:
    """
    Read-only snapshot of the remote mod database, keyed by unique name.

    The loader runtime is part of the same listing but is looked up through
    getOwml() rather than getMod().
    """

    def __init__(self, mods: Mapping[str, RemoteMod] | None = None, *, owmlUniqueName: str = OWML_UNIQUE_NAME) -> None:
        self._mods: dict[str, RemoteMod] = dict(mods or {})
        self._owmlUniqueName = owmlUniqueName

    @classmethod
    def empty(cls) -> RemoteDatabase:
        return cls()

    @classmethod
    def fromMods(cls, mods: Iterable[RemoteMod], **kwargs: Any) -> RemoteDatabase:
        return cls({remoteMod.uniqueName: remoteMod for remoteMod in mods}, **kwargs)

    @classmethod
    def fromJson(cls, data: Mapping[str, Any], **kwargs: Any) -> RemoteDatabase:
        """
        Build from the published database shape:
            {"releases": [...], "alphaReleases": [...]}
        Later entries win on unique name collisions.
        """
        releases = data.get("releases") or []
        alphaReleases = data.get("alphaReleases") or []
        mods = [RemoteMod.model_validate(raw) for raw in [*releases, *alphaReleases]]
        return cls.fromMods(mods, **kwargs)

    @classmethod
    async def fetch(cls, url: str, **kwargs: Any) -> RemoteDatabase:
        """
        Download and parse the remote database.

        Raises CatalogFetchError on a non-2xx answer; transport errors from the
        HTTP client propagate unchanged.
        """
        logger.debug("Fetching remote database from %s", url)
        resp = await request("GET", url, headers={"Accept": "application/json"})
        if not resp.ok:
            raise CatalogFetchError(url, resp.status, resp.text)
        data = resp.json()
        db = cls.fromJson(data, **kwargs)
        logger.info("Remote database fetched: %d mods", len(db))
        return db

    @property
    def owmlUniqueName(self) -> str:
        return self._owmlUniqueName

    def getMod(self, uniqueName: str) -> RemoteMod | None:
        return self._mods.get(uniqueName)

    def getOwml(self) -> RemoteMod | None:
        return self._mods.get(self._owmlUniqueName)

    def all(self) -> Iterator[RemoteMod]:
        return iter(self._mods.values())

    def __len__(self) -> int:
        return len(self._mods)

    def __contains__(self, uniqueName: object) -> bool:
        return uniqueName in self._mods
