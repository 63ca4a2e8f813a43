import asyncio

import httpx
import pytest

from modcore.core.errors import CatalogFetchError
from modcore.http import client as http_client
from modcore.mods.remote import RemoteDatabase, RemoteMod


DATABASE_JSON = {
    "releases": [
        {"uniqueName": "Alek.OWML", "name": "OWML", "author": "Alek", "version": "2.9.8", "downloadCount": 10},
        {"uniqueName": "Bwc9876.TimeSaver", "name": "TimeSaver", "author": "Bwc9876", "version": "1.1.1", "someNewField": 1},
    ],
    "alphaReleases": [
        {"uniqueName": "Alpha.Thing", "name": "Thing", "version": "0.0.1", "alpha": True},
    ],
}


def _install_transport(monkeypatch: pytest.MonkeyPatch, handler):
    transport = httpx.MockTransport(handler)
    original_async_client = http_client.httpx.AsyncClient

    def _patchedAsyncClient(*args, **kwargs):
        kwargs["transport"] = transport
        kwargs["http2"] = False
        return original_async_client(*args, **kwargs)

    monkeypatch.setattr(http_client.httpx, "AsyncClient", _patchedAsyncClient)


def test_fromJson_indexes_releases_and_alpha():
    db = RemoteDatabase.fromJson(DATABASE_JSON)

    assert len(db) == 3
    assert db.getMod("Bwc9876.TimeSaver").version == "1.1.1"
    assert db.getMod("Alpha.Thing").alpha is True
    assert "Alpha.Thing" in db
    assert db.getOwml().name == "OWML"


def test_getOwml_uses_configured_unique_name():
    db = RemoteDatabase.fromMods(
        [RemoteMod(uniqueName="Custom.Loader", version="1.0.0")],
        owmlUniqueName="Custom.Loader",
    )
    assert db.getOwml() is not None
    assert RemoteDatabase.empty().getOwml() is None


def test_fetch(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/database.json"
        return httpx.Response(200, json=DATABASE_JSON)

    _install_transport(monkeypatch, handler)

    db = asyncio.run(RemoteDatabase.fetch("https://example.com/database.json"))

    assert db.getMod("Bwc9876.TimeSaver") is not None


def test_fetch_non_json_content_type(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text='{"releases": [{"uniqueName": "A.B", "version": "1"}]}')

    _install_transport(monkeypatch, handler)

    db = asyncio.run(RemoteDatabase.fetch("https://example.com/database.json"))

    assert db.getMod("A.B").version == "1"


def test_fetch_not_found_raises(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="missing")

    _install_transport(monkeypatch, handler)

    with pytest.raises(CatalogFetchError) as excInfo:
        asyncio.run(RemoteDatabase.fetch("https://example.com/database.json"))
    assert excInfo.value.status == 404
