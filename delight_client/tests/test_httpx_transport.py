import asyncio

import httpx
import pytest

from delight_client.domain.exceptions import InvalidUrlError, RequestError
from delight_client.transport import HttpxTransport, create_transport
from delight_client.transport.base import HttpRequest


def test_httpx_transport_owned_client(monkeypatch):
    captured = {}

    class Resp:
        status_code = 500
        content = b'{"error": {"message": "m", "type": "t"}}'
        headers = {"content-type": "application/json"}

    class AsyncClient:
        def __init__(self, *a, **kw):
            captured["init"] = kw

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def request(self, method, url, headers=None, content=None):
            captured.update(method=method, url=url, headers=headers, content=content)
            return Resp()

    monkeypatch.setattr("httpx.AsyncClient", AsyncClient)
    t = HttpxTransport(timeout=5.0)
    resp = asyncio.run(
        t.send(HttpRequest("POST", "https://x.test/a/", {"Content-Type": "application/json"}, b"{}"))
    )
    assert resp.status_code == 500
    assert resp.is_success is False
    assert resp.content.startswith(b'{"error"')
    assert captured["init"] == {"timeout": 5.0, "trust_env": False}
    assert captured["method"] == "POST"
    assert captured["headers"] == {"Content-Type": "application/json"}
    assert captured["content"] == b"{}"


def test_httpx_transport_maps_network_errors(monkeypatch):
    class AsyncClient:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def request(self, method, url, **_):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("httpx.AsyncClient", AsyncClient)
    with pytest.raises(RequestError) as exc:
        asyncio.run(HttpxTransport().send(HttpRequest("GET", "https://x.test/p/")))
    assert isinstance(exc.value.cause, httpx.ConnectError)
    assert exc.value.extra["url"] == "https://x.test/p/"


def test_httpx_transport_shared_client():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"uuid": "u", "completed": True})

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await HttpxTransport(client=client).send(HttpRequest("GET", "https://x.test/poll/1/"))

    resp = asyncio.run(scenario())
    assert resp.is_success
    assert b'"completed"' in resp.content
    assert seen[0].method == "GET"
    assert str(seen[0].url) == "https://x.test/poll/1/"


def test_httpx_transport_invalid_url(monkeypatch):
    class AsyncClient:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def request(self, method, url, **_):
            raise httpx.InvalidURL("bad port")

    monkeypatch.setattr("httpx.AsyncClient", AsyncClient)
    with pytest.raises(InvalidUrlError):
        asyncio.run(HttpxTransport().send(HttpRequest("GET", "https://x.test:99999/")))


def test_create_transport_uses_settings_timeout():
    class SettingsStub:
        http_timeout = 7.5

    t = create_transport(SettingsStub())
    assert isinstance(t, HttpxTransport)
    assert t._timeout == 7.5
