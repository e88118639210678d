# tests/test_task_remote.py

from __future__ import annotations

import httpx
import pytest

from taskview.core.errors import DecodeError, NetworkError
from taskview.tasks.task_models import Task
from taskview.tasks.task_remote import HttpTaskSource

URL = "https://tasks.example.test/todos"


def _source(handler) -> HttpTaskSource:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpTaskSource(URL, client=client)


@pytest.mark.asyncio
async def test_fetch_all_decodes_json_array() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"userId": 1, "id": 1, "title": "Buy milk", "completed": False}])

    tasks = await _source(handler).fetch_all()

    assert tasks == (Task(id=1, title="Buy milk", completed=False),)
    assert len(seen) == 1
    assert seen[0].method == "GET"
    assert str(seen[0].url) == URL


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [404, 500, 503])
async def test_non_2xx_is_network_error(status: int) -> None:
    source = _source(lambda request: httpx.Response(status, json=[]))

    with pytest.raises(NetworkError):
        await source.fetch_all()


@pytest.mark.asyncio
async def test_transport_failure_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError):
        await _source(handler).fetch_all()


@pytest.mark.asyncio
async def test_timeout_is_network_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(NetworkError):
        await _source(handler).fetch_all()


@pytest.mark.asyncio
async def test_non_json_body_is_decode_error() -> None:
    source = _source(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(DecodeError):
        await source.fetch_all()


@pytest.mark.asyncio
async def test_schema_mismatch_is_decode_error() -> None:
    source = _source(lambda request: httpx.Response(200, json={"todos": []}))

    with pytest.raises(DecodeError):
        await source.fetch_all()


@pytest.mark.asyncio
async def test_aclose_leaves_injected_client_open() -> None:
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])))
    source = HttpTaskSource(URL, client=client)

    await source.aclose()

    assert client.is_closed is False
    await client.aclose()


def test_url_is_required() -> None:
    with pytest.raises(ValueError):
        HttpTaskSource("  ")
